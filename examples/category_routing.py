"""Category routing example for msgroute.

Demonstrates exact, prefix and catch-all bindings, lazily realized source
descriptors, runtime registration and the resolution/miss callbacks.
"""

import logging

from msgroute import InMemoryMessageSource, MessagePipeline, NoSourceForCategoryError
from msgroute.localization import MissInfo, ResolutionInfo

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


def on_resolve(info: ResolutionInfo) -> None:
    print(f"  resolved {info.category!r} via {info.kind} pattern {info.pattern!r}")


def on_miss(info: MissInfo) -> None:
    print(f"  missing {info.requested_language} translation for {info.message!r}")


pipeline = MessagePipeline(
    {
        # Exact binding: only the "app/errors" category
        "app/errors": {
            "type": "memory",
            "messages": {"de": {"app/errors": {"Not found": "Nicht gefunden"}}},
        },
        # Prefix binding: every other category starting with "app"
        "app*": {
            "type": "memory",
            "messages": {"de": {"app/forms": {"Submit": "Absenden"}}},
        },
    },
    on_resolve=on_resolve,
    on_miss=on_miss,
)

print("Exact and prefix bindings:")
print(pipeline.translate("app/errors", "Not found", language="de"))
print(pipeline.translate("app/forms", "Submit", language="de"))
print(pipeline.translate("app/forms", "Reset", language="de"))

print("\nUnbound category:")
try:
    pipeline.translate("billing", "Total", language="de")
except NoSourceForCategoryError as e:
    assert e.diagnostic is not None
    print(e.diagnostic.format_error())

print("\nRuntime registration of a catch-all:")
pipeline.register_source(
    "*", InMemoryMessageSource(messages={"de": {"billing": {"Total": "Summe"}}})
)
print(pipeline.translate("billing", "Total", language="de"))

print(f"\n{pipeline!r}")
