"""Thread safety example for msgroute.

One MessagePipeline can be shared by any number of threads. The first
lookup of a category realizes its source once; every later lookup is a
read-locked dictionary hit.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any

from msgroute import InMemoryMessageSource, MessagePipeline, SourceFactory
from msgroute.localization import create_default_factory

constructed: list[str] = []


def counted_memory_source(**options: Any) -> InMemoryMessageSource:
    constructed.append(options.get("source_language", "en_us"))
    return InMemoryMessageSource(**options)


factory: SourceFactory = create_default_factory()
factory.register("counted", counted_memory_source)

pipeline = MessagePipeline(
    {
        "shop*": {
            "type": "counted",
            "messages": {"de": {"shop/cart": {"{n} items": "{n} Artikel"}}},
        },
    },
    factory=factory,
)


def render(index: int) -> str:
    return pipeline.translate("shop/cart", "{n} items", {"n": index}, "de")


if __name__ == "__main__":
    with ThreadPoolExecutor(max_workers=16) as executor:
        results = list(executor.map(render, range(200)))

    print(results[:3])
    # Output: ['0 Artikel', '1 Artikel', '2 Artikel']
    print(f"sources constructed: {len(constructed)}")
    # Output: sources constructed: 1
