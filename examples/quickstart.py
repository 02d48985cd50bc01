"""Quickstart example for msgroute.

This example demonstrates translating messages by category with simple
placeholders and ICU plurals.
"""

from msgroute import InMemoryMessageSource, MessagePipeline

source = InMemoryMessageSource(
    source_language="en_us",
    messages={
        "de": {
            "app": {
                "Hello, {name}!": "Hallo, {name}!",
                "{n, plural, one{# new message} other{# new messages}}": (
                    "{n, plural, one{# neue Nachricht} other{# neue Nachrichten}}"
                ),
            },
        },
        "ru": {
            "app": {
                "{n, plural, one{# new message} other{# new messages}}": (
                    "{n, plural, one{# новое сообщение} few{# новых сообщения} "
                    "many{# новых сообщений} other{# новых сообщения}}"
                ),
            },
        },
    },
)

pipeline = MessagePipeline({"*": source})

# Example 1: Simple placeholder
print("=" * 50)
print("Example 1: Simple Placeholder")
print("=" * 50)

print(pipeline.translate("app", "Hello, {name}!", {"name": "Anna"}, "de"))
# Output: Hallo, Anna!

print(pipeline.translate("app", "Hello, {name}!", {"name": "Anna"}, "fr"))
# Output: Hello, Anna!  (no French translation; original is formatted)

# Example 2: Plurals
print("\n" + "=" * 50)
print("Example 2: ICU Plurals")
print("=" * 50)

message = "{n, plural, one{# new message} other{# new messages}}"
for count in (1, 3, 5, 21):
    print(f"ru {count}: {pipeline.translate('app', message, {'n': count}, 'ru')}")
# Output:
# ru 1: 1 новое сообщение
# ru 3: 3 новых сообщения
# ru 5: 5 новых сообщений
# ru 21: 21 новое сообщение

print(pipeline.translate("app", message, {"n": 1500}, "de"))
# Output: 1.500 neue Nachrichten

# Example 3: Broken templates degrade instead of raising
print("\n" + "=" * 50)
print("Example 3: Graceful Degradation")
print("=" * 50)

print(pipeline.translate("app", "{n, plural, one{# item}", {"n": 2}))
# Output: {n, plural, one{# item}
