"""Runtime support for msgroute: formatting, plural rules and locking.

Submodules:
    formatter    - Formatter protocol and the Babel-backed ICU MessageFormatter
    plural_rules - CLDR cardinal/ordinal category selection
    rwlock       - Readers-writer lock guarding the resolution registry

Python 3.13+. Depends on Babel.
"""

from .formatter import Formatter, MessageFormatter, parse_template
from .plural_rules import select_plural_category
from .rwlock import RWLock

__all__ = [
    "Formatter",
    "MessageFormatter",
    "RWLock",
    "parse_template",
    "select_plural_category",
]
