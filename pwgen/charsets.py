from __future__ import annotations

from enum import Enum
from typing import Final, Tuple

UPPER: Final[str] = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
LOWER: Final[str] = 'abcdefghijklmnopqrstuvwxyz'
DIGIT: Final[str] = '0123456789'
SPECIAL: Final[str] = '`~!@#$%^&*()-_=+\\ |]}[{\'";:/?.>,<'

DEFAULT_CHARS: Final[str] = UPPER + LOWER + DIGIT + SPECIAL
DEFAULT_SELECTOR: Final[str] = 'AaDS'


class CharacterClass(Enum):
    """A category of password characters and its reference set."""

    UPPER = ('A', UPPER)
    LOWER = ('a', LOWER)
    DIGIT = ('D', DIGIT)
    SPECIAL = ('S', SPECIAL)

    def __init__(self, letter: str, chars: str) -> None:
        self.letter = letter
        self.chars = chars

    def __contains__(self, char: object) -> bool:
        return isinstance(char, str) and len(char) == 1 and char in self.chars


def parse_selector(selector: str) -> Tuple[CharacterClass, ...]:
    """
    Resolve a class selector string into character classes.

    Each letter is looked up in the fixed set of class letters; anything
    else is ignored.

    Args:
        selector: Letters such as 'AaDS' or 'AD'.

    Returns:
        The selected classes in canonical order, each at most once.
    """
    letters = set(selector.strip())
    return tuple(cls for cls in CharacterClass if cls.letter in letters)


def build_alphabet(selector: str = DEFAULT_SELECTOR) -> str:
    """
    Return the alphabet for a selector.

    Falls back to every class when the selector names none.
    """
    classes = parse_selector(selector)
    if not classes:
        return DEFAULT_CHARS
    return ''.join(cls.chars for cls in classes)


def count_in_class(text: str, character_class: CharacterClass) -> int:
    """Count the characters of `text` that belong to `character_class`."""
    return sum(1 for char in text if char in character_class)
