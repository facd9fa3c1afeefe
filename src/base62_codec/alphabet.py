import random
from enum import Enum
from typing import Dict, Union

DEFAULT_CHARACTER_SET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
INVERTED_CHARACTER_SET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
ALPHABET_SIZE = len(DEFAULT_CHARACTER_SET)


class CharacterSet(Enum):
    """Built-in alphabets. DEFAULT puts capitals before lowercase, INVERTED the reverse."""

    DEFAULT = "default"
    INVERTED = "inverted"

    @classmethod
    def parse(cls, value: Union["CharacterSet", str]) -> "CharacterSet":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown character set '{value}'. Choose one of: {choices}.") from None


CHARACTER_SETS: Dict[CharacterSet, str] = {
    CharacterSet.DEFAULT: DEFAULT_CHARACTER_SET,
    CharacterSet.INVERTED: INVERTED_CHARACTER_SET,
}


def shuffled_character_set(seed: int) -> str:
    """
    Return the default alphabet permuted by a seeded Fisher-Yates shuffle.

    The same seed always yields the same alphabet. This is obfuscation, not
    encryption: ``random.Random`` is not a cryptographic generator.
    """
    chars = list(DEFAULT_CHARACTER_SET)
    rng = random.Random(seed)
    n = len(chars)
    while n > 1:
        n -= 1
        k = rng.randrange(n + 1)
        chars[k], chars[n] = chars[n], chars[k]
    return "".join(chars)


def validate_character_set(alphabet: str) -> str:
    if len(alphabet) != ALPHABET_SIZE:
        raise ValueError(f"Alphabet must contain exactly {ALPHABET_SIZE} characters, got {len(alphabet)}.")
    if len(set(alphabet)) != ALPHABET_SIZE:
        raise ValueError("Alphabet characters must be unique.")
    return alphabet
