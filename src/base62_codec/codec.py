from typing import Dict, Optional, Union

from .alphabet import (
    CHARACTER_SETS,
    CharacterSet,
    shuffled_character_set,
    validate_character_set,
)
from .convert import base_convert

BytesLike = Union[bytes, bytearray, memoryview]


class InvalidCharacterError(ValueError):
    """Raised when decoding text that contains a character outside the alphabet."""

    def __init__(self, char: str, position: int) -> None:
        self.char = char
        self.position = position
        super().__init__(f"Invalid Base62 character {char!r} at position {position}.")


class Base62Converter:
    """
    Encode and decode bytes and text to and from Base62.

    The alphabet is chosen once at construction and never changes, so a
    converter can be shared freely between threads.
    """

    def __init__(
        self,
        charset: Union[CharacterSet, str] = CharacterSet.DEFAULT,
        seed: Optional[int] = None,
    ) -> None:
        if seed is not None:
            alphabet = shuffled_character_set(seed)
        else:
            alphabet = CHARACTER_SETS[CharacterSet.parse(charset)]
        self._charset = validate_character_set(alphabet)
        self._lookup: Dict[str, int] = {ch: i for i, ch in enumerate(alphabet)}

    @classmethod
    def from_seed(cls, seed: int) -> "Base62Converter":
        return cls(seed=seed)

    @property
    def character_set(self) -> str:
        return self._charset

    def __repr__(self) -> str:
        return f"{type(self).__name__}(character_set={self._charset!r})"

    base_convert = staticmethod(base_convert)

    def encode_bytes(self, data: BytesLike) -> bytes:
        """Encode raw bytes into Base62 digit values (0-61), without alphabet mapping."""
        return base_convert(data, 256, 62)

    def decode_bytes(self, data: BytesLike) -> bytes:
        """Decode Base62 digit values (0-61) back into raw bytes."""
        return base_convert(data, 62, 256)

    def encode_bytes_to_text(self, data: BytesLike) -> str:
        return "".join(self._charset[d] for d in self.encode_bytes(data))

    def decode_text_to_bytes(self, text: str) -> bytes:
        digits = bytearray()
        for position, ch in enumerate(text):
            try:
                digits.append(self._lookup[ch])
            except KeyError:
                raise InvalidCharacterError(ch, position) from None
        return self.decode_bytes(digits)

    def encode_text(self, text: str) -> str:
        """Encode UTF-8 text to Base62 text."""
        return self.encode_bytes_to_text(text.encode("utf-8"))

    def decode_text(self, encoded: str) -> str:
        """Decode Base62 text into a UTF-8 string."""
        return self.decode_text_to_bytes(encoded).decode("utf-8")

    def encode(self, value: Union[str, BytesLike]) -> Union[str, bytes]:
        """Text in, text out; bytes in, digit bytes out."""
        if isinstance(value, str):
            return self.encode_text(value)
        return self.encode_bytes(value)

    def decode(self, value: Union[str, BytesLike]) -> Union[str, bytes]:
        if isinstance(value, str):
            return self.decode_text(value)
        return self.decode_bytes(value)


_DEFAULT_CONVERTER = Base62Converter()


def encode(value: Union[str, BytesLike]) -> Union[str, bytes]:
    return _DEFAULT_CONVERTER.encode(value)


def decode(value: Union[str, BytesLike]) -> Union[str, bytes]:
    return _DEFAULT_CONVERTER.decode(value)
