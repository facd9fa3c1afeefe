from .alphabet import (
    CHARACTER_SETS,
    DEFAULT_CHARACTER_SET,
    INVERTED_CHARACTER_SET,
    CharacterSet,
    shuffled_character_set,
)
from .codec import Base62Converter, InvalidCharacterError, decode, encode
from .config import CodecConfig, build_converter, load_config, save_config
from .convert import BaseRangeError, InvalidDigitError, base_convert
from .history import log_event, read_events

__all__ = [
    "CHARACTER_SETS",
    "DEFAULT_CHARACTER_SET",
    "INVERTED_CHARACTER_SET",
    "CharacterSet",
    "shuffled_character_set",
    "Base62Converter",
    "InvalidCharacterError",
    "encode",
    "decode",
    "CodecConfig",
    "build_converter",
    "load_config",
    "save_config",
    "BaseRangeError",
    "InvalidDigitError",
    "base_convert",
    "log_event",
    "read_events",
]
