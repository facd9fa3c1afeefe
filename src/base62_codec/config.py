import codecs
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .alphabet import CharacterSet
from .codec import Base62Converter

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".base62_codec.json"
SUPPORTED_CHARSETS = [member.value for member in CharacterSet]

ENV_MAPPING: Dict[str, str] = {
    "charset": "BASE62_CHARSET",
    "seed": "BASE62_SEED",
    "encoding": "BASE62_ENCODING",
    "history": "BASE62_HISTORY",
}

_FALSY = {"0", "false", "no", "off"}


def _parse_flag(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSY
    return bool(value)


def is_known_encoding(name: str) -> bool:
    try:
        codecs.lookup(name)
    except LookupError:
        return False
    return True


@dataclass
class CodecConfig:
    charset: str = CharacterSet.DEFAULT.value
    seed: Optional[int] = None
    encoding: str = "utf-8"
    history: bool = True

    def to_dict(self) -> Dict[str, object]:
        return {
            "charset": self.charset,
            "seed": self.seed,
            "encoding": self.encoding,
            "history": self.history,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "CodecConfig":
        seed = data.get("seed")
        return cls(
            charset=str(data.get("charset") or CharacterSet.DEFAULT.value),
            seed=int(seed) if seed is not None else None,
            encoding=str(data.get("encoding") or "utf-8"),
            history=_parse_flag(data.get("history", True)),
        )


def _merge_env(cfg: CodecConfig) -> CodecConfig:
    """Fill values the file left at their defaults from environment variables."""
    charset = os.getenv(ENV_MAPPING["charset"], "")
    if charset and cfg.charset == CharacterSet.DEFAULT.value:
        cfg.charset = charset.strip().lower()
    seed = os.getenv(ENV_MAPPING["seed"], "")
    if seed and cfg.seed is None:
        try:
            cfg.seed = int(seed)
        except ValueError:
            logger.warning("Ignoring non-integer %s=%r", ENV_MAPPING["seed"], seed)
    encoding = os.getenv(ENV_MAPPING["encoding"], "")
    if encoding and cfg.encoding == "utf-8":
        cfg.encoding = encoding
    history = os.getenv(ENV_MAPPING["history"], "")
    if history and history.strip().lower() in _FALSY:
        cfg.history = False
    return cfg


def load_config(path: Path = CONFIG_PATH) -> CodecConfig:
    config = CodecConfig()
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            config = CodecConfig.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            # Fall back to defaults/env if file malformed.
            logger.warning("Could not read config %s: %s", path, exc)
            config = CodecConfig()
    config = _merge_env(config)
    if config.charset not in SUPPORTED_CHARSETS:
        logger.warning("Unknown charset %r in config, using %s", config.charset, SUPPORTED_CHARSETS[0])
        config.charset = SUPPORTED_CHARSETS[0]
    if not is_known_encoding(config.encoding):
        logger.warning("Unknown encoding %r in config, using utf-8", config.encoding)
        config.encoding = "utf-8"
    return config


def save_config(config: CodecConfig, path: Path = CONFIG_PATH) -> None:
    payload = config.to_dict()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    try:
        os.chmod(path, 0o600)
    except OSError:
        # Best-effort; ignore on platforms that don't support chmod.
        logger.debug("chmod failed for %s", path)


def build_converter(config: Optional[CodecConfig] = None) -> Base62Converter:
    cfg = config or load_config()
    if cfg.seed is not None:
        return Base62Converter.from_seed(cfg.seed)
    return Base62Converter(cfg.charset)
