import argparse
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional, Union

from .codec import Base62Converter
from .config import (
    CONFIG_PATH,
    SUPPORTED_CHARSETS,
    CodecConfig,
    build_converter,
    is_known_encoding,
    load_config,
    save_config,
)
from .convert import base_convert
from .history import log_event, read_events

logger = logging.getLogger(__name__)


def _parse_digits(text: str) -> List[int]:
    parts = [p for p in re.split(r"[\s,]+", text.strip()) if p]
    try:
        return [int(p) for p in parts]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid digit list '{text}'. Use integers separated by commas or spaces."
        ) from exc


def _resolve_config(args: argparse.Namespace) -> CodecConfig:
    config = load_config(Path(args.config))
    if args.charset:
        config.charset = args.charset
        config.seed = None
    if args.seed is not None:
        config.seed = args.seed
    if args.no_history:
        config.history = False
    return config


def _converter(args: argparse.Namespace) -> Base62Converter:
    return build_converter(args.resolved_config)


def _load_input(args: argparse.Namespace) -> Union[str, bytes]:
    if args.in_file:
        with open(args.in_file, "rb") as fh:
            return fh.read()
    if args.text is None:
        raise argparse.ArgumentTypeError("Provide input text or --in-file.")
    return args.text


def _maybe_write_output(args: argparse.Namespace, output: Union[str, bytes]) -> Optional[str]:
    if args.out_file:
        mode = "wb" if isinstance(output, bytes) else "w"
        with open(args.out_file, mode) as fh:
            fh.write(output)
        logger.debug("Wrote %d bytes/chars to %s", len(output), args.out_file)
        return None
    if isinstance(output, bytes):
        sys.stdout.buffer.write(output)
        sys.stdout.flush()
        return None
    return output


def _run_encode(args: argparse.Namespace) -> Optional[str]:
    converter = _converter(args)
    data = _load_input(args)
    if args.hex:
        text = data.decode("ascii") if isinstance(data, bytes) else data
        raw = bytes.fromhex(text.strip())
    elif isinstance(data, bytes):
        raw = data
    else:
        raw = data.encode(args.resolved_config.encoding)
    return _maybe_write_output(args, converter.encode_bytes_to_text(raw))


def _run_decode(args: argparse.Namespace) -> Optional[str]:
    converter = _converter(args)
    data = _load_input(args)
    text = data.decode("ascii").strip() if isinstance(data, bytes) else data.strip()
    raw = converter.decode_text_to_bytes(text)
    if args.binary:
        return _maybe_write_output(args, raw)
    if args.hex:
        return _maybe_write_output(args, raw.hex())
    return _maybe_write_output(args, raw.decode(args.resolved_config.encoding))


def _run_convert(args: argparse.Namespace) -> str:
    converted = base_convert(_parse_digits(args.digits), args.from_base, args.to_base)
    return args.separator.join(str(d) for d in converted)


def _run_alphabet(args: argparse.Namespace) -> str:
    return _converter(args).character_set


def _run_config(args: argparse.Namespace) -> str:
    path = Path(args.config)
    config = load_config(path)

    changed = False
    if args.set_charset is not None:
        config.charset = args.set_charset
        changed = True
    if args.set_seed is not None:
        config.seed = args.set_seed
        changed = True
    if args.clear_seed:
        config.seed = None
        changed = True
    if args.set_encoding is not None:
        if not is_known_encoding(args.set_encoding):
            raise argparse.ArgumentTypeError(f"Unknown text encoding: {args.set_encoding}")
        config.encoding = args.set_encoding
        changed = True
    if args.set_history is not None:
        config.history = args.set_history == "on"
        changed = True

    if changed:
        save_config(config, path)

    lines = [
        f"config file: {path}",
        f"charset: {config.charset}",
        f"seed: {config.seed if config.seed is not None else '[not set]'}",
        f"encoding: {config.encoding}",
        f"history: {'on' if config.history else 'off'}",
    ]
    if changed:
        lines.append("Configuration saved.")
    return "\n".join(lines)


def _run_history(args: argparse.Namespace) -> str:
    records = read_events(limit=args.limit)
    if not records:
        return "No history recorded."
    lines = []
    for record in records:
        action = record.pop("action", "unknown")
        details = ", ".join(f"{k}={v}" for k, v in record.items() if v is not None)
        lines.append(f"{action}: {details}" if details else action)
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="base62-codec",
        description="Encode and decode data with a configurable Base62 alphabet.",
    )
    parser.add_argument(
        "--charset",
        choices=SUPPORTED_CHARSETS,
        help="Built-in alphabet to use (overrides the config file).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Shuffle the default alphabet with this seed (overrides --charset).",
    )
    parser.add_argument("--config", default=str(CONFIG_PATH), help="Path to the JSON config file.")
    parser.add_argument("--no-history", action="store_true", help="Do not record this run in history.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    enc_parser = subparsers.add_parser("encode", help="Encode text or bytes to Base62")
    enc_parser.add_argument("text", nargs="?", help="Input text (ignored if --in-file).")
    enc_parser.add_argument("--in-file", help="Read raw bytes from file.")
    enc_parser.add_argument("--out-file", help="Write result to file.")
    enc_parser.add_argument("--hex", action="store_true", help="Treat input as hex-encoded bytes.")
    enc_parser.set_defaults(func=_run_encode)

    dec_parser = subparsers.add_parser("decode", help="Decode Base62 to text or bytes")
    dec_parser.add_argument("text", nargs="?", help="Base62 input (ignored if --in-file).")
    dec_parser.add_argument("--in-file", help="Read Base62 text from file.")
    dec_parser.add_argument("--out-file", help="Write result to file.")
    out_group = dec_parser.add_mutually_exclusive_group()
    out_group.add_argument("--hex", action="store_true", help="Print decoded bytes as hex.")
    out_group.add_argument("--binary", action="store_true", help="Write raw decoded bytes.")
    dec_parser.set_defaults(func=_run_decode)

    conv_parser = subparsers.add_parser("convert", help="Convert a digit sequence between bases")
    conv_parser.add_argument("digits", help="Digits, most significant first, e.g. '0,0,255'.")
    conv_parser.add_argument("--from", dest="from_base", type=int, required=True, help="Source base (1-256).")
    conv_parser.add_argument("--to", dest="to_base", type=int, required=True, help="Target base (2-256).")
    conv_parser.add_argument("--separator", default=",", help="Separator for output digits.")
    conv_parser.set_defaults(func=_run_convert)

    alpha_parser = subparsers.add_parser("alphabet", help="Show the active alphabet")
    alpha_parser.set_defaults(func=_run_alphabet)

    cfg_parser = subparsers.add_parser("config", help="View or update the persisted configuration")
    cfg_parser.add_argument("--set-charset", choices=SUPPORTED_CHARSETS, help="Default alphabet.")
    seed_group = cfg_parser.add_mutually_exclusive_group()
    seed_group.add_argument("--set-seed", type=int, help="Default shuffle seed.")
    seed_group.add_argument("--clear-seed", action="store_true", help="Remove the stored seed.")
    cfg_parser.add_argument("--set-encoding", help="Text encoding for encode/decode of text input.")
    cfg_parser.add_argument("--set-history", choices=["on", "off"], help="Record runs in history.")
    cfg_parser.set_defaults(func=_run_config)

    hist_parser = subparsers.add_parser("history", help="Show recent runs")
    hist_parser.add_argument("--limit", type=int, default=20, help="Number of records to show.")
    hist_parser.set_defaults(func=_run_history)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        args.resolved_config = _resolve_config(args)
        result = args.func(args)
    except (ValueError, LookupError, argparse.ArgumentTypeError, OSError) as exc:
        # UnicodeDecodeError and the codec errors are ValueErrors
        parser.exit(2, f"{parser.prog}: error: {exc}\n")
    if result is not None:
        print(result)
    if args.resolved_config.history and args.command not in ("config", "history"):
        log_event(
            action=args.command,
            payload={
                "input": getattr(args, "text", None) or getattr(args, "digits", None),
                "in_file": getattr(args, "in_file", None),
                "out_file": getattr(args, "out_file", None),
                "charset": args.resolved_config.charset,
                "seed": args.resolved_config.seed,
            },
        )


if __name__ == "__main__":
    main()
