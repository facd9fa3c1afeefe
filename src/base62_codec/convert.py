from typing import Iterable, List, Union

MIN_SOURCE_BASE = 1
MIN_TARGET_BASE = 2
MAX_BASE = 256

DigitSource = Union[bytes, bytearray, memoryview, Iterable[int]]


class BaseRangeError(ValueError):
    """Raised when a radix argument falls outside the supported range."""

    def __init__(self, name: str, value: int, minimum: int) -> None:
        self.name = name
        self.value = value
        self.minimum = minimum
        super().__init__(
            f"{name} must be between {minimum} and {MAX_BASE}, got {value}."
        )


class InvalidDigitError(ValueError):
    """Raised when a source digit is not valid for the source base."""

    def __init__(self, position: int, value: int, base: int) -> None:
        self.position = position
        self.value = value
        self.base = base
        super().__init__(
            f"Digit {value} at position {position} is out of range for base {base}."
        )


def _check_base(name: str, value: int, minimum: int) -> None:
    if value < minimum or value > MAX_BASE:
        raise BaseRangeError(name, value, minimum)


def base_convert(source: DigitSource, source_base: int, target_base: int) -> bytes:
    """
    Convert a big-endian digit sequence from one radix to another.

    Works by repeated long division of the whole sequence by ``target_base``.
    Every pass peels off one remainder (the next least-significant output
    digit) and carries the quotient forward as the next source. N leading
    zero digits in ``source`` become exactly N leading zero digits in the
    result, so fixed-width binary data keeps its length through a round trip.
    """
    _check_base("target_base", target_base, MIN_TARGET_BASE)
    _check_base("source_base", source_base, MIN_SOURCE_BASE)

    # bytes(n) would silently build n zero bytes
    if isinstance(source, int):
        raise TypeError(f"source must be a sequence of digits, not {type(source).__name__}")
    digits = bytes(source)
    for position, value in enumerate(digits):
        if value >= source_base:
            raise InvalidDigitError(position, value, source_base)

    leading = 0
    while leading < len(digits) and digits[leading] == 0:
        leading += 1

    # all zero (or empty): nothing left to divide
    if leading == len(digits):
        return bytes(leading)

    result: List[int] = [0] * leading
    quotient = bytearray()
    remaining = digits[leading:]
    while remaining:
        quotient.clear()
        remainder = 0
        for digit in remaining:
            accumulator = digit + remainder * source_base
            remainder = accumulator % target_base
            value = accumulator // target_base
            if quotient or value:
                quotient.append(value)
        result.insert(leading, remainder)
        remaining = bytes(quotient)

    return bytes(result)
