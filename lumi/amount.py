"""Conversion between user entered token amounts and u64 base units.

All arithmetic is done on Python integers. Fractional digits beyond the
mint's precision are dropped, not rounded: ``"0.0000001"`` at 6 decimals is
zero base units.
"""

from __future__ import annotations

import re

from .errors import InvalidAmountFormat

U64_MAX = 2**64 - 1

_AMOUNT_RE = re.compile(r"(?P<whole>[0-9]*)(?:\.(?P<frac>[0-9]*))?")
_DIGITS_RE = re.compile(r"[0-9]+")


def check_amount_format(value: str) -> str:
    """Return the amount unchanged or raise if it is not a plain decimal number.

    Surrounding whitespace is rejected like any other stray character.
    """
    if not isinstance(value, str):
        raise InvalidAmountFormat("amount must be a string")
    match = _AMOUNT_RE.fullmatch(value)
    if match is None or not (match.group("whole") or match.group("frac")):
        raise InvalidAmountFormat(
            f"Amount must be an integer or decimal number, e.g. 5 or 1.25 (got {value!r})"
        )
    return value


def to_base_units(value: str, decimals: int) -> int:
    if decimals < 0:
        raise InvalidAmountFormat(f"decimals must be non-negative, got {decimals}")
    text = check_amount_format(value)
    match = _AMOUNT_RE.fullmatch(text)
    whole = match.group("whole") or "0"
    frac = (match.group("frac") or "").ljust(decimals, "0")[:decimals]
    amount = int(whole) * 10**decimals + int(frac or "0")
    if amount > U64_MAX:
        raise InvalidAmountFormat(f"Amount {value!r} does not fit in an unsigned 64-bit integer")
    return amount


def raw_base_units(value: str) -> int:
    text = value if isinstance(value, str) else ""
    if not _DIGITS_RE.fullmatch(text):
        raise InvalidAmountFormat("--base-units expects an integer amount (raw u64 base units)")
    amount = int(text)
    if amount > U64_MAX:
        raise InvalidAmountFormat(f"Amount {value!r} does not fit in an unsigned 64-bit integer")
    return amount


def format_base_units(raw: int, decimals: int) -> str:
    if decimals == 0:
        return str(raw)
    base = 10**decimals
    return f"{raw // base}.{str(raw % base).zfill(decimals)}"
