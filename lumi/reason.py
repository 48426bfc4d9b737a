"""Reason codes: the fixed ``[u8; 8]`` tag attached to every issuance."""

from __future__ import annotations

import re

from .errors import InvalidReasonCode

REASON_LEN = 8
PAD_BYTE = b" "
DEFAULT_REASON_HEX = "0000000000000000"

_HEX_RE = re.compile(r"[0-9a-f]{16}")


def reason_from_text(text: str) -> bytes:
    """UTF-8 encode, pad with ASCII spaces, then cut to exactly 8 bytes."""
    raw = (text or "").encode("utf-8")
    return raw.ljust(REASON_LEN, PAD_BYTE)[:REASON_LEN]


def reason_from_hex(text: str = DEFAULT_REASON_HEX) -> bytes:
    value = (text or DEFAULT_REASON_HEX).strip().lower()
    if value.startswith("0x"):
        value = value[2:]
    if not _HEX_RE.fullmatch(value):
        raise InvalidReasonCode(
            f"reason must be 8-byte hex (16 hex chars), e.g. {DEFAULT_REASON_HEX}; got {text!r}"
        )
    return bytes.fromhex(value)


def check_reason(reason_code: bytes) -> bytes:
    if not isinstance(reason_code, (bytes, bytearray)) or len(reason_code) != REASON_LEN:
        raise InvalidReasonCode(f"reason code must be exactly {REASON_LEN} bytes")
    return bytes(reason_code)
