"""Client-side error taxonomy.

Every error carries the stage it belongs to so front ends can tell the user
whether validation, the network or the on-chain program refused the call.
"""

from __future__ import annotations

import typing

VALIDATION = "validation"
NETWORK = "network"
PROGRAM = "program"


class LumiClientError(Exception):
    stage: str = VALIDATION

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def describe(self) -> str:
        return f"{self.stage} error: {self.message}"


class InvalidInput(LumiClientError):
    """Raised when user supplied input cannot be turned into an instruction."""


class InvalidAddress(InvalidInput):
    pass


class InvalidAmountFormat(InvalidInput):
    pass


class IncompleteInput(InvalidInput):
    """Raised for visually elided values such as ``Hvn6...VYQw``."""


class InvalidReasonCode(InvalidInput):
    pass


class MissingConfiguration(LumiClientError):
    pass


class DerivationExhausted(LumiClientError):
    """No bump seed produced an off-curve address. Not retryable."""


class PrerequisiteAccountMissing(LumiClientError):
    stage = NETWORK

    def __init__(self, message: str, address: typing.Optional[object] = None) -> None:
        super().__init__(message)
        self.address = address


class SubmissionFailed(LumiClientError):
    stage = NETWORK

    def __init__(self, message: str, cause: typing.Optional[BaseException] = None) -> None:
        inner = _inner_message(cause, message)
        if inner:
            message = f"{message} | inner: {inner}"
        super().__init__(message)
        self.cause = cause


class ProgramRejected(LumiClientError):
    stage = PROGRAM

    def __init__(
        self,
        message: str,
        code: typing.Optional[int] = None,
        program_error: typing.Optional[Exception] = None,
        logs: typing.Optional[typing.List[str]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.program_error = program_error
        self.logs = logs or []


def _inner_message(cause: typing.Optional[BaseException], top: str) -> str:
    if cause is None:
        return ""
    parts = []
    seen = {top}
    visited = set()
    current: typing.Optional[BaseException] = cause
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current) or type(current).__name__
        if text not in seen:
            parts.append(text)
            seen.add(text)
        current = current.__cause__ or current.__context__
    return " | ".join(parts)
