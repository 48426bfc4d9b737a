"""A single issuance call from raw input to a terminal state."""

from __future__ import annotations

import enum
import logging
import typing

from solders.signature import Signature

from .builder import InstructionBuilder, IssuanceRequest, validate_request
from .errors import LumiClientError, SubmissionFailed
from .gateway import SubmissionGateway

logger = logging.getLogger(__name__)


class IssuanceState(enum.Enum):
    COLLECTING = "collecting"
    VALIDATED = "validated"
    BUILT = "built"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    FAILED = "failed"


TERMINAL_STATES = frozenset({IssuanceState.CONFIRMED, IssuanceState.FAILED})

_TRANSITIONS = {
    IssuanceState.COLLECTING: {IssuanceState.VALIDATED, IssuanceState.FAILED},
    IssuanceState.VALIDATED: {IssuanceState.BUILT, IssuanceState.FAILED},
    IssuanceState.BUILT: {IssuanceState.SUBMITTED, IssuanceState.FAILED},
    IssuanceState.SUBMITTED: {IssuanceState.CONFIRMED, IssuanceState.FAILED},
    IssuanceState.CONFIRMED: set(),
    IssuanceState.FAILED: set(),
}


class Issuance:
    """Runs one request through validation, building and submission.

    Instances are single use; start a new one for every request.
    """

    def __init__(
        self,
        request: IssuanceRequest,
        builder: InstructionBuilder,
        gateway: SubmissionGateway,
        create_missing: bool = True,
    ) -> None:
        self.request = request
        self.builder = builder
        self.gateway = gateway
        self.create_missing = create_missing
        self.state = IssuanceState.COLLECTING
        self.instructions: list = []
        self.signature: typing.Optional[Signature] = None
        self.error: typing.Optional[LumiClientError] = None

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def _advance(self, state: IssuanceState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal issuance transition {self.state.value} -> {state.value}")
        logger.info(f"Issuance {self.state.value} -> {state.value}")
        self.state = state

    async def run(self) -> Signature:
        if self.state is not IssuanceState.COLLECTING:
            raise RuntimeError("Issuance already ran; create a new one for another request")
        try:
            validated = validate_request(self.request)
            config_address = self.builder.config.require_config_address()
            self._advance(IssuanceState.VALIDATED)
            self.instructions = await self.builder.build_validated(
                validated, config_address, self.create_missing
            )
            self._advance(IssuanceState.BUILT)
            tx = await self.gateway.sign(self.instructions)
            self._advance(IssuanceState.SUBMITTED)
            self.signature = await self.gateway.send_signed(tx)
            self._advance(IssuanceState.CONFIRMED)
        except LumiClientError as err:
            self.error = err
            self._advance(IssuanceState.FAILED)
            raise
        except Exception as exc:
            logger.error(f"Unexpected error while {self.state.value}: {exc!r}")
            self.error = SubmissionFailed(f"Issuance failed after reaching {self.state.value}", exc)
            self._advance(IssuanceState.FAILED)
            raise self.error from exc
        return self.signature
