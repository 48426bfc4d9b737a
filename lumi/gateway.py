"""Signing, broadcast and confirmation of assembled instructions."""

from __future__ import annotations

import logging
import re
import typing

from anchorpy import Provider, Wallet
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.signature import Signature
from solders.transaction import VersionedTransaction
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solana.rpc.core import RPCException
from solana.rpc.types import TxOpts
from solana.rpc.websocket_api import connect
from websockets.exceptions import WebSocketException

from .errors import ProgramRejected, SubmissionFailed, from_code

logger = logging.getLogger(__name__)

_HEX_CODE_RE = re.compile(r"custom program error: (0x[0-9a-fA-F]+)")
_ANCHOR_CODE_RE = re.compile(r"Error Number: (\d+)")


def custom_error_code(err: object, logs: typing.Sequence[str] = ()) -> typing.Optional[int]:
    """Pull a custom program error code out of a transaction error or its logs."""
    inner = getattr(err, "err", None)
    code = getattr(inner, "code", None)
    if isinstance(code, int):
        return code
    for text in [str(err), *logs]:
        match = _HEX_CODE_RE.search(text)
        if match:
            return int(match.group(1), 16)
        match = _ANCHOR_CODE_RE.search(text)
        if match:
            return int(match.group(1))
    return None


def program_rejection(
    err: object, logs: typing.Sequence[str] = (), signature: typing.Optional[Signature] = None
) -> typing.Optional[ProgramRejected]:
    code = custom_error_code(err, logs)
    if code is None:
        return None
    program_error = from_code(code)
    detail = program_error.msg if program_error is not None else str(err)
    message = f"Program rejected the transaction: {detail} (code {code})"
    if signature is not None:
        message += f" [signature {signature}]"
    return ProgramRejected(message, code=code, program_error=program_error, logs=list(logs))


class SubmissionGateway:
    """Send one transaction per call and wait for it at ``commitment``.

    There is no retry; a failed call can be re-invoked by the caller.
    """

    def __init__(
        self,
        client: AsyncClient,
        wallet: Wallet,
        ws_endpoint: str,
        commitment: str = "confirmed",
    ) -> None:
        self.client = client
        self.wallet = wallet
        self.ws_endpoint = ws_endpoint
        self.commitment = commitment
        self.opts = TxOpts(skip_confirmation=True, preflight_commitment=Confirmed)
        self.provider = Provider(client, wallet, self.opts)

    async def sign(
        self, instructions: typing.Sequence[Instruction], signers: typing.Sequence[Keypair] = ()
    ) -> VersionedTransaction:
        try:
            latest_blockhash = (await self.client.get_latest_blockhash(Confirmed)).value
        except (RPCException, SolanaRpcException) as exc:
            raise SubmissionFailed("Couldn't fetch latest blockhash", exc) from exc
        message = MessageV0.try_compile(
            self.wallet.public_key, list(instructions), [], latest_blockhash.blockhash
        )
        return VersionedTransaction(message, [self.wallet.payer, *signers])

    async def submit(
        self, instructions: typing.Sequence[Instruction], signers: typing.Sequence[Keypair] = ()
    ) -> Signature:
        tx = await self.sign(instructions, signers)
        return await self.send_signed(tx)

    async def send_signed(self, tx: VersionedTransaction) -> Signature:
        logger.info("Submitting transaction")
        try:
            signature = await self.provider.send(tx, self.opts)
        except RPCException as exc:
            detail = exc.args[0] if exc.args else exc
            data = getattr(detail, "data", None)
            rejected = program_rejection(
                getattr(data, "err", detail), getattr(data, "logs", None) or ()
            )
            if rejected is not None:
                logger.error(f"ERROR MSG: {rejected.message}")
                raise rejected from exc
            raise SubmissionFailed("Transaction broadcast failed", exc) from exc
        except SolanaRpcException as exc:
            raise SubmissionFailed("Transaction broadcast failed", exc) from exc
        logger.info(f"Signature: {signature}")
        await self.confirm(signature)
        return signature

    async def confirm(self, signature: Signature) -> None:
        try:
            notification = await self.listen_transaction(signature)
        except (WebSocketException, OSError) as exc:
            raise SubmissionFailed(
                f"Transaction {signature} was sent but confirmation failed", exc
            ) from exc
        try:
            err = notification[0].result.value.err
        except (AttributeError, IndexError, TypeError) as exc:
            raise SubmissionFailed(
                f"Unexpected confirmation response for {signature}: {notification!r}", exc
            ) from exc
        if err is None:
            logger.info("Transaction confirmed")
            return
        rejected = program_rejection(err, signature=signature)
        if rejected is not None:
            logger.error(f"ERROR MSG: {rejected.message}")
            raise rejected
        raise SubmissionFailed(f"Transaction {signature} failed: {err}")

    async def listen_transaction(self, signature: Signature):
        async with connect(self.ws_endpoint) as websocket:
            await websocket.signature_subscribe(signature, self.commitment)
            logger.info("Subscribed to the signature")
            first_resp = await websocket.recv()
            try:
                subscription_id = first_resp[0].result
            except (AttributeError, IndexError, TypeError) as exc:
                raise SubmissionFailed(f"Signature subscription rejected: {first_resp!r}", exc) from exc
            next_resp = await websocket.recv()
            logger.info("Received data")
            await websocket.signature_unsubscribe(subscription_id)
            return next_resp
