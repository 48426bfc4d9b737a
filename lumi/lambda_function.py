"""Dashboard backend: AWS Lambda handlers for issuing and balance lookups.

Event for ``lambda_handler``::

    {"recipient": "<base58>", "amount": "1.5", "reason": "DEMO", "note": "bafy..."}
"""

import asyncio
import logging
import os

from anchorpy import Wallet
from solders.keypair import Keypair
from solana.rpc.async_api import AsyncClient

from .balance import fetch_balance
from .builder import InstructionBuilder, IssuanceRequest
from .config import ClientConfig, parse_pubkey
from .errors import LumiClientError
from .gateway import SubmissionGateway
from .issuance import Issuance
from .reason import REASON_LEN, reason_from_text

logger = logging.getLogger()
logger.setLevel(logging.INFO)


def _error(messages):
    return {
        'statusCode': 200,
        'body': {'status': 'error', 'message': messages}
    }


# Pass recipient, amount, reason and optional note
def lambda_handler(event, context):

    # Response body
    response_body = {
        'status': 'error',
        'message': []
    }

    try:
        config = ClientConfig.from_env()
    except LumiClientError as err:
        logger.error(f"ERROR MSG: {err.describe()}")
        return _error([err.describe()])

    if config.config_address is None:
        logger.warning("CONFIG_PUBKEY not set, issuing disabled")
        return {
            'statusCode': 200,
            'body': {
                'status': 'warning',
                'message': ["Config missing. Set CONFIG_PUBKEY to enable issuing."]
            }
        }

    # Validate post variables
    valid = True
    if not event or 'recipient' not in event:
        response_body['message'].append("Recipient wallet address not found")
        valid = False

    if not event or 'amount' not in event:
        response_body['message'].append("Amount not found")
        valid = False

    if event and len(str(event.get('reason') or '')) > REASON_LEN:
        response_body['message'].append(f"Reason must be at most {REASON_LEN} characters")
        valid = False

    if not valid:
        logger.error('Post data validation error')
        return {
            'statusCode': 200,
            'body': response_body
        }

    # POST Variables
    request = IssuanceRequest(
        recipient=str(event['recipient']).strip(),
        amount=str(event['amount']).strip(),
        reason_code=reason_from_text(str(event.get('reason') or '')),
        note=str(event.get('note') or ''),
    )
    logger.info("POST (recipient): " + request.recipient)
    logger.info("POST (amount): " + request.amount)

    try:
        issuer_kp = Keypair.from_base58_string(os.environ['ISSUER_SECRET'])
    except (KeyError, ValueError):
        logger.error("ISSUER_SECRET missing or invalid")
        return _error(["validation error: issuer signing key is not configured"])

    try:
        signature = asyncio.run(issue(config, Wallet(issuer_kp), request))
    except LumiClientError as err:
        logger.error(f"ERROR MSG: {err.describe()}")
        return _error([err.describe()])

    logger.info("Done")
    return {
        'statusCode': 200,
        'body': {
            'status': 'success',
            'message': 'LUMI issued successfully',
            'signature': str(signature),
            'explorer': config.explorer_tx_url(signature),
        }
    }


async def issue(config, wallet, request):
    async with AsyncClient(config.rpc_endpoint) as client:
        builder = InstructionBuilder(config, client, wallet.public_key)
        gateway = SubmissionGateway(client, wallet, config.ws_endpoint, config.commitment)
        return await Issuance(request, builder, gateway).run()


# Pass owner wallet address
def balance_handler(event, context):
    if not event or 'owner' not in event:
        return _error(["Owner wallet address not found"])

    try:
        config = ClientConfig.from_env()
        owner = parse_pubkey(str(event['owner']), "owner")
        balance = asyncio.run(get_balance(config, owner))
    except LumiClientError as err:
        logger.error(f"ERROR MSG: {err.describe()}")
        return _error([err.describe()])

    return {
        'statusCode': 200,
        'body': {
            'status': 'success',
            'owner': str(owner),
            'balance': balance.display,
            'raw': str(balance.raw),
        }
    }


async def get_balance(config, owner):
    async with AsyncClient(config.rpc_endpoint) as client:
        return await fetch_balance(client, owner, config.mint, config.token_program)
