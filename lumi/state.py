"""Local persistence of the Config address created by ``lumi --init``."""

import json
import logging
import os
import typing

from solders.pubkey import Pubkey

logger = logging.getLogger(__name__)


def save_config_address(path: str, address: Pubkey) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        json.dump({"config": str(address)}, fh, indent=2)
    logger.info(f"Saved config pubkey to {path}")


def load_config_address(path: str) -> typing.Optional[Pubkey]:
    if not os.path.exists(path):
        return None
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
        return Pubkey.from_string(data["config"])
    except (OSError, ValueError, KeyError, TypeError) as err:
        logger.error(f"Couldn't read saved config from {path}: {err}")
        return None
