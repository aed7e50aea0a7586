"""
Runtime configuration for the Conditional Tokens client.

Everything is read from the environment once, at import time.
"""

import logging
import os
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

# --- Environment & Config ---
RPC_URL = os.environ.get('RPC_URL', 'http://localhost:8545')
PRIVATE_KEY = os.environ.get('PRIVATE_KEY')  # Optional, read-only client without it
CONDITIONAL_TOKENS_ADDRESS = os.environ.get(
    'CONDITIONAL_TOKENS_ADDRESS', '0xC59b0e4De5F1248C1140964E0fF287B192407E0C'
)
POA_CHAIN = os.environ.get('POA_CHAIN', '').lower() in ('1', 'true', 'yes')
WEB_PORT = int(os.environ.get('PORT', 8080))
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

# Transaction parameters
GAS_LIMIT = int(os.environ.get('GAS_LIMIT', 750000))

# Lower bound for log scans on private/dev chains, overrides the network table
_earliest_block = os.environ.get('CTF_EARLIEST_BLOCK')
CTF_EARLIEST_BLOCK: Optional[int] = int(_earliest_block) if _earliest_block else None

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(message)s'


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging and quiet the transport loggers."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt='%H:%M:%S'
    )

    # Suppress noisy HTTP logs
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('web3').setLevel(logging.WARNING)
    logging.getLogger('aiohttp').setLevel(logging.WARNING)


def make_web3(rpc_url: str = RPC_URL, poa: bool = POA_CHAIN) -> Web3:
    """Open the HTTP connection a client instance will own."""
    # No retries or backoff, failures surface to the caller on the first attempt
    w3 = Web3(Web3.HTTPProvider(rpc_url, exception_retry_configuration=None))
    if poa:
        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return w3


def load_account(private_key: Optional[str] = PRIVATE_KEY) -> Optional[LocalAccount]:
    return Account.from_key(private_key) if private_key else None
