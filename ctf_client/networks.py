"""Per-network constants for scanning Conditional Tokens event logs."""

from typing import Dict, Optional

from ctf_client import config
from ctf_client.errors import UnsupportedNetworkError

MAINNET = 1
RINKEBY = 4
XDAI = 100

# Earliest block at which the ConditionalTokens contract can have emitted events
EARLIEST_BLOCK_TO_CHECK: Dict[int, int] = {
    MAINNET: 9294035,
    RINKEBY: 5797255,
    XDAI: 9008203,
}


def get_earliest_block_to_check(network_id: int, override: Optional[int] = None) -> int:
    if override is None:
        override = config.CTF_EARLIEST_BLOCK
    if override is not None:
        return override
    try:
        return EARLIEST_BLOCK_TO_CHECK[network_id]
    except KeyError:
        raise UnsupportedNetworkError(network_id) from None
