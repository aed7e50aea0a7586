"""
Identifier derivation for the Conditional Tokens Framework.

Only the condition id is derived locally. Collection and position ids are
owned by the contract and always read from it (see ``client.py``).
"""

from typing import Union

from eth_utils import to_canonical_address
from web3 import Web3

ZERO_COLLECTION_ID = bytes(32)


def to_bytes32(value: Union[str, bytes]) -> bytes:
    """Accept a 0x hex string or raw bytes and return exactly 32 bytes."""
    raw = value if isinstance(value, (bytes, bytearray)) else Web3.to_bytes(hexstr=value)
    if len(raw) != 32:
        raise ValueError(f"Expected 32 bytes, got {len(raw)}: {value!r}")
    return bytes(raw)


def get_condition_id(oracle_address: str, question_id: Union[str, bytes], outcome_slot_count: int) -> str:
    """
    keccak256(oracle ‖ questionId ‖ outcomeSlotCount), packed at 20/32/32 bytes.

    :param oracle_address: oracle account, checksummed or lowercase hex
    :param question_id: 32-byte question id, hex string or bytes
    :param outcome_slot_count: number of outcome slots
    :return: condition id as a lowercase 0x-prefixed hex string
    """
    encoded_data = (
        to_canonical_address(oracle_address)
        + to_bytes32(question_id)
        + outcome_slot_count.to_bytes(32, byteorder='big')
    )
    return Web3.to_hex(Web3.keccak(encoded_data))
