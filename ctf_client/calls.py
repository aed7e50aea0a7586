"""
Call encoder: one record per Conditional Tokens entry point.

The calldata produced here is the same whether it is sent directly by
``ConditionalTokenClient`` or embedded in another transaction by a caller
(e.g. a batched multi-call).
"""

from dataclasses import dataclass
from typing import ClassVar, Sequence, Tuple, Union

from web3 import Web3
from web3.contract import Contract
from web3.contract.contract import ContractFunction

from ctf_client.abi.ctf_abi import ctf_abi
from ctf_client.identifiers import ZERO_COLLECTION_ID, to_bytes32

# Encoding never touches the network, a provider-less instance is enough
_ctf_interface = Web3().eth.contract(abi=ctf_abi)


@dataclass(frozen=True)
class TransferPosition:
    from_address: str
    to_address: str
    position_id: int
    amount: int
    data: bytes = b''

    function_name: ClassVar[str] = 'safeTransferFrom'

    def arguments(self) -> Tuple:
        return (
            Web3.to_checksum_address(self.from_address),
            Web3.to_checksum_address(self.to_address),
            self.position_id,
            self.amount,
            self.data,
        )


@dataclass(frozen=True)
class SetApprovalForAll:
    operator: str
    approved: bool

    function_name: ClassVar[str] = 'setApprovalForAll'

    def arguments(self) -> Tuple:
        return (Web3.to_checksum_address(self.operator), self.approved)


@dataclass(frozen=True)
class PrepareCondition:
    oracle: str
    question_id: Union[str, bytes]
    outcome_slot_count: int

    function_name: ClassVar[str] = 'prepareCondition'

    def arguments(self) -> Tuple:
        return (
            Web3.to_checksum_address(self.oracle),
            to_bytes32(self.question_id),
            self.outcome_slot_count,
        )


@dataclass(frozen=True)
class RedeemPositions:
    collateral_token: str
    condition_id: Union[str, bytes]
    index_sets: Sequence[int]
    parent_collection_id: Union[str, bytes] = ZERO_COLLECTION_ID

    function_name: ClassVar[str] = 'redeemPositions'

    def arguments(self) -> Tuple:
        return (
            Web3.to_checksum_address(self.collateral_token),
            to_bytes32(self.parent_collection_id),
            to_bytes32(self.condition_id),
            list(self.index_sets),
        )


ContractCall = Union[TransferPosition, SetApprovalForAll, PrepareCondition, RedeemPositions]


def bind_call(contract: Contract, call: ContractCall) -> ContractFunction:
    """Bind a call record to a contract instance's function of the same name."""
    return getattr(contract.functions, call.function_name)(*call.arguments())


def encode_call(call: ContractCall) -> str:
    """Return 0x-prefixed calldata: 4-byte selector followed by the ABI-encoded arguments."""
    return bind_call(_ctf_interface, call)._encode_transaction_data()
