"""
Async client for a deployed ConditionalTokens contract.

web3's HTTP provider is blocking, so every round trip runs in the default
executor and the calling coroutine suspends until it completes. Reads are
never cached and writes block until their receipt is available. Retry and
timeout policy belongs to the caller.
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional, Union

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.contract.contract import ContractFunction
from web3.exceptions import TimeExhausted, Web3Exception
from web3.types import TxReceipt

from ctf_client import config
from ctf_client.abi.ctf_abi import ctf_abi
from ctf_client.calls import (
    ContractCall,
    PrepareCondition,
    RedeemPositions,
    SetApprovalForAll,
    TransferPosition,
    bind_call,
    encode_call,
)
from ctf_client.errors import (
    ConditionNotFoundError,
    NetworkUnavailableError,
    SignerRequiredError,
    TransactionRejectedError,
)
from ctf_client.identifiers import ZERO_COLLECTION_ID, get_condition_id, to_bytes32
from ctf_client.index_sets import get_index_sets
from ctf_client.logs import EventLogResolver
from ctf_client.models import ConditionLog, ConditionState

logger = logging.getLogger(__name__)


class ConditionalTokenClient:
    def __init__(
        self,
        w3: Web3,
        address: str,
        account: Optional[LocalAccount] = None,
        gas_limit: int = config.GAS_LIMIT,
    ):
        self.w3 = w3
        self.contract = w3.eth.contract(address=Web3.to_checksum_address(address), abi=ctf_abi)
        self.account = account
        self.gas_limit = gas_limit
        self.resolver = EventLogResolver(w3, self.contract)

    @classmethod
    def from_config(cls) -> 'ConditionalTokenClient':
        """Client wired from environment configuration (see ``config.py``)."""
        return cls(config.make_web3(), config.CONDITIONAL_TOKENS_ADDRESS, config.load_account())

    @property
    def address(self) -> str:
        return self.contract.address

    @property
    def signer_address(self) -> Optional[str]:
        return self.account.address if self.account else None

    # --- Plumbing ---

    async def _run(self, fn: Callable, *args) -> Any:
        """Run blocking web3 work in the thread pool."""
        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(None, fn, *args)
        except OSError as e:
            raise NetworkUnavailableError(f"RPC request failed: {e}") from e

    async def _call(self, fn: ContractFunction) -> Any:
        return await self._run(fn.call)

    def _require_signer(self) -> LocalAccount:
        if self.account is None:
            raise SignerRequiredError("This operation needs a signer; the client was opened read-only")
        return self.account

    def _transact_sync(self, call: ContractCall) -> TxReceipt:
        """Build, sign and send one transaction, then block until its receipt arrives."""
        account = self._require_signer()
        label = call.function_name

        tx = bind_call(self.contract, call).build_transaction({
            'from': account.address,
            'nonce': self.w3.eth.get_transaction_count(account.address),
            'gas': self.gas_limit,
            'gasPrice': self.w3.eth.gas_price,
        })
        signed_tx = account.sign_transaction(tx)

        try:
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        except (ValueError, Web3Exception) as e:
            raise TransactionRejectedError(f"{label} transaction refused by node: {e}") from e

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(f"{label} transaction hash: {tx_hash_hex}")

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash)
        except TimeExhausted as e:
            raise TransactionRejectedError(f"{label} transaction {tx_hash_hex} was not mined", tx_hash_hex) from e

        if receipt['status'] != 1:
            logger.error(f"{label} transaction {tx_hash_hex} reverted")
            raise TransactionRejectedError(f"{label} transaction {tx_hash_hex} reverted", tx_hash_hex)

        logger.info(f"{label} confirmed in block {receipt['blockNumber']}")
        return receipt

    async def _transact(self, call: ContractCall) -> TxReceipt:
        self._require_signer()
        return await self._run(self._transact_sync, call)

    # --- Conditions ---

    async def prepare_condition(
        self,
        question_id: Union[str, bytes],
        oracle_address: str,
        outcome_slot_count: int = 2,
    ) -> str:
        """
        Prepare a condition and wait for it to be mined.

        The returned id is derived locally from the inputs rather than read
        back from the chain; it is the same value the contract computes.
        """
        await self._transact(PrepareCondition(oracle_address, question_id, outcome_slot_count))
        return get_condition_id(oracle_address, question_id, outcome_slot_count)

    def get_condition_id(self, question_id: Union[str, bytes], oracle_address: str, outcome_slot_count: int) -> str:
        return get_condition_id(oracle_address, question_id, outcome_slot_count)

    async def get_condition_id_from_logs(self, condition_id: str) -> ConditionLog:
        return await self._run(self.resolver.resolve, condition_id)

    async def get_question_id(self, condition_id: str) -> str:
        condition_log = await self.get_condition_id_from_logs(condition_id)
        return condition_log.question_id

    async def is_condition_resolved(self, condition_id: str) -> bool:
        """A condition is resolved once its payout denominator is non-zero."""
        payout_denominator = await self._call(
            self.contract.functions.payoutDenominator(to_bytes32(condition_id))
        )
        return payout_denominator != 0

    async def get_payout_numerators(self, condition_id: str, outcome_slot_count: int) -> List[int]:
        cond_bytes = to_bytes32(condition_id)
        numerators = []
        for index in range(outcome_slot_count):
            numerators.append(await self._call(self.contract.functions.payoutNumerators(cond_bytes, index)))
        return numerators

    async def get_condition_state(self, condition_id: str) -> ConditionState:
        """Point-in-time observation of Unprepared -> Prepared -> Resolved."""
        if await self.is_condition_resolved(condition_id):
            return ConditionState.RESOLVED
        try:
            await self.get_condition_id_from_logs(condition_id)
        except ConditionNotFoundError:
            return ConditionState.UNPREPARED
        return ConditionState.PREPARED

    # --- Collections, positions and balances ---

    async def get_collection_id_for_outcome(self, condition_id: str, outcome_index: int) -> str:
        """Collection id of the single-outcome index set under the root collection."""
        collection_id = await self._call(
            self.contract.functions.getCollectionId(ZERO_COLLECTION_ID, to_bytes32(condition_id), 1 << outcome_index)
        )
        return Web3.to_hex(collection_id)

    async def get_position_id(self, collateral_address: str, collection_id: str) -> int:
        return await self._call(
            self.contract.functions.getPositionId(
                Web3.to_checksum_address(collateral_address), to_bytes32(collection_id)
            )
        )

    async def get_balance_of(self, owner_address: str, position_id: int) -> int:
        return await self._call(
            self.contract.functions.balanceOf(Web3.to_checksum_address(owner_address), position_id)
        )

    async def redeem_positions(self, collateral_token: str, condition_id: str, outcomes_count: int) -> None:
        """Redeem every single-outcome position of a resolved condition in one transaction."""
        index_sets = get_index_sets(outcomes_count)
        await self._transact(RedeemPositions(collateral_token, condition_id, index_sets))

    # --- Approvals ---

    async def set_approval_for_all(self, operator_address: str) -> TxReceipt:
        return await self._transact(SetApprovalForAll(operator_address, True))

    async def is_approved_for_all(self, operator_address: str) -> bool:
        account = self._require_signer()
        return await self._call(
            self.contract.functions.isApprovedForAll(account.address, Web3.to_checksum_address(operator_address))
        )

    # --- Network ---

    async def network_id(self) -> int:
        return await self._run(lambda: self.w3.eth.chain_id)

    # --- Calldata for callers that submit elsewhere ---

    @staticmethod
    def encode_safe_transfer_from(
        address_from: str,
        address_to: str,
        position_id: int,
        outcome_tokens_to_transfer: int,
    ) -> str:
        return encode_call(TransferPosition(address_from, address_to, position_id, outcome_tokens_to_transfer))

    @staticmethod
    def encode_set_approval_for_all(address: str, approved: bool) -> str:
        return encode_call(SetApprovalForAll(address, approved))

    @staticmethod
    def encode_prepare_condition(question_id: Union[str, bytes], oracle_address: str, outcome_slot_count: int) -> str:
        return encode_call(PrepareCondition(oracle_address, question_id, outcome_slot_count))
