"""
Event log resolver for ConditionPreparation.

A condition is known to exist on-chain only once its ConditionPreparation
event can be found. The scan is bounded below by the network's earliest
block (``networks.py``) and above by the current head.
"""

import logging
from typing import Any, Dict, Sequence, Union

from eth_abi.exceptions import DecodingError
from web3 import Web3
from web3.contract import Contract
from web3.exceptions import Web3Exception

from ctf_client.abi.ctf_abi import CONDITION_PREPARATION_SIGNATURE
from ctf_client.errors import ConditionNotFoundError, MalformedLogError
from ctf_client.identifiers import to_bytes32
from ctf_client.models import ConditionLog
from ctf_client.networks import get_earliest_block_to_check

logger = logging.getLogger(__name__)

CONDITION_PREPARATION_TOPIC = Web3.to_hex(Web3.keccak(text=CONDITION_PREPARATION_SIGNATURE))


def build_condition_filter(
    contract_address: str,
    condition_id: Union[str, bytes],
    from_block: int,
    to_block: int,
) -> Dict[str, Any]:
    """eth_getLogs filter on the event signature and the indexed conditionId topic."""
    return {
        'address': Web3.to_checksum_address(contract_address),
        'topics': [CONDITION_PREPARATION_TOPIC, Web3.to_hex(to_bytes32(condition_id))],
        'fromBlock': from_block,
        'toBlock': to_block,
    }


def parse_condition_log(contract: Contract, raw_log: Any) -> ConditionLog:
    try:
        event = contract.events.ConditionPreparation().process_log(raw_log)
        args = event['args']
        return ConditionLog(
            condition_id=Web3.to_hex(args['conditionId']),
            oracle=args['oracle'],
            question_id=Web3.to_hex(args['questionId']),
            outcome_slot_count=args['outcomeSlotCount'],
        )
    except (Web3Exception, DecodingError, KeyError, TypeError, ValueError) as e:
        raise MalformedLogError(f"Cannot decode ConditionPreparation log: {e}") from e


def select_condition_log(contract: Contract, condition_id: str, raw_logs: Sequence[Any]) -> ConditionLog:
    """
    Pick the authoritative ConditionPreparation entry out of a getLogs result.

    Zero entries means the condition was never prepared on this network.
    Several entries are tolerated: preparing the same inputs twice yields the
    same id, so the oldest entry is used and a warning is logged.
    """
    if not raw_logs:
        raise ConditionNotFoundError(condition_id)

    ordered = sorted(raw_logs, key=lambda log: (log['blockNumber'], log['logIndex']))
    if len(ordered) > 1:
        logger.warning(
            f"There should be only one ConditionPreparation event for conditionId '{condition_id}', "
            f"found {len(ordered)}; using the one from block {ordered[0]['blockNumber']}"
        )

    return parse_condition_log(contract, ordered[0])


class EventLogResolver:
    """Looks up ConditionPreparation events through the client's web3 connection."""

    def __init__(self, w3: Web3, contract: Contract):
        self.w3 = w3
        self.contract = contract

    def resolve(self, condition_id: str) -> ConditionLog:
        network_id = self.w3.eth.chain_id
        from_block = get_earliest_block_to_check(network_id)
        to_block = self.w3.eth.block_number

        filter_params = build_condition_filter(self.contract.address, condition_id, from_block, to_block)
        logger.debug(f"Scanning ConditionPreparation logs for {condition_id} in blocks {from_block}-{to_block}")
        raw_logs = self.w3.eth.get_logs(filter_params)

        return select_condition_log(self.contract, condition_id, raw_logs)
