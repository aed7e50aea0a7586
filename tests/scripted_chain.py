"""In-memory JSON-RPC endpoint for driving ConditionalTokenClient in tests."""

import itertools
from typing import Any, Callable, Dict, List, Union

from eth_abi import encode
from eth_account import Account
from web3 import Web3
from web3.providers.base import BaseProvider

from ctf_client.client import ConditionalTokenClient
from ctf_client.logs import CONDITION_PREPARATION_TOPIC

CTF_ADDRESS = Web3.to_checksum_address('0xc59b0e4de5f1248c1140964e0ff287b192407e0c')
COLLATERAL = Web3.to_checksum_address('0x6b175474e89094c44da98b954eedeac495271d0f')
OPERATOR = '0x' + '12' * 20
ORACLE = '0x' + 'aa' * 20
QUESTION_ID = '0x' + '01' * 32
SIGNER_KEY = '0x' + '11' * 32
HEAD_BLOCK = 20_000_000


def selector(signature: str) -> str:
    return Web3.to_hex(Web3.keccak(text=signature)[:4])


def abi_result(types: List[str], values: List[Any]) -> str:
    return '0x' + encode(types, values).hex()


def condition_log_entry(
    condition_id: str,
    oracle: str = ORACLE,
    question_id: str = QUESTION_ID,
    outcome_slot_count: int = 2,
    block_number: int = 10_000_000,
    log_index: int = 0,
) -> Dict[str, Any]:
    """Raw eth_getLogs entry for a ConditionPreparation event."""
    return {
        'address': CTF_ADDRESS.lower(),
        'topics': [
            CONDITION_PREPARATION_TOPIC,
            condition_id,
            '0x' + '00' * 12 + oracle[2:].lower(),
            question_id,
        ],
        'data': abi_result(['uint256'], [outcome_slot_count]),
        'blockNumber': hex(block_number),
        'blockHash': '0x' + f'{block_number:064x}',
        'transactionHash': '0x' + f'{block_number * 1000 + log_index:064x}',
        'transactionIndex': '0x0',
        'logIndex': hex(log_index),
        'removed': False,
    }


class ScriptedProvider(BaseProvider):
    """Answers the JSON-RPC methods the client uses from scripted state."""

    def __init__(self, chain_id: int = 1):
        super().__init__()
        self.chain_id = chain_id
        self.block_number = HEAD_BLOCK
        self.call_results: Dict[str, Union[str, Callable[[str], str]]] = {}
        self.calls: List[str] = []
        self.logs: List[Dict[str, Any]] = []
        self.log_filters: List[Dict[str, Any]] = []
        self.raw_transactions: List[str] = []
        self.receipt_status = 1
        self.failure = None
        self.errors: Dict[str, Dict[str, Any]] = {}
        self._ids = itertools.count(1)

    def make_request(self, method, params):
        if self.failure is not None:
            raise self.failure
        if method in self.errors:
            return {'jsonrpc': '2.0', 'id': next(self._ids), 'error': self.errors[method]}
        return {'jsonrpc': '2.0', 'id': next(self._ids), 'result': self._dispatch(method, params)}

    def _dispatch(self, method: str, params: Any) -> Any:
        if method == 'eth_chainId':
            return hex(self.chain_id)
        if method == 'eth_blockNumber':
            return hex(self.block_number)
        if method == 'eth_gasPrice':
            return hex(10 ** 9)
        if method == 'eth_getTransactionCount':
            return '0x0'
        if method == 'eth_call':
            data = params[0].get('data') or params[0].get('input')
            self.calls.append(data)
            result = self.call_results[data[:10]]
            return result(data) if callable(result) else result
        if method == 'eth_getLogs':
            self.log_filters.append(params[0])
            return self.logs
        if method == 'eth_sendRawTransaction':
            self.raw_transactions.append(params[0])
            return Web3.to_hex(Web3.keccak(hexstr=params[0]))
        if method == 'eth_getTransactionReceipt':
            return {
                'transactionHash': params[0],
                'transactionIndex': '0x0',
                'blockHash': '0x' + 'ab' * 32,
                'blockNumber': hex(self.block_number + 1),
                'gasUsed': '0x5208',
                'cumulativeGasUsed': '0x5208',
                'status': hex(self.receipt_status),
                'logs': [],
            }
        raise NotImplementedError(method)


def make_client(provider: ScriptedProvider, signed: bool = True) -> ConditionalTokenClient:
    account = Account.from_key(SIGNER_KEY) if signed else None
    return ConditionalTokenClient(Web3(provider), CTF_ADDRESS, account)
