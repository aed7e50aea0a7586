"""Status service tests."""

import asyncio

from aiohttp import test_utils

from ctf_client.identifiers import get_condition_id
from ctf_client.server import create_app
from scripted_chain import CTF_ADDRESS, ORACLE, QUESTION_ID, abi_result, condition_log_entry, make_client, selector

CONDITION_ID = get_condition_id(ORACLE, QUESTION_ID, 2)


def _get(client, path):
    async def run():
        async with test_utils.TestClient(test_utils.TestServer(create_app(client))) as http:
            resp = await http.get(path)
            return resp.status, await resp.json()
    return asyncio.run(run())


def test_status_endpoint(provider):
    status, body = _get(make_client(provider, signed=False), '/api/status')
    assert status == 200
    assert body == {'network_id': 1, 'contract_address': CTF_ADDRESS, 'signer_address': None}


def test_condition_endpoint_prepared(provider):
    provider.call_results[selector('payoutDenominator(bytes32)')] = abi_result(['uint256'], [0])
    provider.logs = [condition_log_entry(CONDITION_ID, outcome_slot_count=2)]

    status, body = _get(make_client(provider, signed=False), f'/api/conditions/{CONDITION_ID}')

    assert status == 200
    assert body['state'] == 'prepared'
    assert body['log']['question_id'] == QUESTION_ID
    assert body['log']['outcome_slot_count'] == 2
    assert len(provider.log_filters) == 1


def test_condition_endpoint_unprepared(provider):
    provider.call_results[selector('payoutDenominator(bytes32)')] = abi_result(['uint256'], [0])
    status, body = _get(make_client(provider, signed=False), f'/api/conditions/{CONDITION_ID}')
    assert status == 200
    assert body == {'condition_id': CONDITION_ID, 'state': 'unprepared', 'log': None}


def test_question_endpoint_not_found(provider):
    status, body = _get(make_client(provider, signed=False), f'/api/conditions/{CONDITION_ID}/question')
    assert status == 404
    assert 'No ConditionPreparation event' in body['error']


def test_bad_condition_id_is_client_error(provider):
    status, _ = _get(make_client(provider, signed=False), '/api/conditions/0x1234')
    assert status == 400


def test_chain_down_is_service_unavailable(provider):
    provider.failure = ConnectionError("connection refused")
    status, _ = _get(make_client(provider, signed=False), f'/api/conditions/{CONDITION_ID}')
    assert status == 503


def test_condition_endpoint_resolved_scans_logs_once(provider):
    provider.call_results[selector('payoutDenominator(bytes32)')] = abi_result(['uint256'], [1])
    provider.logs = [condition_log_entry(CONDITION_ID)]

    status, body = _get(make_client(provider, signed=False), f'/api/conditions/{CONDITION_ID}')

    assert status == 200
    assert body['state'] == 'resolved'
    assert body['log']['condition_id'] == CONDITION_ID
    assert len(provider.log_filters) == 1
