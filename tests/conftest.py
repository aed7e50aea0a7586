import pytest

from ctf_client import config
from scripted_chain import ScriptedProvider


@pytest.fixture(autouse=True)
def no_earliest_block_override(monkeypatch):
    monkeypatch.setattr(config, 'CTF_EARLIEST_BLOCK', None)


@pytest.fixture
def provider():
    return ScriptedProvider()
