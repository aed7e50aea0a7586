"""Client for the Conditional Tokens Framework contract."""

from ctf_client.calls import (
    PrepareCondition,
    RedeemPositions,
    SetApprovalForAll,
    TransferPosition,
    encode_call,
)
from ctf_client.client import ConditionalTokenClient
from ctf_client.errors import (
    ConditionalTokensError,
    ConditionNotFoundError,
    MalformedLogError,
    NetworkUnavailableError,
    SignerRequiredError,
    TransactionRejectedError,
    UnsupportedNetworkError,
)
from ctf_client.identifiers import get_condition_id
from ctf_client.index_sets import get_index_sets
from ctf_client.models import ConditionLog, ConditionState

__all__ = [
    "ConditionalTokenClient",
    "ConditionLog",
    "ConditionState",
    "ConditionalTokensError",
    "ConditionNotFoundError",
    "MalformedLogError",
    "NetworkUnavailableError",
    "SignerRequiredError",
    "TransactionRejectedError",
    "UnsupportedNetworkError",
    "PrepareCondition",
    "RedeemPositions",
    "SetApprovalForAll",
    "TransferPosition",
    "encode_call",
    "get_condition_id",
    "get_index_sets",
]
