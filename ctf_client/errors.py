"""Exceptions raised by the Conditional Tokens client."""

from typing import Optional


class ConditionalTokensError(Exception):
    """Base class for every error surfaced by this package."""


class ConditionNotFoundError(ConditionalTokensError):
    """No ConditionPreparation event exists for the condition in the searched range."""

    def __init__(self, condition_id: str):
        self.condition_id = condition_id
        super().__init__(f"No ConditionPreparation event found for conditionId '{condition_id}'")


class MalformedLogError(ConditionalTokensError):
    """A matched log could not be decoded with the ConditionPreparation ABI."""


class TransactionRejectedError(ConditionalTokensError):
    """A submitted transaction reverted, was refused by the node, or never got mined."""

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        self.tx_hash = tx_hash
        super().__init__(message)


class NetworkUnavailableError(ConditionalTokensError):
    """The RPC endpoint could not complete a request."""


class UnsupportedNetworkError(ConditionalTokensError):
    def __init__(self, network_id: int):
        self.network_id = network_id
        super().__init__(f"No earliest block known for network {network_id}")


class SignerRequiredError(ConditionalTokensError):
    """A write operation was attempted on a client opened without a signer."""
