"""
Gravity orchestrator query layer.

Stubborn queries against the Ethereum node and the Gravity module that
retry until the endpoint answers.
"""

from .get_with_retry import (
    get_block_number_with_retry,
    get_chain_id_with_retry,
    get_last_event_nonce_with_retry,
)
from .models import CosmosAccount
from .retry import RETRY_TIME, RetryCancelled, RetryPolicy

__all__ = [
    "CosmosAccount",
    "RETRY_TIME",
    "RetryCancelled",
    "RetryPolicy",
    "get_block_number_with_retry",
    "get_chain_id_with_retry",
    "get_last_event_nonce_with_retry",
]
__version__ = "0.1.0"
