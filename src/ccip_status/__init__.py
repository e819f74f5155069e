"""
CCIP message status client.

Reports whether a cross-chain message was sent on a lane and, if so, how far
it got on the destination chain.
"""

from .config import ChainConfig, StatusConfig
from .models import MessageState, MessageStatus, StatusOutcome
from .status_checker import MessageStatusChecker

__all__ = [
    "ChainConfig",
    "StatusConfig",
    "MessageState",
    "MessageStatus",
    "StatusOutcome",
    "MessageStatusChecker",
]
__version__ = "0.1.0"
