#!/usr/bin/env python3
"""Data models for the CCIP message status client.

This module provides immutable data classes for the on-chain log entries
read from the on-ramp and off-ramp contracts, the router's off-ramp bindings,
and the final status reported for a message.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any

from hexbytes import HexBytes

from .exceptions import UnknownMessageStateError

MESSAGE_ID_LENGTH = 32


class MessageState(IntEnum):
    """Execution state of a message on the destination off-ramp."""
    UNTOUCHED = 0
    IN_PROGRESS = 1
    SUCCESS = 2
    FAILURE = 3

    @property
    def label(self) -> str:
        return _STATE_LABELS[self]


_STATE_LABELS: dict[MessageState, str] = {
    MessageState.UNTOUCHED: "Untouched",
    MessageState.IN_PROGRESS: "InProgress",
    MessageState.SUCCESS: "Success",
    MessageState.FAILURE: "Failure",
}


def get_message_state(code: int) -> MessageState:
    """Map a numeric execution state code to a MessageState.

    Raises:
        UnknownMessageStateError: If the code is outside the known set
    """
    try:
        return MessageState(int(code))
    except ValueError:
        raise UnknownMessageStateError(code) from None


def to_message_id(value: str | bytes) -> HexBytes:
    """Parse a message identifier into its 32-byte form.

    Hex strings are accepted with or without the 0x prefix and in any case.

    Raises:
        ValueError: If the value is not 32 bytes of hex
    """
    try:
        message_id = HexBytes(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid message id {value!r}: {e}") from None

    if len(message_id) != MESSAGE_ID_LENGTH:
        raise ValueError(
            f"Invalid message id {value!r}: expected {MESSAGE_ID_LENGTH} bytes, "
            f"got {len(message_id)}"
        )
    return message_id


def read_field(container: Any, name: str) -> Any:
    """Read a named field from a decoded event argument.

    Decoded logs expose arguments as mappings, struct arguments as nested
    mappings or as objects with attributes depending on the web3 version.
    """
    if isinstance(container, Mapping):
        return container[name]
    return getattr(container, name)


def _hex(value: Any) -> str:
    return HexBytes(value).to_0x_hex() if value is not None else ""


@dataclass(frozen=True, slots=True)
class SendRecord:
    """A CCIPSendRequested log entry on the source chain's on-ramp.

    Attributes:
        message_id: 32-byte message identifier
        sequence_number: Sequence number assigned by the on-ramp
        source_chain_selector: Selector of the chain the message left from
        sender: Address that sent the message
        receiver: Address the message is addressed to
        nonce: Sender nonce on this lane
        block_number: Block number where the event was emitted
        transaction_hash: Hash of the transaction that emitted the event
    """

    message_id: HexBytes
    sequence_number: int
    source_chain_selector: int
    sender: str
    receiver: str
    nonce: int
    block_number: int
    transaction_hash: str

    @classmethod
    def from_event(cls, event: Any) -> "SendRecord":
        """Build a SendRecord from a decoded CCIPSendRequested event."""
        message = read_field(read_field(event, "args"), "message")
        return cls(
            message_id=HexBytes(read_field(message, "messageId")),
            sequence_number=read_field(message, "sequenceNumber"),
            source_chain_selector=read_field(message, "sourceChainSelector"),
            sender=read_field(message, "sender"),
            receiver=read_field(message, "receiver"),
            nonce=read_field(message, "nonce"),
            block_number=read_field(event, "blockNumber"),
            transaction_hash=_hex(read_field(event, "transactionHash")),
        )

    def __str__(self) -> str:
        """Human-readable string representation."""
        return (
            f"SendRecord(message={self.message_id.to_0x_hex()[:10]}..., "
            f"seq={self.sequence_number}, "
            f"block={self.block_number})"
        )


@dataclass(frozen=True, slots=True)
class StateChangeRecord:
    """An ExecutionStateChanged log entry on the destination chain's off-ramp.

    Attributes:
        message_id: 32-byte message identifier
        sequence_number: Sequence number of the executed message
        state: Raw numeric execution state
        return_data: Data returned by the receiver (revert reason on failure)
        block_number: Block number where the event was emitted
        transaction_hash: Hash of the transaction that emitted the event
    """

    message_id: HexBytes
    sequence_number: int
    state: int
    return_data: HexBytes
    block_number: int
    transaction_hash: str

    @classmethod
    def from_event(cls, event: Any) -> "StateChangeRecord":
        """Build a StateChangeRecord from a decoded ExecutionStateChanged event."""
        args = read_field(event, "args")
        return cls(
            message_id=HexBytes(read_field(args, "messageId")),
            sequence_number=read_field(args, "sequenceNumber"),
            state=read_field(args, "state"),
            return_data=HexBytes(read_field(args, "returnData")),
            block_number=read_field(event, "blockNumber"),
            transaction_hash=_hex(read_field(event, "transactionHash")),
        )

    @property
    def message_state(self) -> MessageState:
        return get_message_state(self.state)


@dataclass(frozen=True, slots=True)
class OffRampBinding:
    """An off-ramp registered in a destination router for one source chain."""
    source_chain_selector: int
    off_ramp: str


class StatusOutcome(Enum):
    """Which observable bucket a message currently falls into."""
    NOT_FOUND = "not_found"
    NOT_PROCESSED = "not_processed"
    PROCESSED = "processed"


@dataclass(frozen=True, slots=True)
class MessageStatus:
    """Result of a status lookup.

    Attributes:
        message_id: Identifier exactly as requested
        outcome: Observable bucket the message is in
        state: Execution state, set only when outcome is PROCESSED
    """

    message_id: str
    outcome: StatusOutcome
    state: MessageState | None = None

    def __str__(self) -> str:
        """The status line printed for the user."""
        if self.outcome is StatusOutcome.NOT_FOUND:
            return f"Message {self.message_id} does not exist on this lane"
        if self.outcome is StatusOutcome.NOT_PROCESSED:
            return f"Message {self.message_id} is not processed yet on destination chain"
        return f"Status of message {self.message_id} is {self.state.label}"
