#!/usr/bin/env python3
"""Tests decoding real ABI-encoded on-ramp and off-ramp logs.

Logs are encoded with web3's codec against the bundled ABIs and decoded
back through the contract's event objects, so the record builders see the
same shapes a live node produces.
"""

import pytest
from hexbytes import HexBytes
from web3 import Web3

from ccip_status.models import MessageState, SendRecord, StateChangeRecord, StatusOutcome
from ccip_status.status_checker import MessageStatusChecker
from ccip_status.utils.contract_utility import ContractUtility

from conftest import MESSAGE_ID, OFF_RAMP, ON_RAMP, SOURCE_SELECTOR

EVM2EVM_MESSAGE = (
    "(uint64,address,address,uint64,uint256,bool,uint64,address,uint256,"
    "bytes,(address,uint256)[],bytes[],bytes32)"
)
SENDER = Web3.to_checksum_address("0x" + "aa" * 20)
RECEIVER = Web3.to_checksum_address("0x" + "bb" * 20)
FEE_TOKEN = Web3.to_checksum_address("0x" + "cc" * 20)
SEND_TX = HexBytes("0x" + "01" * 32)
STATE_TX = HexBytes("0x" + "02" * 32)


@pytest.fixture
def utility():
    # HTTPProvider does not connect until a request is made
    return ContractUtility("https://test.rpc.url")


def make_log(address: str, topics: list, data: bytes, block_number: int, tx_hash: HexBytes) -> dict:
    """A raw log entry as returned by eth_getLogs."""
    return {
        "address": Web3.to_checksum_address(address),
        "topics": [HexBytes(t) for t in topics],
        "data": HexBytes(data),
        "blockNumber": block_number,
        "blockHash": HexBytes("0x" + "ee" * 32),
        "transactionHash": tx_hash,
        "transactionIndex": 0,
        "logIndex": 1,
        "removed": False,
    }


def encode_send_log(utility: ContractUtility, message_id: str, sequence_number: int) -> dict:
    message = (
        SOURCE_SELECTOR,
        SENDER,
        RECEIVER,
        sequence_number,
        200_000,
        False,
        7,
        FEE_TOKEN,
        10**15,
        b"hello",
        [(FEE_TOKEN, 5)],
        [b"\x01\x02"],
        bytes(HexBytes(message_id)),
    )
    topic = Web3.keccak(text=f"CCIPSendRequested({EVM2EVM_MESSAGE})")
    data = utility.w3.codec.encode([EVM2EVM_MESSAGE], [message])
    return make_log(ON_RAMP, [topic], data, 100, SEND_TX)


def encode_state_log(
    utility: ContractUtility, message_id: str, sequence_number: int, state: int
) -> dict:
    topics = [
        Web3.keccak(text="ExecutionStateChanged(uint64,bytes32,uint8,bytes)"),
        utility.w3.codec.encode(["uint64"], [sequence_number]),
        HexBytes(message_id),
    ]
    data = utility.w3.codec.encode(["uint8", "bytes"], [state, b""])
    return make_log(OFF_RAMP, topics, data, 200, STATE_TX)


def decode_send(utility: ContractUtility, log: dict):
    on_ramp = utility.get_contract(ON_RAMP, "OnRamp")
    return on_ramp.events.CCIPSendRequested.process_log(log)


def decode_state(utility: ContractUtility, log: dict):
    off_ramp = utility.get_contract(OFF_RAMP, "OffRamp")
    return off_ramp.events.ExecutionStateChanged.process_log(log)


class TestSendRequestedDecoding:
    """Tests for CCIPSendRequested logs."""

    def test_send_record_fields(self, utility):
        event = decode_send(utility, encode_send_log(utility, MESSAGE_ID, 42))

        record = SendRecord.from_event(event)

        assert record.message_id == HexBytes(MESSAGE_ID)
        assert record.sequence_number == 42
        assert record.source_chain_selector == SOURCE_SELECTOR
        assert record.sender == SENDER
        assert record.receiver == RECEIVER
        assert record.nonce == 7
        assert record.block_number == 100
        assert record.transaction_hash == SEND_TX.to_0x_hex()


class TestExecutionStateChangedDecoding:
    """Tests for ExecutionStateChanged logs."""

    def test_state_change_record_fields(self, utility):
        event = decode_state(utility, encode_state_log(utility, MESSAGE_ID, 42, 3))

        record = StateChangeRecord.from_event(event)

        assert record.message_id == HexBytes(MESSAGE_ID)
        assert record.sequence_number == 42
        assert record.state == 3
        assert record.message_state is MessageState.FAILURE
        assert record.return_data == HexBytes(b"")
        assert record.block_number == 200
        assert record.transaction_hash == STATE_TX.to_0x_hex()


class TestDecodedLookup:
    """Tests for the lookup flow over decoded logs."""

    def test_success_from_decoded_logs(self, utility, status_config, build_network):
        """Test the A->B flow ending in Success when fed decoded logs."""
        send = decode_send(utility, encode_send_log(utility, MESSAGE_ID, 5))
        state = decode_state(utility, encode_state_log(utility, MESSAGE_ID, 5, 2))
        network = build_network(send_events=[send], state_events=[state])

        status = MessageStatusChecker(status_config, network).check("A", "B", MESSAGE_ID)

        assert status.outcome is StatusOutcome.PROCESSED
        assert str(status) == f"Status of message {MESSAGE_ID} is Success"
