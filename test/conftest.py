"""Shared fixtures: an in-memory two-chain setup with mocked contracts."""

from unittest.mock import MagicMock

import pytest
from hexbytes import HexBytes

from ccip_status.config import RouterConfig, ScanConfig, StatusConfig

SOURCE_ROUTER = "0x0bf3de8c5d3e8a2b34d2beeb17abfcebaf363a59"
DEST_ROUTER = "0xf694e193200268f9a4868e4aa017a0118c9a8177"
ON_RAMP = "0x" + "11" * 20
OFF_RAMP = "0x" + "22" * 20
OTHER_OFF_RAMP = "0x" + "33" * 20

SOURCE_SELECTOR = 16015286601757825753
DEST_SELECTOR = 14767482510784806043
OTHER_SELECTOR = 3478487238524512106

SOURCE_RPC = "https://a.rpc"
DEST_RPC = "https://b.rpc"

MESSAGE_ID = "0x" + "ab" * 32
OTHER_MESSAGE_ID = "0x" + "cd" * 32


def send_event(message_id: str, sequence_number: int = 1, block_number: int = 100) -> dict:
    """A decoded CCIPSendRequested event as returned by get_logs."""
    return {
        "event": "CCIPSendRequested",
        "args": {
            "message": {
                "sourceChainSelector": SOURCE_SELECTOR,
                "sender": "0x" + "aa" * 20,
                "receiver": "0x" + "bb" * 20,
                "sequenceNumber": sequence_number,
                "nonce": sequence_number,
                "messageId": HexBytes(message_id),
            }
        },
        "blockNumber": block_number,
        "transactionHash": HexBytes("0x" + "01" * 32),
        "logIndex": 0,
    }


def state_event(message_id: str, state: int, sequence_number: int = 1) -> dict:
    """A decoded ExecutionStateChanged event as returned by get_logs."""
    return {
        "event": "ExecutionStateChanged",
        "args": {
            "sequenceNumber": sequence_number,
            "messageId": HexBytes(message_id),
            "state": state,
            "returnData": b"",
        },
        "blockNumber": 200,
        "transactionHash": HexBytes("0x" + "02" * 32),
        "logIndex": 3,
    }


def make_router(supported: bool = True, on_ramp: str = ON_RAMP, off_ramps=()) -> MagicMock:
    router = MagicMock()
    router.functions.isChainSupported.return_value.call.return_value = supported
    router.functions.getOnRamp.return_value.call.return_value = on_ramp
    router.functions.getOffRamps.return_value.call.return_value = list(off_ramps)
    return router


def make_event_contract(event_name: str, events) -> MagicMock:
    contract = MagicMock()
    getattr(contract.events, event_name).get_logs.return_value = list(events)
    return contract


class FakeContractUtility:
    """Stands in for ContractUtility, serving mocked contracts by address."""

    def __init__(self, rpc_url: str, contracts: dict[tuple[str, str], MagicMock]) -> None:
        self.rpc_url = rpc_url
        self.contracts = {(address.lower(), name): c for (address, name), c in contracts.items()}
        self.requested: list[tuple[str, str]] = []

    def get_contract(self, address: str, contract_name: str) -> MagicMock:
        self.requested.append((address.lower(), contract_name))
        return self.contracts[(address.lower(), contract_name)]


class FakeNetwork:
    """Factory handing out one FakeContractUtility per RPC URL."""

    def __init__(self, utilities: dict[str, FakeContractUtility]) -> None:
        self.utilities = utilities
        self.connected: list[str] = []

    def __call__(self, rpc_url: str, request_timeout: int) -> FakeContractUtility:
        self.connected.append(rpc_url)
        return self.utilities[rpc_url]


@pytest.fixture
def status_config() -> StatusConfig:
    """Two chains, A and B, with their own routers and RPC endpoints."""
    return StatusConfig(
        routers={
            "A": RouterConfig(router=SOURCE_ROUTER, chain_selector=SOURCE_SELECTOR),
            "B": RouterConfig(router=DEST_ROUTER, chain_selector=DEST_SELECTOR),
        },
        rpc_urls={"A": SOURCE_RPC, "B": DEST_RPC},
        scan=ScanConfig(),
    )


@pytest.fixture
def build_network():
    """Build a FakeNetwork for the A->B lane from router and log contents."""

    def _build(
        supported: bool = True,
        send_events=(),
        off_ramps=((SOURCE_SELECTOR, OFF_RAMP),),
        state_events=(),
        other_state_events=(),
    ) -> FakeNetwork:
        source = FakeContractUtility(SOURCE_RPC, {
            (SOURCE_ROUTER, "Router"): make_router(supported=supported),
            (ON_RAMP, "OnRamp"): make_event_contract("CCIPSendRequested", send_events),
        })
        destination = FakeContractUtility(DEST_RPC, {
            (DEST_ROUTER, "Router"): make_router(off_ramps=off_ramps),
            (OFF_RAMP, "OffRamp"): make_event_contract("ExecutionStateChanged", state_events),
            (OTHER_OFF_RAMP, "OffRamp"): make_event_contract(
                "ExecutionStateChanged", other_state_events
            ),
        })
        return FakeNetwork({SOURCE_RPC: source, DEST_RPC: destination})

    return _build
