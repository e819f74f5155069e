#!/usr/bin/env python3
"""Message status lookup for CCIP lanes.

This module walks the fixed sequence of read calls that places a message in
one of three observable buckets: not sent on the lane, sent but not yet
executed on the destination, or executed with a terminal state.
"""

import logging
from collections.abc import Callable

from hexbytes import HexBytes

from .config import ChainConfig, StatusConfig
from .exceptions import LaneNotSupportedError
from .models import (
    MessageStatus,
    OffRampBinding,
    SendRecord,
    StateChangeRecord,
    StatusOutcome,
    to_message_id,
)
from .router import RouterClient
from .utils.contract_utility import ContractUtility
from .utils.log_scanner import LogScanner

logger = logging.getLogger(__name__)


class MessageStatusChecker:
    """Determines the status of a message on a source/destination lane.

    Every remote call completes before the next one is issued. Nothing is
    retried: the first failing call propagates to the caller.
    """

    def __init__(
        self,
        config: StatusConfig,
        contract_util_factory: Callable[[str, int], ContractUtility] | None = None
    ) -> None:
        """
        Initialize the MessageStatusChecker.

        Args:
            config: Chain table and scan settings
            contract_util_factory: Builds a per-chain utility from (rpc_url, timeout);
                defaults to ContractUtility
        """
        self.config = config
        self.contract_util_factory = contract_util_factory or ContractUtility

    def check(self, source_chain: str, destination_chain: str, message_id: str) -> MessageStatus:
        """Look up the status of a message.

        Args:
            source_chain: Name of the chain the message was sent from
            destination_chain: Name of the chain the message is delivered to
            message_id: Message identifier (0x-prefixed hex)

        Returns:
            MessageStatus describing which bucket the message is in

        Raises:
            ConfigurationError: If either chain is not configured
            LaneNotSupportedError: If the source router rejects the destination
        """
        # Both chains are resolved before any remote call is made
        source = self.config.get_chain(source_chain)
        destination = self.config.get_chain(destination_chain)

        logger.info(f"Checking message {message_id} on lane {source.name}->{destination.name}")

        source_util = self.contract_util_factory(source.rpc_url, self.config.scan.request_timeout)
        source_router = RouterClient(source_util, source.router)

        if not source_router.is_chain_supported(destination.chain_selector):
            raise LaneNotSupportedError(source.name, destination.name)

        try:
            target_id = to_message_id(message_id)
        except ValueError as e:
            # No on-ramp entry can carry an id that is not 32 bytes
            logger.info(f"{e}; treating as absent from the lane")
            return MessageStatus(message_id=message_id, outcome=StatusOutcome.NOT_FOUND)

        send_record = self.find_send_record(source_util, source_router, destination, target_id)
        if send_record is None:
            return MessageStatus(message_id=message_id, outcome=StatusOutcome.NOT_FOUND)

        logger.info(f"Found {send_record}")

        destination_util = self.contract_util_factory(
            destination.rpc_url, self.config.scan.request_timeout
        )
        destination_router = RouterClient(destination_util, destination.router)

        state_change = self.find_state_change(
            destination_util, destination_router, source, target_id
        )
        if state_change is None:
            return MessageStatus(message_id=message_id, outcome=StatusOutcome.NOT_PROCESSED)

        return MessageStatus(
            message_id=message_id,
            outcome=StatusOutcome.PROCESSED,
            state=state_change.message_state,
        )

    def find_send_record(
        self,
        source_util: ContractUtility,
        source_router: RouterClient,
        destination: ChainConfig,
        message_id: HexBytes
    ) -> SendRecord | None:
        """Scan the lane's on-ramp for the CCIPSendRequested entry of a message."""
        on_ramp_address = source_router.get_on_ramp(destination.chain_selector)
        on_ramp = source_util.get_contract(on_ramp_address, "OnRamp")

        scanner = self._scanner(on_ramp, "CCIPSendRequested")
        for event in scanner.scan():
            record = SendRecord.from_event(event)
            if record.message_id == message_id:
                return record

        logger.info(f"No CCIPSendRequested entry for {message_id.to_0x_hex()} on {on_ramp_address}")
        return None

    def find_state_change(
        self,
        destination_util: ContractUtility,
        destination_router: RouterClient,
        source: ChainConfig,
        message_id: HexBytes
    ) -> StateChangeRecord | None:
        """Scan the off-ramp serving the source chain for the message's execution entry.

        When the router lists several off-ramps for the source selector only
        the first one, in router order, is consulted.
        """
        binding = select_off_ramp(destination_router.get_off_ramps(), source.chain_selector)
        if binding is None:
            logger.info(f"No off-ramp registered for source selector {source.chain_selector}")
            return None

        off_ramp = destination_util.get_contract(binding.off_ramp, "OffRamp")
        scanner = self._scanner(off_ramp, "ExecutionStateChanged")
        for event in scanner.scan(argument_filters={"messageId": message_id}):
            record = StateChangeRecord.from_event(event)
            if record.message_id == message_id:
                return record

        return None

    def _scanner(self, contract, event_name: str) -> LogScanner:
        return LogScanner(
            contract,
            event_name,
            from_block=self.config.scan.from_block,
            block_range=self.config.scan.block_range,
        )


def select_off_ramp(
    bindings: list[OffRampBinding],
    source_chain_selector: int
) -> OffRampBinding | None:
    """First binding serving the given source selector, or None."""
    return next(
        (b for b in bindings if b.source_chain_selector == source_chain_selector),
        None
    )
