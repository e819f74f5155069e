"""
Historical event log retrieval for a single contract event.

"""

import logging
from typing import Any

from web3.contract import Contract
from web3.types import EventData


class LogScanner:
    """
    Fetches every log of one event emitted by a contract, from a start block
    to the chain head.

    Without a block range the whole history is requested in a single
    eth_getLogs call. With one, the range is walked in fixed-size windows in
    ascending block order, so the entries come back in the same order.
    """

    def __init__(
        self,
        contract: Contract,
        event_name: str,
        from_block: int = 0,
        block_range: int | None = None
    ) -> None:
        """
        Initialize the log scanner.

        Args:
            contract: Contract instance bound to the emitting address
            event_name: Name of the event to fetch
            from_block: First block to scan
            block_range: Maximum blocks per request (None for a single request)
        """
        if not hasattr(contract.events, event_name):
            raise ValueError(f"Event {event_name} not found in contract ABI")

        self.contract = contract
        self.event_name = event_name
        self.event_obj = getattr(contract.events, event_name)
        self.from_block = from_block
        self.block_range = block_range

        # Setup logging
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def scan(self, argument_filters: dict[str, Any] | None = None) -> list[EventData]:
        """
        Fetch all matching logs.

        Args:
            argument_filters: Indexed event arguments to filter on server-side

        Returns:
            Decoded events in block order
        """
        if not self.block_range:
            self.logger.debug(
                f"Fetching {self.event_name} logs from block {self.from_block} to latest "
                f"on {self.contract.address}"
            )
            events = self.event_obj.get_logs(
                argument_filters=argument_filters,
                from_block=self.from_block,
                to_block="latest"
            )
            self.logger.info(f"Found {len(events)} {self.event_name} events")
            return list(events)

        head = self.contract.w3.eth.block_number
        events: list[EventData] = []
        start = self.from_block
        while start <= head:
            end = min(start + self.block_range - 1, head)
            self.logger.debug(f"Fetching {self.event_name} logs in blocks {start}-{end}")
            events.extend(
                self.event_obj.get_logs(
                    argument_filters=argument_filters,
                    from_block=start,
                    to_block=end
                )
            )
            start = end + 1

        self.logger.info(
            f"Found {len(events)} {self.event_name} events "
            f"in blocks {self.from_block}-{head}"
        )
        return events
