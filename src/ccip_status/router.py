#!/usr/bin/env python3
"""Read-only access to a CCIP Router contract.

The router tells which destination selectors a chain can send to, which
on-ramp handles each outgoing lane, and which off-ramps deliver incoming
messages for each source chain.
"""

import logging
from typing import TYPE_CHECKING

from web3 import Web3
from web3.contract import Contract

from .models import OffRampBinding, read_field

if TYPE_CHECKING:
    from .utils.contract_utility import ContractUtility

logger = logging.getLogger(__name__)


class RouterClient:
    """Wraps the view functions of a Router contract."""

    def __init__(self, contract_util: "ContractUtility", router_address: str) -> None:
        """
        Initialize the RouterClient.

        Args:
            contract_util: Utility bound to the router's chain
            router_address: Address of the Router contract
        """
        self.contract_util: ContractUtility = contract_util
        self.router_address: str = Web3.to_checksum_address(router_address)
        self.contract: Contract = contract_util.get_contract(self.router_address, "Router")

    def is_chain_supported(self, chain_selector: int) -> bool:
        """Whether this router can send to the given destination selector."""
        supported = self.contract.functions.isChainSupported(chain_selector).call()
        logger.debug(f"Router {self.router_address} supports {chain_selector}: {supported}")
        return bool(supported)

    def get_on_ramp(self, dest_chain_selector: int) -> str:
        """Address of the on-ramp handling messages to the given selector."""
        on_ramp = self.contract.functions.getOnRamp(dest_chain_selector).call()
        logger.info(f"On-ramp for destination {dest_chain_selector}: {on_ramp}")
        return on_ramp

    def get_off_ramps(self) -> list[OffRampBinding]:
        """All off-ramps registered in this router, in router order."""
        off_ramps = self.contract.functions.getOffRamps().call()
        bindings = [self._to_binding(entry) for entry in off_ramps]
        logger.info(f"Router {self.router_address} has {len(bindings)} off-ramps")
        return bindings

    @staticmethod
    def _to_binding(entry: object) -> OffRampBinding:
        # Struct outputs decode as tuples, or as mappings/objects when named
        if isinstance(entry, (tuple, list)):
            source_chain_selector, off_ramp = entry
        else:
            source_chain_selector = read_field(entry, "sourceChainSelector")
            off_ramp = read_field(entry, "offRamp")
        return OffRampBinding(
            source_chain_selector=int(source_chain_selector),
            off_ramp=off_ramp,
        )
