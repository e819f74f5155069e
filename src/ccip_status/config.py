#!/usr/bin/env python3
"""Configuration management for the CCIP message status client.

Router addresses and chain selectors come from a static table. RPC endpoints
are read from the environment, one variable per chain. Everything is bundled
into an immutable StatusConfig that is passed to the status checker, so
tests can substitute their own chains without touching module state.
"""

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from urllib.parse import urlparse

from web3 import Web3

from .exceptions import ConfigurationError

# Get logger for this module
logger = logging.getLogger(__name__)

UINT64_MAX = 2**64 - 1


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Static router entry for one chain.

    Attributes:
        router: Checksummed address of the CCIP Router contract
        chain_selector: CCIP chain selector (uint64 routing key)
    """

    router: str
    chain_selector: int

    def __post_init__(self) -> None:
        """Validate and checksum the router entry."""
        if not Web3.is_address(self.router):
            raise ConfigurationError(f"Invalid router address: {self.router}")

        checksummed = Web3.to_checksum_address(self.router)
        if checksummed != self.router:
            # Use object.__setattr__ since dataclass is frozen
            object.__setattr__(self, 'router', checksummed)

        if not 0 <= self.chain_selector <= UINT64_MAX:
            raise ConfigurationError(
                f"Chain selector out of uint64 range: {self.chain_selector}"
            )


@dataclass(frozen=True, slots=True)
class ChainConfig:
    """Fully resolved configuration for one chain.

    Attributes:
        name: Chain name as given on the command line (e.g. 'ethereumSepolia')
        router: Checksummed Router contract address
        chain_selector: CCIP chain selector
        rpc_url: HTTP(S) or WS(S) RPC endpoint
    """

    name: str
    router: str
    chain_selector: int
    rpc_url: str

    def __post_init__(self) -> None:
        """Validate the RPC endpoint."""
        parsed = urlparse(self.rpc_url)
        if parsed.scheme not in ('http', 'https', 'ws', 'wss'):
            raise ConfigurationError(
                f"Invalid RPC URL scheme for {self.name}: {parsed.scheme}. "
                "Expected http, https, ws, or wss"
            )


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Settings for historical log retrieval and RPC access."""
    from_block: int = 0  # first block scanned on both chains
    block_range: int | None = None  # None scans the whole range in one call
    request_timeout: int = 30  # HTTP request timeout in seconds

    def __post_init__(self) -> None:
        """Validate scan configuration."""
        if self.from_block < 0:
            raise ConfigurationError(f"From block must be non-negative, got {self.from_block}")

        if self.block_range is not None and self.block_range <= 0:
            raise ConfigurationError(f"Log block range must be positive, got {self.block_range}")

        if self.request_timeout <= 0:
            raise ConfigurationError(f"Request timeout must be positive, got {self.request_timeout}")
        if self.request_timeout > 120:
            raise ConfigurationError(f"Request timeout too long (max 120s), got {self.request_timeout}")


def _router_table(entries: dict[str, tuple[str, int]]) -> Mapping[str, RouterConfig]:
    return MappingProxyType({
        name: RouterConfig(router=router, chain_selector=selector)
        for name, (router, selector) in entries.items()
    })


ROUTER_TABLE: Mapping[str, RouterConfig] = _router_table({
    # Testnets
    "ethereumSepolia": ("0x0bf3de8c5d3e8a2b34d2beeb17abfcebaf363a59", 16015286601757825753),
    "optimismSepolia": ("0x114a20a10b43d4115e5aeef7345a1a71d2a60c57", 5224473277236331295),
    "arbitrumSepolia": ("0x2a9c5afb0d0e4bab2bcdae109ec4b0c4be15a165", 3478487238524512106),
    "avalancheFuji": ("0xf694e193200268f9a4868e4aa017a0118c9a8177", 14767482510784806043),
    "polygonAmoy": ("0x9c32fcb86bf0f4a1a8921a9fe46de3198bb884b2", 16281711391670634445),
    "bnbChainTestnet": ("0xe1053ae1857476f36a3c62580ff9b016e8ee8f6f", 13264668187771770619),
    "baseSepolia": ("0xd3b06cebf099ce7da4accf578aaebfdbd6e88a93", 10344971235874465080),
    # Mainnets
    "ethereumMainnet": ("0x80226fc0ee2b096224eeac085bb9a8cba1146f7d", 5009297550715157269),
    "optimismMainnet": ("0x3206695cae29952f4b0c22a169725a865bc8ce0f", 3734403246176062136),
    "arbitrumMainnet": ("0x141fa059441e0ca23ce184b6a78bafd2a517dde8", 4949039107694359620),
    "avalancheMainnet": ("0xf4c7e640eda248ef95972845a62bdc74237805db", 6433500567565415381),
    "polygonMainnet": ("0x849c5ed5a80f5b408dd4969b78c2c8fdf0565bfe", 4051577828743386545),
    "bnbMainnet": ("0x34b03cb9086d7d758ac55af71584f81a598759fe", 11344663589394136015),
    "baseMainnet": ("0x881e3a65b4d4a04dd529061dd0071cf975f58bcd", 15971525489660198786),
})


def rpc_env_var(chain_name: str) -> str:
    """Name of the environment variable holding a chain's RPC URL.

    'ethereumSepolia' -> 'ETHEREUM_SEPOLIA_RPC_URL'
    """
    return re.sub(r"(?<!^)(?=[A-Z])", "_", chain_name).upper() + "_RPC_URL"


def _optional_int(env: Mapping[str, str], key: str) -> int | None:
    value = env.get(key)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from None


@dataclass(frozen=True, slots=True)
class StatusConfig:
    """Main configuration for the status client.

    Attributes:
        routers: Chain name -> static router entry
        rpc_urls: Chain name -> RPC endpoint (only chains with one configured)
        scan: Log retrieval settings
    """

    routers: Mapping[str, RouterConfig] = field(default_factory=lambda: ROUTER_TABLE)
    rpc_urls: Mapping[str, str] = field(default_factory=dict)
    scan: ScanConfig = field(default_factory=ScanConfig)

    def __post_init__(self) -> None:
        """Freeze the mappings so the config cannot change after creation."""
        object.__setattr__(self, 'routers', MappingProxyType(dict(self.routers)))
        object.__setattr__(self, 'rpc_urls', MappingProxyType(dict(self.rpc_urls)))

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "StatusConfig":
        """Load configuration from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)

        Returns:
            StatusConfig with the static router table and every RPC URL found

        Raises:
            ConfigurationError: If a numeric setting is malformed
        """
        if env is None:
            env = os.environ

        rpc_urls = {
            name: env[rpc_env_var(name)]
            for name in ROUTER_TABLE
            if env.get(rpc_env_var(name))
        }

        from_block = _optional_int(env, "FROM_BLOCK")
        request_timeout = _optional_int(env, "REQUEST_TIMEOUT")
        scan_config = ScanConfig(
            from_block=0 if from_block is None else from_block,
            block_range=_optional_int(env, "LOG_BLOCK_RANGE"),
            request_timeout=30 if request_timeout is None else request_timeout,
        )

        return cls(routers=ROUTER_TABLE, rpc_urls=rpc_urls, scan=scan_config)

    def get_chain(self, name: str) -> ChainConfig:
        """Resolve a chain name to its router, selector and RPC endpoint.

        Raises:
            ConfigurationError: If the chain is unknown or has no RPC URL
        """
        router_config = self.routers.get(name)
        if router_config is None:
            raise ConfigurationError(
                f"No router configuration for network {name}. "
                f"Known networks: {', '.join(sorted(self.routers))}"
            )

        rpc_url = self.rpc_urls.get(name)
        if not rpc_url:
            raise ConfigurationError(
                f"RPC URL is not set for network {name} ({rpc_env_var(name)})"
            )

        return ChainConfig(
            name=name,
            router=router_config.router,
            chain_selector=router_config.chain_selector,
            rpc_url=rpc_url,
        )

    def log_config(self) -> None:
        """Log the configuration in a readable format for debugging."""
        logger.info("=" * 60)
        logger.info("CCIP Status Configuration")
        logger.info("=" * 60)

        logger.info(f"Known networks: {len(self.routers)}")
        for name in sorted(self.rpc_urls):
            logger.info(f"  {name}: {self.rpc_urls[name]}")

        logger.info("Log Scan Settings:")
        logger.info(f"  From Block: {self.scan.from_block}")
        if self.scan.block_range:
            logger.info(f"  Block Range: {self.scan.block_range} blocks per request")
        else:
            logger.info("  Block Range: full range in one request")
        logger.info(f"  Request Timeout: {self.scan.request_timeout} seconds")

        logger.info("=" * 60)
