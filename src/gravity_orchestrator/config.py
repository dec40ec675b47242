#!/usr/bin/env python3
"""Configuration management for the Gravity orchestrator query layer.

This module provides type-safe configuration dataclasses with validation.
Configuration is loaded from environment variables with sensible defaults
where appropriate.
"""

import logging
import os
from dataclasses import dataclass
from typing import ClassVar
from urllib.parse import urlparse

# Get logger for this module
logger = logging.getLogger(__name__)


def _validate_http_url(url: str, name: str, env_var: str) -> None:
    if not url:
        raise ValueError(f"{name} is required ({env_var})")

    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https'):
        raise ValueError(
            f"Invalid {name} scheme: {parsed.scheme}. Expected http or https"
        )
    if not parsed.netloc:
        raise ValueError(f"Invalid {name}: {url}")


@dataclass(frozen=True, slots=True)
class EthConfig:
    """Configuration for the Ethereum node.

    Attributes:
        rpc_url: HTTP(S) JSON-RPC endpoint of the Ethereum node
    """

    rpc_url: str

    def __post_init__(self) -> None:
        """Validate Ethereum configuration."""
        _validate_http_url(self.rpc_url, "Ethereum RPC URL", "ETH_RPC_URL")


@dataclass(frozen=True, slots=True)
class CosmosConfig:
    """Configuration for the Cosmos chain running the Gravity module.

    Attributes:
        grpc_url: HTTP(S) endpoint of the node's gRPC gateway
        prefix: Bech32 account prefix (e.g. 'cosmos')
    """

    grpc_url: str
    prefix: str = "cosmos"

    def __post_init__(self) -> None:
        """Validate Cosmos configuration."""
        _validate_http_url(self.grpc_url, "Cosmos gRPC URL", "COSMOS_GRPC_URL")

        # Prefixes are often written with stray whitespace in env files
        prefix = self.prefix.strip()
        if not prefix:
            raise ValueError("Cosmos address prefix is required (COSMOS_PREFIX)")
        if prefix.lower() != prefix or "1" in prefix:
            raise ValueError(f"Invalid Cosmos address prefix: {prefix}")

        if prefix != self.prefix:
            # Use object.__setattr__ since dataclass is frozen
            object.__setattr__(self, 'prefix', prefix)


@dataclass(frozen=True, slots=True)
class OrchestratorConfig:
    """Main configuration for the orchestrator query layer.

    Attributes:
        eth: Configuration for the Ethereum node
        cosmos: Configuration for the Cosmos chain
    """

    eth: EthConfig
    cosmos: CosmosConfig

    DEFAULT_ETH_RPC_URL: ClassVar[str] = "http://localhost:8545"
    DEFAULT_COSMOS_GRPC_URL: ClassVar[str] = "http://localhost:1317"

    @classmethod
    def from_env(cls) -> "OrchestratorConfig":
        """Load configuration from environment variables.

        Returns:
            OrchestratorConfig instance with loaded values

        Raises:
            ValueError: If environment variables are invalid
        """
        eth_config = EthConfig(
            rpc_url=os.environ.get("ETH_RPC_URL", cls.DEFAULT_ETH_RPC_URL)
        )

        cosmos_config = CosmosConfig(
            grpc_url=os.environ.get("COSMOS_GRPC_URL", cls.DEFAULT_COSMOS_GRPC_URL),
            prefix=os.environ.get("COSMOS_PREFIX", "cosmos"),
        )

        return cls(eth=eth_config, cosmos=cosmos_config)

    def log_config(self) -> None:
        """Log the configuration in a readable format for debugging."""
        logger.info("=" * 60)
        logger.info("Gravity Orchestrator Configuration")
        logger.info("=" * 60)

        logger.info("Ethereum:")
        logger.info(f"  RPC URL: {self.eth.rpc_url}")

        logger.info("Cosmos:")
        logger.info(f"  gRPC URL: {self.cosmos.grpc_url}")
        logger.info(f"  Address Prefix: {self.cosmos.prefix}")

        logger.info("=" * 60)
