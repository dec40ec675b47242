#!/usr/bin/env python3
"""Data models for the Gravity orchestrator query layer.

This module provides the value types returned by the stubborn queries
and the validated account identifier used to key event nonce lookups.
"""

from dataclasses import dataclass
from typing import ClassVar

# Values are returned exactly as the endpoint reports them
BlockHeight = int
ChainIdentifier = int
EventNonce = int


@dataclass(frozen=True, slots=True)
class CosmosAccount:
    """A bech32 style Cosmos account address.

    Only the shape of the address is checked here (prefix, separator and
    data charset). The ledger itself rejects addresses with a bad checksum.

    Attributes:
        address: Full address (e.g. cosmos1...)
        prefix: Human readable part, taken from the address when not given
    """

    address: str
    prefix: str = ""

    CHARSET: ClassVar[str] = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
    CHECKSUM_LENGTH: ClassVar[int] = 6

    def __post_init__(self) -> None:
        """Validate the address shape and the prefix."""
        if not self.address:
            raise ValueError("Account address is required")

        if self.address.lower() != self.address:
            raise ValueError(f"Account address must be lowercase: {self.address}")

        hrp, sep, data = self.address.rpartition("1")
        if not sep or not hrp:
            raise ValueError(f"Invalid account address: {self.address}")

        if len(data) <= self.CHECKSUM_LENGTH:
            raise ValueError(f"Account address too short: {self.address}")

        if invalid := set(data) - set(self.CHARSET):
            raise ValueError(
                f"Invalid characters in account address {self.address}: "
                f"{''.join(sorted(invalid))}"
            )

        if self.prefix and self.prefix != hrp:
            raise ValueError(
                f"Address prefix mismatch: expected {self.prefix}, got {hrp}"
            )

        if not self.prefix:
            # Use object.__setattr__ since dataclass is frozen
            object.__setattr__(self, 'prefix', hrp)

    def __str__(self) -> str:
        return self.address
