#!/usr/bin/env python3
"""Entry point for the Gravity orchestrator query CLI."""

import asyncio

from gravity_orchestrator.cli import main


if __name__ == "__main__":
    asyncio.run(main())
