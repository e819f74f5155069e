#!/usr/bin/env python3
"""Entry point for the CCIP message status client.

Command: python main.py sourceChain destinationChain messageId
Example (Sepolia -> Fuji):
    python main.py ethereumSepolia avalancheFuji 0xbd2f751ffab340b98575a8f46efc234e8d884db7b654c0144d7aabd72ff38595
"""

import sys

from src.ccip_status.cli import run


if __name__ == "__main__":
    sys.exit(run())
