#!/usr/bin/env python3
"""
Main entry point for the Binance relay when running from a checkout.
This file allows running the relay directly from the project root.
"""

import sys
from pathlib import Path

# Add the src directory to Python path
src_dir = Path(__file__).parent / "src"
sys.path.insert(0, str(src_dir))


def main():
    """Run the Binance relay server."""
    from binance_relay.main import main as run_server

    run_server()


if __name__ == "__main__":
    main()
