#!/usr/bin/env .venv/bin/python3
"""
Command-line script to repair a FIT file exported from eBike Flow.

Usage:
    ./repair.py ride.fit -o ride-fixed.fit --calories 640

Or with explicit python:
    .venv/bin/python3 repair.py ride.fit -o ride-fixed.fit
"""

import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from fitrepair.cli import main

if __name__ == "__main__":
    sys.exit(main())
