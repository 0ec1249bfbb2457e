#!/usr/bin/env python3
"""
Build a code co-occurrence network from the record table.

Usage:
    python bin/build_network.py --input data/data_perNetwork.csv
    python bin/build_network.py --tau 0.75 --json
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from diversity_networks.cli import main


if __name__ == "__main__":
    sys.exit(main())
