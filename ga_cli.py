#!/usr/bin/env python3
"""
Knapsack GA CLI - source checkout shim for the ``knapsack-ga`` command.

Usage:
    python3 ga_cli.py examples/knapsack_run.yaml
    python3 ga_cli.py --help
"""

import sys

from knapsack_ga.cli import main


if __name__ == '__main__':
    sys.exit(main())
