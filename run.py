#!/usr/bin/env python3
"""
Runner for quickssh from a source checkout
"""

import os
import sys

CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))

# Ensure the package is importable without installation
sys.path.insert(0, CURRENT_DIR)


def main() -> int:
    from quickssh.tui import main as tui_main

    return tui_main(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
