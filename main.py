"""
assetbook - Main Entry Point
============================
Run this file to start the interactive portfolio tracker.
Usage: python main.py
"""

import sys

from assetbook.cli import main


if __name__ == "__main__":
    sys.exit(main())
