#!/usr/bin/env python3
"""
nLoss Image Transform Shell

Usage:
    python shell.py                       # interactive
    python shell.py --script <path>       # run commands from a file
    python shell.py -c "<command>" ...    # run one or more commands

Example:
    python shell.py -c "load in.bmp" -c "fft d -sx 8 -sy 8" -c "save out.bmp"
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from nloss.cli import main


if __name__ == '__main__':
    sys.exit(main())
