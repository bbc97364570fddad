"""
Command-line entry point for the nLoss shell.

Usage:
    nloss-shell                       # interactive
    nloss-shell --script <path>       # run commands from a file
    nloss-shell -c "<command>" ...    # run one or more commands

Example:
    nloss-shell -c "load in.bmp" -c "fft d -sx 8 -sy 8" -c "save out.bmp"
"""

import argparse
import logging
import sys
import os

from .logging_config import setup_logging
from .shell import CommandShell


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='nLoss - apply Fourier, cosine, sine and Walsh-Hadamard '
                    'transforms to 24-bit BMP images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive session
  python shell.py

  # Blockwise 8x8 cosine transform and back
  python shell.py -c "load in.bmp" -c "dct d -sx 8 -sy 8" \\
      -c "idct d -sx 8 -sy 8" -c "save out.bmp"

  # Run a command file with debug logging
  python shell.py --script commands.txt --verbose
        """
    )

    parser.add_argument('--script', '-f',
                        help='File with one command per line')
    parser.add_argument('--command', '-c', action='append', default=[],
                        help='Command to execute (repeatable)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose (debug) logging')
    parser.add_argument('--log-file',
                        help='Also write log output to this file')

    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    shell = CommandShell()

    if args.script is None and not args.command:
        shell.run()
        return 0

    failures = 0
    if args.script is not None:
        if not os.path.exists(args.script):
            print(f"Error: Script file not found: {args.script}", file=sys.stderr)
            return 1
        with open(args.script, 'r', encoding='utf-8') as f:
            failures += shell.run_lines(f, echo=args.verbose)

    if shell.running:
        failures += shell.run_lines(args.command, echo=args.verbose)

    return 1 if failures else 0
