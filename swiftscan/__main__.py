"""Allow ``python -m swiftscan``."""

import sys

from .cli import main

main(sys.argv[1:])
