#!/usr/bin/env python3
"""
Main entry point for running xkpasswd as a module.
"""

import sys
from xkpasswd.cli import main

if __name__ == "__main__":
    sys.exit(main())
