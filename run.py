#!/usr/bin/env python3
"""
run.py - Main entry point for the Orbito game

Usage:
    python run.py play [--size 4] [--steps 1]
    python run.py test --position 1,0,0,0,...
    python run.py benchmark [--iterations 1000]
"""

import sys

from orbito.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
