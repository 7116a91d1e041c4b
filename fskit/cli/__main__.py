"""
Entry point for running fskit CLI as a module.

Usage: python -m fskit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
