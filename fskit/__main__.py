"""
Entry point for running fskit as a module.

Usage: python -m fskit [command] [options]
"""

from fskit.cli.parser import main

if __name__ == "__main__":
    main()
