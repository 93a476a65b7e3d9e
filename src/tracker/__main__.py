"""
Entry point for running CodeTrack as a module.

Usage:
    python -m src.tracker show
    python -m src.tracker stats
    python -m src.tracker --help
"""
from .cli import main

if __name__ == "__main__":
    main()
