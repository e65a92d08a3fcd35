"""pirule application shells.

This package contains thin I/O layers over the pirule core:
- cli: Typer CLI
"""
