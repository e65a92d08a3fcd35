"""Typer CLI for pirule."""
