"""pirule command-line interface."""
