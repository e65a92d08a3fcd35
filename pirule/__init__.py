"""pirule - programmable-pipeline flow rule construction and submission.

Builds exact-match, single-action forwarding rules against a loaded pipeline
schema and hands them to a rule submission gateway.
"""

__version__ = "0.1.0"
