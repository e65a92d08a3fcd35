"""pirule CLI commands package.

- schema: Inspect pipeline schemas
- rule: Build and install flow rules

Shared sub-apps are created here to avoid duplication across command modules.
"""

from __future__ import annotations

import typer

schema_app = typer.Typer(name="schema", help="Inspect pipeline schemas")

__all__ = ["schema_app"]
