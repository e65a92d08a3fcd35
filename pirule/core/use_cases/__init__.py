"""Core use cases - rule installation and the activation lifecycle.

Use cases orchestrate builders and the submission port without containing
gateway-specific code.
"""

from __future__ import annotations

from pirule.core.use_cases.install_rule import InstallRuleUseCase, build_rule
from pirule.core.use_cases.lifecycle import ActivationHandle, reconfigure, start, stop

__all__ = [
    "ActivationHandle",
    "InstallRuleUseCase",
    "build_rule",
    "reconfigure",
    "start",
    "stop",
]
