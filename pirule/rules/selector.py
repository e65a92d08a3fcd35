"""Selector and treatment assembly.

Wrapping keeps match and action concerns independent: one selector or
treatment value can be reused across any number of rule assemblies.
"""

from pirule.schemas.rule import ActionDescriptor, MatchCriterion, Selector, Treatment


def build_selector(criterion: MatchCriterion) -> Selector:
    """Wrap a match criterion into a selector."""
    if criterion is None:
        raise TypeError("criterion cannot be None")
    return Selector(criterion=criterion)


def build_treatment(action: ActionDescriptor) -> Treatment:
    """Wrap an action descriptor into a treatment."""
    if action is None:
        raise TypeError("action cannot be None")
    return Treatment(action=action)


__all__ = ["build_selector", "build_treatment"]
