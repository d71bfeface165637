"""
Behavior action taxonomy.

``BehaviorAction`` enumerates the user interactions the app tracks on an
opportunity. Each action carries a fixed affinity weight that is written into
the preference store when the action is tracked, and summed per category when
recommending categories.

Weights (not configurable):

    apply 0.9 > like 0.7 > save 0.6 > share 0.5 > view 0.3 > anything else 0.1

Unrecognized action strings are NOT rejected; they fall into the
``UNKNOWN_ACTION_WEIGHT`` bucket.

This module has NO imports from any other ``ladder_recs`` package.
"""

from enum import StrEnum


class BehaviorAction(StrEnum):
    """A user interaction with one opportunity."""

    VIEW = "view"
    """Opened the opportunity details."""

    LIKE = "like"
    """Liked / favourited the opportunity."""

    APPLY = "apply"
    """Submitted an application; strongest signal."""

    SAVE = "save"
    """Saved for later."""

    SHARE = "share"
    """Shared with someone else."""


ACTION_WEIGHTS: dict[BehaviorAction, float] = {
    BehaviorAction.APPLY: 0.9,
    BehaviorAction.LIKE:  0.7,
    BehaviorAction.SAVE:  0.6,
    BehaviorAction.SHARE: 0.5,
    BehaviorAction.VIEW:  0.3,
}

UNKNOWN_ACTION_WEIGHT = 0.1

_ACTION_VALUES = frozenset(a.value for a in BehaviorAction)


def is_known_action(action: str) -> bool:
    """Return ``True`` if ``action`` is one of the ``BehaviorAction`` values."""
    return action in _ACTION_VALUES


def action_weight(action: str) -> float:
    """Return the affinity weight for an action string.

    Args:
        action: Action value, e.g. ``"apply"`` or ``BehaviorAction.APPLY``.

    Returns:
        The fixed weight for known actions, ``UNKNOWN_ACTION_WEIGHT`` otherwise.
    """
    if not is_known_action(action):
        return UNKNOWN_ACTION_WEIGHT
    return ACTION_WEIGHTS[BehaviorAction(action)]
