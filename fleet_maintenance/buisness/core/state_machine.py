"""
Status state machine base

Encodes valid transitions per entity and keeps "what is allowed" separate from
"what happens" on a transition, which belongs to the lifecycle controllers.
"""

from typing import Dict, Set

from fleet_maintenance.buisness.core.errors import InvalidTransitionError


class StatusStateMachine:
    """
    One-directional status lifecycle.

    Setting the current status again is a no-op transition and always allowed,
    so controllers can treat repeated requests idempotently.
    """

    ENTITY = 'entity'

    TERMINAL_STATES: Set[str] = set()

    # from_status -> set of allowed to_status values
    TRANSITIONS: Dict[str, Set[str]] = {}

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        """
        Check if transition is valid.

        Args:
            from_status: Current status
            to_status: Target status

        Returns:
            bool: True if transition is allowed
        """
        if from_status == to_status:
            return True

        if from_status in cls.TERMINAL_STATES:
            return False

        return to_status in cls.TRANSITIONS.get(from_status, set())

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        """
        Raises:
            InvalidTransitionError: If transition is not allowed
        """
        if not cls.can_transition(from_status, to_status):
            raise InvalidTransitionError(cls.ENTITY, from_status, to_status)

    @classmethod
    def get_allowed_transitions(cls, from_status: str) -> Set[str]:
        """Get set of allowed target statuses from current status"""
        if from_status in cls.TERMINAL_STATES:
            return set()
        return set(cls.TRANSITIONS.get(from_status, set()))

    @classmethod
    def is_terminal(cls, status: str) -> bool:
        return status in cls.TERMINAL_STATES
