"""
ActionResult - tagged outcome returned by every engine action

Callers branch on `success` and `error_kind` instead of catching exceptions.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from fleet_maintenance.buisness.core.errors import ReconciliationError


@dataclass(frozen=True)
class ActionResult:
    success: bool
    id: Optional[int] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @classmethod
    def ok(cls, entity_id: Optional[int] = None) -> "ActionResult":
        return cls(success=True, id=entity_id)

    @classmethod
    def from_error(cls, error: ReconciliationError) -> "ActionResult":
        return cls(success=False, error=str(error), error_kind=error.kind)

    def to_dict(self) -> Dict[str, Any]:
        """Dictionary form for the calling layer (JSON responses, templates)"""
        data: Dict[str, Any] = {'success': self.success}
        if self.success:
            data['id'] = self.id
        else:
            data['error'] = self.error
            data['error_kind'] = self.error_kind
        return data


def run_action(action: str, operation: Callable[[], Optional[int]], logger) -> ActionResult:
    """
    Run one engine action and wrap its outcome.

    Domain errors become failed results; anything else is logged and re-raised.
    """
    try:
        entity_id = operation()
    except ReconciliationError as e:
        logger.warning(f"{action} rejected ({e.kind}): {e}")
        return ActionResult.from_error(e)
    except Exception:
        logger.exception(f"{action} failed unexpectedly")
        raise
    return ActionResult.ok(entity_id)
