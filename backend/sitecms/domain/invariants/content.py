from sitecms.domain.lifecycle.content import LEGAL_STATES
from .exceptions import InvariantViolation


def assert_lifecycle_state(unit):
    state = (unit.environment, unit.status)
    if state not in LEGAL_STATES:
        raise InvariantViolation(
            f"Unit {unit.id} would rest in unreachable state {state}"
        )
