from typing import Dict, Tuple

from sitecms.domain.exceptions import IllegalTransition

SANDBOX = "sandbox"
LIVE = "live"
ENVIRONMENTS = (SANDBOX, LIVE)

DRAFT = "draft"
PENDING_APPROVAL = "pending_approval"
PUBLISHED = "published"
STATUSES = (DRAFT, PENDING_APPROVAL, PUBLISHED)

State = Tuple[str, str]

INITIAL_STATE: State = (SANDBOX, DRAFT)

# Visitors only ever see units in this state
PUBLIC_STATE: State = (LIVE, PUBLISHED)

# The only (environment, status) pairs a unit may rest in
LEGAL_STATES = frozenset({
    (SANDBOX, DRAFT),
    (SANDBOX, PENDING_APPROVAL),
    (LIVE, PUBLISHED),
})

# Explicit allowed state transitions: (state, action) -> next state
ALLOWED_TRANSITIONS: Dict[Tuple[State, str], State] = {
    ((SANDBOX, DRAFT), "submit"): (SANDBOX, PENDING_APPROVAL),
    ((SANDBOX, PENDING_APPROVAL), "approve"): (LIVE, PUBLISHED),
    ((SANDBOX, PENDING_APPROVAL), "reject"): (SANDBOX, DRAFT),
}

# Content edits are only accepted in sandbox
EDITABLE_STATES = frozenset({(SANDBOX, DRAFT), (SANDBOX, PENDING_APPROVAL)})


def next_state(*, unit_id: str, state: State, action: str) -> State:
    """
    Guards content unit lifecycle transitions.
    Single source of truth for (environment, status) changes.
    """
    target = ALLOWED_TRANSITIONS.get((state, action))

    if target is None:
        environment, status = state
        raise IllegalTransition(
            unit_id=unit_id,
            action=action,
            environment=environment,
            status=status,
        )

    return target


def assert_editable(*, unit_id: str, state: State) -> None:
    if state not in EDITABLE_STATES:
        environment, status = state
        raise IllegalTransition(
            unit_id=unit_id,
            action="edit",
            environment=environment,
            status=status,
        )


def assert_revisable(*, unit_id: str, state: State) -> None:
    if not is_public(state):
        environment, status = state
        raise IllegalTransition(
            unit_id=unit_id,
            action="revise",
            environment=environment,
            status=status,
        )


def is_public(state: State) -> bool:
    return state == PUBLIC_STATE
