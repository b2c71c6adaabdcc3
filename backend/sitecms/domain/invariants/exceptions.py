class InvariantViolation(Exception):
    """An engine-side invariant broke. Never caused by caller input."""
