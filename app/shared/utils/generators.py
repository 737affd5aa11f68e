"""ID generators for persisted rows (CUID2)."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new collision-resistant id for a flow rule or TAT config row."""
    return str(_next_cuid())
