import uuid
from contextvars import ContextVar
from typing import Optional

# Context variable holding the id of the generate run in progress
run_id_var: ContextVar[Optional[str]] = ContextVar('run_id', default=None)


def generate_run_id() -> str:
    """Generate a new run ID."""
    return str(uuid.uuid4())


def set_run_id(run_id: Optional[str]) -> None:
    """Set the run ID for the current context."""
    run_id_var.set(run_id)


def current_run_id() -> Optional[str]:
    """Get the current run ID."""
    return run_id_var.get()

