"""
Context manager for evaluation configuration (e.g., sequential mode).
"""

from contextlib import contextmanager
from contextvars import ContextVar

# Context variable for sequential mode
_sequential_mode: ContextVar[bool] = ContextVar("sequential_mode", default=False)


def is_sequential() -> bool:
    """Check if sequential mode is currently enabled."""
    return _sequential_mode.get()


@contextmanager
def validation_context(*, sequential: bool = False):
    """
    Context manager for evaluation configuration.

    Args:
        sequential: If True, combined branches are evaluated one after another
                    in list order instead of as concurrent tasks. Errors are
                    still accumulated from every branch and merged in list
                    order, so results are identical; only scheduling changes.

    Example:
        from pathcheck import validation_context
        from pathcheck.validation import evaluate

        # Normal: branches of a zip run concurrently
        result = await evaluate(person_validation)

        # Sequential: branches run in order, handy when debugging leaf checks
        with validation_context(sequential=True):
            result = await evaluate(person_validation)
    """
    token = _sequential_mode.set(sequential)
    try:
        yield
    finally:
        _sequential_mode.reset(token)
