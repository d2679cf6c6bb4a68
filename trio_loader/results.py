"""
results.py — A tagged success/failure result.

A fetch either produced a payload or failed with a reason, never both and
never neither.  Two frozen dataclasses and a union alias are enough to make
that the only shape a result can have:

    result = await loader.fetch()
    if isinstance(result, Success):
        show(result.value)
    else:
        show_error(str(result.error))
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Success:
    """Outcome of a unit of work that produced a value."""
    value: object

    @property
    def is_success(self):
        return True

    def unwrap(self):
        return self.value


@dataclass(frozen=True)
class Failure:
    """Outcome of a unit of work that failed."""
    error: BaseException

    def __post_init__(self):
        if not isinstance(self.error, BaseException):
            raise TypeError(f"Failure needs an exception, got {self.error!r}")

    @property
    def is_success(self):
        return False

    def unwrap(self):
        """Re-raise the stored error (the "throwing" view of a failure)."""
        raise self.error


FetchResult = Success | Failure


def capture(fn, *args, catch=(Exception,)):
    """Call `fn(*args)` and fold its return value or exception into a result.

    Only exceptions listed in `catch` become a Failure; anything else
    propagates.
    """
    try:
        return Success(fn(*args))
    except catch as exc:
        return Failure(exc)
