"""
state.py — An observable value holder.

A StateHolder keeps the latest value and tells its subscribers whenever it
changes.  It knows nothing about how the value is rendered; a terminal demo,
a test, or a GUI can all subscribe to the same holder.
"""

import logging

from trio_loader.errors import WrongContextError

logger = logging.getLogger(__name__)


class StateHolder:
    """Single-writer, many-reader container for the latest value.

    When `owner` is a MainContext, every mutation must happen on that
    context; anything else raises WrongContextError.
    """

    def __init__(self, initial=None, owner=None, name="state"):
        self._value = initial
        self._owner = owner
        self._name = name
        self._subscribers = []

    def __repr__(self):
        return f"StateHolder({self._name}={self._value!r})"

    @property
    def value(self):
        return self._value

    def subscribe(self, callback):
        """Call `callback(value)` after every change.  Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def set(self, value):
        self._check_context()
        self._value = value
        logger.debug("%s <- %r", self._name, value)
        for callback in list(self._subscribers):
            callback(value)

    def update(self, fn):
        """Replace the value with `fn(current value)`."""
        self.set(fn(self._value))

    def _check_context(self):
        if self._owner is not None and not self._owner.is_main():
            raise WrongContextError(
                f"{self._name} must be mutated on the main context"
            )
