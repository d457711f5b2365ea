"""
Read-only views of the host's per-request state.
"""

import json
from typing import Any, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from .exceptions import MissingKeyError

CallbackT = TypeVar("CallbackT", bound=BaseModel)


class SharedValue:
    """A single value read from shared state."""

    def __init__(self, key: str, value: Any):
        self.key = key
        self.value = value

    def as_string(self) -> str:
        """Return the string form used when building payloads."""
        if isinstance(self.value, str):
            return self.value
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        if isinstance(self.value, (int, float)):
            return str(self.value)
        return json.dumps(self.value, separators=(",", ":"))

    def __repr__(self) -> str:
        return f"SharedValue(key={self.key!r})"


class SharedState:
    """
    Key-value scratch space owned by the host.

    The node only reads from it. Looking up a key that is not set (or is
    explicitly null) raises MissingKeyError.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values = dict(values or {})

    def get(self, key: str) -> SharedValue:
        """
        Look up a key.

        Args:
            key: Shared-state key

        Returns:
            The value wrapped as a SharedValue

        Raises:
            MissingKeyError: If the key is absent or null
        """
        value = self._values.get(key)
        if value is None:
            raise MissingKeyError(key)
        return SharedValue(key, value)


class TreeContext:
    """Per-invocation context handed to the node by the host."""

    def __init__(
        self,
        shared_state: Optional[SharedState] = None,
        callbacks: Optional[Sequence[BaseModel]] = None,
    ):
        """
        Initialize tree context.

        Args:
            shared_state: Shared state for this authentication attempt
            callbacks: Callbacks submitted with the current request
        """
        self.shared_state = shared_state if shared_state is not None else SharedState()
        self.callbacks = list(callbacks) if callbacks is not None else []

    def get_callback(self, kind: Type[CallbackT]) -> Optional[CallbackT]:
        """Return the first submitted callback of the given type, if any."""
        for callback in self.callbacks:
            if isinstance(callback, kind):
                return callback
        return None
