"""
Errors surfaced by the QR code node.
"""


class NodeProcessError(Exception):
    """Raised when the node cannot produce an action for the host."""


class MissingKeyError(NodeProcessError):
    """A placeholder or query value references a shared-state key that is not set."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"undefined reference: {key}")


class ConfigValidationError(ValueError):
    """Node configuration failed validation at load time."""
