"""Payload builders for the QR code node."""

from ..models import NodeConfig, OperationMode
from ..state import SharedState
from .template import find_placeholders, substitute_template
from .uri import ValueSpec, build_uri

__all__ = [
    "ValueSpec",
    "build_payload",
    "build_uri",
    "find_placeholders",
    "substitute_template",
]


def build_payload(config: NodeConfig, state: SharedState) -> str:
    """Build the text to encode for the configured operation mode."""
    if config.operation_mode == OperationMode.URI:
        return build_uri(
            config.uri_scheme,
            config.uri_host,
            config.uri_port,
            config.uri_resource,
            config.uri_query_params,
            state,
        )
    return substitute_template(config.free_text, state)
