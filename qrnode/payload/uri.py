"""
URI payload builder.
"""

import logging
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

from ..state import SharedState

logger = logging.getLogger(__name__)

REFERENCE_SIGIL = "&"


class ValueSpec(BaseModel):
    """A query parameter value: either a literal or a shared-state reference."""

    model_config = ConfigDict(frozen=True)

    literal: Optional[str] = None
    reference: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> "ValueSpec":
        """Parse a configured value; a leading '&' marks a shared-state key."""
        if raw.startswith(REFERENCE_SIGIL):
            return cls(reference=raw[len(REFERENCE_SIGIL) :])
        return cls(literal=raw)

    @property
    def is_reference(self) -> bool:
        return self.reference is not None

    def resolve(self, state: SharedState) -> str:
        """Return the value to put in the URI."""
        if self.is_reference:
            return state.get(self.reference).as_string()
        return self.literal or ""


def build_uri(
    scheme: str,
    host: str,
    port: str,
    resource: str,
    query_params: Mapping[str, str],
    state: SharedState,
) -> str:
    """
    Assemble ``scheme://host:port/resource?k=v&k2=v2``.

    Query parameters keep the mapping's order. Values are inserted as-is,
    without percent-encoding. With no query parameters the URI ends at the
    resource.

    Raises:
        MissingKeyError: If a referenced shared-state key is not set
    """
    uri = f"{scheme}://{host}:{port}/{resource}"

    pairs = []
    for key, raw in query_params.items():
        value = ValueSpec.parse(raw).resolve(state)
        pairs.append(f"{key}={value}")

    if pairs:
        uri = f"{uri}?{'&'.join(pairs)}"

    logger.debug(f"Built URI for {scheme}://{host} with {len(pairs)} query parameter(s)")
    return uri
