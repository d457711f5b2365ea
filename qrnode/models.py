"""
QR code node data models and validation.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_OUTCOME = "outcome"


class OperationMode(str, Enum):
    """What the QR code encodes."""

    FREE_TEXT = "FreeText"
    URI = "URI"


class AttributeSpec(BaseModel):
    """Declared configuration attribute, as presented by the host."""

    model_config = ConfigDict(frozen=True)

    name: str
    order: int
    required: bool = False
    default: Any = None


class NodeConfig(BaseModel):
    """Configuration for the QR code node."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    operation_mode: OperationMode = Field(
        ...,
        alias="operationMode",
        description="Whether to encode free text or a URI",
        json_schema_extra={"order": 100, "required": True},
    )
    free_text: str = Field(
        ...,
        alias="freeText",
        description="Template with {{key}} placeholders",
        json_schema_extra={"order": 200},
    )
    uri_scheme: str = Field(..., alias="uriScheme", json_schema_extra={"order": 300})
    uri_host: str = Field(..., alias="uriHost", json_schema_extra={"order": 400})
    uri_port: str = Field(..., alias="uriPort", json_schema_extra={"order": 500})
    uri_resource: str = Field(..., alias="uriResource", json_schema_extra={"order": 600})
    uri_query_params: Dict[str, str] = Field(
        ...,
        alias="uriQueryParams",
        description="Query parameter name to value spec ('&key' reads shared state)",
        json_schema_extra={"order": 700},
    )

    @field_validator("uri_port", mode="before")
    @classmethod
    def validate_port(cls, v: Any) -> Any:
        """Accept integer ports from YAML."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("uri_query_params", mode="before")
    @classmethod
    def validate_query_params(cls, v: Any) -> Any:
        """Query values are strings; scalar YAML values are converted."""
        if isinstance(v, dict):
            converted = {}
            for key, value in v.items():
                if isinstance(value, bool):
                    value = "true" if value else "false"
                elif isinstance(value, (int, float)):
                    value = str(value)
                converted[str(key)] = value
            return converted
        return v


class ScriptTextOutputCallback(BaseModel):
    """Callback asking the client to run a script fragment."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(default="ScriptTextOutputCallback")
    message: str = Field(default="", description="Script to execute on the client")


class Action(BaseModel):
    """Result of a node invocation returned to the host."""

    model_config = ConfigDict(frozen=True)

    outcome: Optional[str] = Field(
        default=None, description="Outcome to follow, or None to stay on this node"
    )
    callbacks: List[ScriptTextOutputCallback] = Field(default_factory=list)

    @classmethod
    def goto_next(cls) -> "Action":
        """Advance to the node's single next step."""
        return cls(outcome=DEFAULT_OUTCOME)

    @classmethod
    def send(cls, callback: ScriptTextOutputCallback) -> "Action":
        """Send a callback and re-invoke this node on the next request."""
        return cls(callbacks=[callback])

    @property
    def is_advance(self) -> bool:
        return self.outcome is not None


class ErrorDetail(BaseModel):
    """Error details reported for a failed invocation."""

    code: str = Field(..., pattern="^(MISSING_KEY|INVALID_CONFIG)$")
    message: str
