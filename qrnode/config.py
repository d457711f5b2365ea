"""
Loading and validation of QR code node configuration.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml
from pydantic import ValidationError

from .exceptions import ConfigValidationError
from .models import AttributeSpec, NodeConfig, OperationMode

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "operation_mode": OperationMode.FREE_TEXT.value,
    "free_text": "",
    "uri_scheme": "",
    "uri_host": "",
    "uri_port": "",
    "uri_resource": "",
    "uri_query_params": {},
}


def _field_names() -> Dict[str, str]:
    """Map accepted keys (field names and camelCase aliases) to field names."""
    names = {}
    for name, field in NodeConfig.model_fields.items():
        names[name] = name
        if field.alias:
            names[field.alias] = name
    return names


def _is_required(name: str) -> bool:
    extra = NodeConfig.model_fields[name].json_schema_extra or {}
    return bool(extra.get("required", False))


def config_from_dict(data: Mapping[str, Any]) -> NodeConfig:
    """
    Build a validated configuration, filling in defaults for missing fields.

    Args:
        data: Raw configuration (snake_case or camelCase keys)

    Returns:
        Validated, immutable configuration

    Raises:
        ConfigValidationError: If a field is invalid, unknown or given twice
    """
    if not isinstance(data, Mapping):
        raise ConfigValidationError(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )

    known = _field_names()
    merged: Dict[str, Any] = dict(DEFAULT_CONFIG)
    merged["uri_query_params"] = {}
    seen: Dict[str, str] = {}
    unknown = []
    conflicts = []
    for key, value in data.items():
        if key not in known:
            unknown.append(key)
            continue
        name = known[key]
        if name in seen:
            conflicts.append(f"{seen[name]}/{key}")
            continue
        seen[name] = key
        # An empty YAML entry means "use the default", except for required fields.
        if value is None and not _is_required(name):
            continue
        merged[name] = value

    if unknown:
        raise ConfigValidationError(f"Unknown configuration field(s): {', '.join(unknown)}")
    if conflicts:
        raise ConfigValidationError(
            f"Configuration field(s) given more than once: {', '.join(conflicts)}"
        )

    try:
        return NodeConfig(**merged)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigValidationError(f"Invalid node configuration: {problems}") from e


def load_config(config_path: str) -> NodeConfig:
    """
    Load configuration from a YAML or JSON file.

    Args:
        config_path: Path to configuration file

    Returns:
        Validated configuration
    """
    config_file = Path(config_path)

    with open(config_file, "r") as f:
        if config_file.suffix == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if data is None:
        data = {}

    config = config_from_dict(data)
    logger.info(f"Loaded {config.operation_mode.value} node configuration from {config_path}")
    return config


def save_default_config(config_path: str) -> Dict[str, Any]:
    """Write the default configuration as YAML and return it."""
    config_file = Path(config_path)
    config_file.parent.mkdir(parents=True, exist_ok=True)

    default_config = dict(DEFAULT_CONFIG)
    with open(config_file, "w") as f:
        yaml.dump(default_config, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Created default configuration at {config_path}")
    return default_config


def attribute_schema() -> List[AttributeSpec]:
    """Return the declared configuration attributes in presentation order."""
    specs = []
    for name, field in NodeConfig.model_fields.items():
        extra = field.json_schema_extra or {}
        specs.append(
            AttributeSpec(
                name=name,
                order=extra["order"],
                required=_is_required(name),
                default=DEFAULT_CONFIG[name],
            )
        )
    return sorted(specs, key=lambda spec: spec.order)
