"""
Tests for configuration loading.
"""

import json

import pytest
import yaml

from qrnode.config import (
    DEFAULT_CONFIG,
    attribute_schema,
    config_from_dict,
    load_config,
    save_default_config,
)
from qrnode.exceptions import ConfigValidationError
from qrnode.models import OperationMode


class TestConfigFromDict:
    """Tests for config_from_dict."""

    def test_defaults(self):
        """Test an empty mapping yields the default configuration."""
        config = config_from_dict({})
        assert config.operation_mode == OperationMode.FREE_TEXT
        assert config.free_text == ""
        assert config.uri_scheme == ""
        assert config.uri_query_params == {}

    def test_partial_overrides(self):
        """Test given fields override defaults, others keep them."""
        config = config_from_dict({"operationMode": "URI", "uri_host": "example.com"})
        assert config.operation_mode == OperationMode.URI
        assert config.uri_host == "example.com"
        assert config.uri_port == ""

    def test_invalid_mode(self):
        """Test an invalid operation mode raises ConfigValidationError."""
        with pytest.raises(ConfigValidationError, match="Invalid node configuration"):
            config_from_dict({"operation_mode": "Barcode"})

    def test_null_mode(self):
        """Test an explicit null operation mode is rejected."""
        with pytest.raises(ConfigValidationError):
            config_from_dict({"operationMode": None})

    def test_unknown_field(self):
        """Test unknown fields are reported by name."""
        with pytest.raises(ConfigValidationError, match="uriFragment"):
            config_from_dict({"uriFragment": "x"})

    def test_not_a_mapping(self):
        """Test non-mapping input is rejected."""
        with pytest.raises(ConfigValidationError):
            config_from_dict(["operationMode"])

    def test_null_optional_fields_use_defaults(self):
        """Test null values on optional fields fall back to defaults."""
        config = config_from_dict(
            {"operationMode": "URI", "uriQueryParams": None, "freeText": None, "uri_port": None}
        )
        assert config.operation_mode == OperationMode.URI
        assert config.uri_query_params == {}
        assert config.free_text == ""
        assert config.uri_port == ""

    def test_alias_and_name_conflict(self):
        """Test giving a field under both spellings is rejected."""
        with pytest.raises(ConfigValidationError, match="free_text/freeText"):
            config_from_dict({"free_text": "a", "freeText": "b"})

    def test_defaults_not_shared(self):
        """Test loading does not modify the default table."""
        config_from_dict({"uri_query_params": {"a": "1"}})
        assert DEFAULT_CONFIG["uri_query_params"] == {}


class TestLoadConfig:
    """Tests for load_config and save_default_config."""

    def test_load_yaml(self, tmp_path):
        """Test loading YAML keeps query parameter order."""
        path = tmp_path / "node.yaml"
        path.write_text(
            "operationMode: URI\n"
            "uriScheme: https\n"
            "uriHost: example.com\n"
            "uriPort: 443\n"
            "uriResource: verify\n"
            "uriQueryParams:\n"
            "  v: '1'\n"
            "  u: '&userId'\n"
        )

        config = load_config(str(path))
        assert config.operation_mode == OperationMode.URI
        assert config.uri_port == "443"
        assert list(config.uri_query_params.items()) == [("v", "1"), ("u", "&userId")]

    def test_load_json(self, tmp_path):
        """Test loading a JSON file."""
        path = tmp_path / "node.json"
        path.write_text(json.dumps({"operation_mode": "FreeText", "free_text": "{{a}}"}))

        config = load_config(str(path))
        assert config.free_text == "{{a}}"

    def test_load_yaml_empty_entries(self, tmp_path):
        """Test YAML keys without values keep their defaults."""
        path = tmp_path / "node.yaml"
        path.write_text("operationMode: URI\nuriQueryParams:\nfreeText:\n")

        config = load_config(str(path))
        assert config.operation_mode == OperationMode.URI
        assert config.uri_query_params == {}
        assert config.free_text == ""

    def test_load_yaml_empty_mode_rejected(self, tmp_path):
        """Test an empty operation mode entry is still rejected."""
        path = tmp_path / "node.yaml"
        path.write_text("operationMode:\n")

        with pytest.raises(ConfigValidationError):
            load_config(str(path))

    def test_load_empty_file(self, tmp_path):
        """Test an empty YAML file yields defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(str(path)).operation_mode == OperationMode.FREE_TEXT

    def test_save_default_round_trip(self, tmp_path):
        """Test the written default file loads back to the defaults."""
        path = tmp_path / "sub" / "node.yaml"
        save_default_config(str(path))

        with open(path) as f:
            assert yaml.safe_load(f) == DEFAULT_CONFIG
        assert load_config(str(path)) == config_from_dict({})


class TestAttributeSchema:
    """Tests for attribute_schema."""

    def test_order(self):
        """Test attributes are listed in presentation order."""
        schema = attribute_schema()
        assert [spec.name for spec in schema] == [
            "operation_mode",
            "free_text",
            "uri_scheme",
            "uri_host",
            "uri_port",
            "uri_resource",
            "uri_query_params",
        ]
        assert [spec.order for spec in schema] == [100, 200, 300, 400, 500, 600, 700]

    def test_required_flag(self):
        """Test only the operation mode is required."""
        required = [spec.name for spec in attribute_schema() if spec.required]
        assert required == ["operation_mode"]

    def test_defaults(self):
        """Test declared defaults."""
        defaults = {spec.name: spec.default for spec in attribute_schema()}
        assert defaults["operation_mode"] == "FreeText"
        assert defaults["uri_query_params"] == {}
