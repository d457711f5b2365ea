"""
QR code node CLI tool (qrnodectl) for configuration and payload checks.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml

from qrnode.config import attribute_schema, load_config, save_default_config
from qrnode.exceptions import ConfigValidationError, MissingKeyError
from qrnode.models import ErrorDetail, OperationMode, ScriptTextOutputCallback
from qrnode.node import QRCodeNode
from qrnode.payload import build_payload, find_placeholders
from qrnode.state import SharedState, TreeContext


def _load_state(state_file: Optional[str]) -> SharedState:
    """Load shared state from a JSON or YAML file."""
    if not state_file:
        return SharedState()

    with open(state_file, "r") as f:
        if Path(state_file).suffix == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise click.BadParameter("State file must contain an object", param_hint="--state")
    return SharedState(data)


def _load_config_or_abort(config_file: str):
    try:
        return load_config(config_file)
    except ConfigValidationError as e:
        click.echo(f"✗ Error: {e}", err=True)
        raise click.Abort()


@click.group()
@click.version_option(version="1.0.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """qrnodectl - QR code authentication node tool."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Configuration commands
@cli.group()
def config() -> None:
    """Node configuration commands."""
    pass


@config.command()
@click.option("--output", "-o", default="qrnode.yaml", help="Configuration file to write")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing file")
def init(output: str, force: bool) -> None:
    """Write a default node configuration."""
    if Path(output).exists() and not force:
        click.echo(f"✗ {output} already exists (use --force to overwrite)", err=True)
        raise click.Abort()

    save_default_config(output)
    click.echo(f"✓ Wrote default configuration to {output}")


@config.command()
def schema() -> None:
    """Show configuration attributes in presentation order."""
    for spec in attribute_schema():
        required = " (required)" if spec.required else ""
        click.echo(f"  {spec.order:>4}  {spec.name}{required}")
        click.echo(f"        default: {json.dumps(spec.default)}")


@config.command()
@click.argument("config_file", type=click.Path(exists=True))
def validate(config_file: str) -> None:
    """Validate a node configuration file."""
    node_config = _load_config_or_abort(config_file)

    click.echo("✓ Configuration is valid")
    click.echo(f"  Operation mode: {node_config.operation_mode.value}")
    if node_config.operation_mode == OperationMode.URI:
        click.echo(
            f"  URI: {node_config.uri_scheme}://{node_config.uri_host}:"
            f"{node_config.uri_port}/{node_config.uri_resource}"
        )
        for key, value in node_config.uri_query_params.items():
            click.echo(f"    {key} = {value}")
    else:
        names = find_placeholders(node_config.free_text)
        if names:
            click.echo(f"  Placeholders: {', '.join(names)}")


@cli.command()
@click.argument("config_file", type=click.Path(exists=True))
@click.option("--state", "-s", "state_file", type=click.Path(exists=True), help="Shared state file")
def payload(config_file: str, state_file: Optional[str]) -> None:
    """Print the text a node would encode."""
    node_config = _load_config_or_abort(config_file)
    state = _load_state(state_file)

    try:
        click.echo(build_payload(node_config, state))
    except MissingKeyError as e:
        click.echo(f"✗ Error: {e}", err=True)
        raise click.Abort()


@cli.command()
@click.argument("config_file", type=click.Path(exists=True))
@click.option("--state", "-s", "state_file", type=click.Path(exists=True), help="Shared state file")
@click.option("--message", "-m", help="Message of a returned callback (simulates resumption)")
def process(config_file: str, state_file: Optional[str], message: Optional[str]) -> None:
    """Run one node invocation and print the resulting action as JSON."""
    try:
        node_config = load_config(config_file)
    except ConfigValidationError as e:
        _echo_error("INVALID_CONFIG", str(e))
        raise click.Abort()

    callbacks = []
    if message is not None:
        callbacks.append(ScriptTextOutputCallback(message=message))
    context = TreeContext(shared_state=_load_state(state_file), callbacks=callbacks)

    try:
        action = QRCodeNode(node_config).process(context)
    except MissingKeyError as e:
        _echo_error("MISSING_KEY", str(e))
        raise click.Abort()

    click.echo(action.model_dump_json(indent=2))


def _echo_error(code: str, message: str) -> None:
    error: Dict[str, Any] = {"error": ErrorDetail(code=code, message=message).model_dump()}
    click.echo(json.dumps(error, indent=2), err=True)


if __name__ == "__main__":
    cli()
