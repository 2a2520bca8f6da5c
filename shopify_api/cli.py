"""Defines the `shopify-config` command-line interface.

This module uses the `click` library to expose the configuration validator
to developers, so an app's options can be checked before deployment, and
`rich` to render the normalized result.
"""
import json
import logging
import sys
from typing import Any, List, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .auth.scopes import AuthScopes
from .core.base_types import Config
from .core.config import validate_config
from .core.errors import ConfigurationError, FeatureDeprecatedError
from .core.types import LATEST_API_VERSION, ApiVersion
from .utils.loader import load_params

console = Console()
err_console = Console(stderr=True)

# Set up basic logging.
logger = logging.getLogger(__name__)

SECRET_FIELDS = ("api_secret_key", "private_app_storefront_access_token")


def _mask(value: Optional[str]) -> Optional[str]:
    """Hides all but the last four characters of a secret."""
    if not value:
        return value
    return "*" * max(len(value) - 4, 4) + value[-4:]


def _display_value(value: Any) -> Any:
    if hasattr(value, "pattern"):
        return value.pattern
    if isinstance(value, (list, tuple)):
        return [_display_value(v) for v in value]
    if isinstance(value, AuthScopes):
        return value.to_list()
    if callable(value):
        return getattr(value, "__name__", repr(value))
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


def _config_rows(config: Config, show_secrets: bool) -> List[Tuple[str, Any]]:
    """Flattens a config into (field, value) pairs suitable for display.

    Args:
        config: The validated configuration.
        show_secrets: If False, secret values are masked.

    Returns:
        A list of field names and JSON-friendly values.
    """
    rows = []
    for name in (
        "api_key",
        "api_secret_key",
        "scopes",
        "host_name",
        "host_scheme",
        "api_version",
        "is_embedded_app",
        "is_custom_store_app",
        "user_agent_prefix",
        "private_app_storefront_access_token",
        "custom_shop_domains",
        "billing",
    ):
        value = getattr(config, name)
        if name in SECRET_FIELDS and not show_secrets:
            value = _mask(value)
        rows.append((name, _display_value(value)))

    rows.append(("logger.log", _display_value(config.logger.log)))
    rows.append(("logger.level", config.logger.level.name if hasattr(config.logger.level, "name") else config.logger.level))
    rows.append(("logger.http_requests", config.logger.http_requests))
    rows.append(("logger.timestamps", config.logger.timestamps))
    return rows


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="shopify-config")
@click.option("--verbose", is_flag=True, help="Enable verbose output.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
def main(verbose: bool, debug: bool) -> None:
    """Validate and inspect shopify_api configuration options."""
    log_level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=log_level, format='%(asctime)s - %(levelname)s - %(message)s')
    logger.debug("Debug mode enabled.")


@main.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "json_output", is_flag=True, help="Output the normalized configuration as JSON.")
@click.option("--show-secrets", is_flag=True, help="Print secret values instead of masking them.")
def check(config_file: str, json_output: bool, show_secrets: bool) -> None:
    """Validate the options in a TOML file and show the normalized result.

    Options are read from a ``[shopify]`` table if present, otherwise from the
    top level of the file. Exits with status 1 if validation fails.
    """
    try:
        params = load_params(config_file)
    except (OSError, ValueError) as e:
        err_console.print(f"[red]Could not read {escape(config_file)}: {escape(str(e))}[/red]")
        sys.exit(1)

    try:
        config = validate_config(params)
    except (ConfigurationError, FeatureDeprecatedError) as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    rows = _config_rows(config, show_secrets)
    if json_output:
        click.echo(json.dumps(dict(rows), indent=2, default=str))
        return

    table = Table(title=f"Configuration for {escape(config.host_name)}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for name, value in rows:
        display = ", ".join(map(str, value)) if isinstance(value, list) else str(value)
        table.add_row(name, escape(display))
    console.print(table)
    console.print(Panel("Configuration is valid.", style="green", title="Check Complete"))


@main.command()
def versions() -> None:
    """List the Admin API versions this library knows about."""
    table = Table(title="Admin API versions")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Latest")
    for version in ApiVersion:
        table.add_row(version.name, version.value, "yes" if version == LATEST_API_VERSION else "")
    console.print(table)


@main.command()
@click.argument("scopes", nargs=-1, required=True)
@click.option("--expanded", is_flag=True, help="Include scopes implied by write scopes.")
def scopes(scopes: Tuple[str, ...], expanded: bool) -> None:
    """Normalize access scopes.

    Each argument may hold a single scope or a comma separated list.
    """
    auth_scopes = AuthScopes([part for arg in scopes for part in arg.split(AuthScopes.SCOPE_DELIMITER)])
    result = auth_scopes.expanded() if expanded else auth_scopes.to_list()
    click.echo(AuthScopes.SCOPE_DELIMITER.join(result))


if __name__ == "__main__":
    main()
