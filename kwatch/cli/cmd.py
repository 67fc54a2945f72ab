"""
kwatch-config: load, validate and summarize a kwatch configuration file.
"""
import os
import sys
from typing import Optional

import click
import yaml

from kwatch import __version__
from kwatch.config.loader import load_config
from kwatch.models.config import Config
from kwatch.models.custom_errors import ConfigError
from kwatch.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

LOG_LEVEL_ENV = "KWATCH_LOG_LEVEL"


def _format_filter(allowed, forbidden) -> str:
    if allowed:
        return "only " + ", ".join(allowed)
    if forbidden:
        return "all except " + ", ".join(forbidden)
    return "all"


def _summary(config: Config) -> str:
    pvc = config.pvc_monitor
    lines = [
        f"Cluster:            {config.app.cluster_name or '<unnamed>'}",
        f"Namespaces:         {_format_filter(config.allowed_namespaces, config.forbidden_namespaces)}",
        f"Reasons:            {_format_filter(config.allowed_reasons, config.forbidden_reasons)}",
        f"Ignored containers: {', '.join(config.ignore_container_names) or 'none'}",
        f"Pod label rules:    {len(config.ignore_pod_labels)}",
        f"Max log lines:      {config.max_recent_log_lines or 'unlimited'}",
        "PVC monitor:        "
        + (
            f"every {pvc.interval}m, threshold {pvc.threshold:g}%"
            if pvc.enabled
            else "disabled"
        ),
        f"Alert providers:    {', '.join(sorted(config.alert)) or 'none'}",
        f"Proxy:              {'configured' if config.proxies else 'none'}",
    ]
    return "\n".join(lines)


@click.command(name="kwatch-config")
@click.version_option(version=__version__, prog_name="kwatch-config")
@click.argument("path", required=False, type=click.Path(dir_okay=False))
@click.option(
    "--dump",
    is_flag=True,
    help="Print the resolved configuration as YAML instead of a summary.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=lambda: os.getenv(LOG_LEVEL_ENV, "INFO"),
    show_default=f"${LOG_LEVEL_ENV} or INFO",
    help="Logging verbosity.",
)
def main(path: Optional[str], dump: bool, log_level: str):
    """Validate the configuration at PATH (default: $CONFIG_FILE)."""
    setup_logging(log_level)

    try:
        config = load_config(path)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        for error in getattr(exc, "errors", []):
            click.echo(f"  - {error.message}", err=True)
        sys.exit(1)

    if dump:
        click.echo(
            yaml.safe_dump(config.model_dump(by_alias=True), sort_keys=False),
            nl=False,
        )
        return

    click.echo(_summary(config))


if __name__ == "__main__":
    main()
