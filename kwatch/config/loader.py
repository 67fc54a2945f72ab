"""
Configuration loader.

Reads the YAML document named by ``CONFIG_FILE``, overlays it on the defaults
of :class:`~kwatch.models.config.Config`, resolves the namespace and reason
filters and validates the pod label rules.

Loading fails fast: a conflicting filter or a bad label rule aborts the load
instead of returning a partially valid configuration. Every semantic problem
in the document is reported at once.
"""
import os
from typing import List, MutableMapping, Optional, Union

import yaml
from pydantic import ValidationError

from kwatch.config.rules import resolve_allow_forbid
from kwatch.models.config import Config
from kwatch.models.custom_errors import (
    ConfigParseError,
    ConfigReadError,
    ConfigValidationError,
)
from kwatch.utils.logger import get_logger

logger = get_logger(__name__)

CONFIG_FILE_ENV = "CONFIG_FILE"
PROXY_ENV = "HTTPS_PROXY"


def load_config(path: Optional[Union[str, os.PathLike]] = None) -> Config:
    """
    Load configuration from ``path``, or from the file named by CONFIG_FILE.

    Raises:
        ConfigReadError: no path is given or the file cannot be read
        ConfigParseError: the document is not a valid YAML mapping of settings
        ConfigValidationError: the settings are inconsistent
    """
    if path is None:
        path = os.getenv(CONFIG_FILE_ENV, "")
    path = os.fsdecode(path)
    if not path:
        logger.warning("unable to load config file: %s is not set", CONFIG_FILE_ENV)
        raise ConfigReadError(f"no config file given and {CONFIG_FILE_ENV} is not set")

    try:
        with open(path, "rb") as f:
            content = f.read()
    except OSError as exc:
        logger.warning("unable to load config file: %s", exc)
        raise ConfigReadError(exc.strerror or str(exc), path) from exc

    return load_config_from_string(content, source=path)


def load_config_from_string(
    content: Union[str, bytes], source: str = "<string>"
) -> Config:
    """Build a validated Config from an in-memory YAML document."""
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        logger.warning("unable to parse config file: %s", exc)
        raise ConfigParseError(str(exc), source) from exc

    if document is None:
        document = {}
    if not isinstance(document, dict):
        logger.warning("unable to parse config file: top level is not a mapping")
        raise ConfigParseError(
            f"expected a mapping at the top level, got {type(document).__name__}",
            source,
        )

    try:
        config = Config.model_validate(document)
    except ValidationError as exc:
        logger.warning("unable to parse config file: %s", exc)
        raise ConfigParseError(_format_validation_error(exc), source) from exc

    _resolve(config, source)

    logger.info(
        "Loaded configuration from %s (cluster: %s)",
        source,
        config.app.cluster_name or "<unnamed>",
    )
    return config


def apply_proxy_environment(
    config: Config, environ: Optional[MutableMapping[str, str]] = None
) -> bool:
    """
    Export the configured proxy as HTTPS_PROXY.

    Only for HTTP clients that read the proxy from the environment, prefer
    passing ``config.proxies`` explicitly. Must run before such clients are
    created; not safe while other threads read the environment.

    Returns:
        True if a proxy was exported
    """
    if environ is None:
        environ = os.environ
    if not config.app.proxy_url:
        return False
    environ[PROXY_ENV] = config.app.proxy_url
    logger.debug("%s set from app.proxyURL", PROXY_ENV)
    return True


def _resolve(config: Config, source: str) -> None:
    errors: List[ConfigValidationError] = []

    config.derive_filters()
    filters = (("namespaces", config.namespaces), ("reasons", config.reasons))
    for kind, items in filters:
        try:
            allow, forbid = resolve_allow_forbid(items, kind, source)
        except ConfigValidationError as exc:
            logger.warning("%s", exc.message)
            errors.append(exc)
        else:
            logger.debug("%s allowed: %s, forbidden: %s", kind, allow, forbid)

    for index, rule in enumerate(config.ignore_pod_labels):
        try:
            rule.validate_rule(source)
        except ConfigValidationError as exc:
            logger.warning("ignorePodLabels[%d]: %s", index, exc.message)
            errors.append(exc)

    if len(errors) == 1:
        raise errors[0]
    if errors:
        raise ConfigValidationError(
            f"{len(errors)} configuration errors: "
            + "; ".join(error.message for error in errors),
            source,
            errors,
        )


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)
