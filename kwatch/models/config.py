"""
Typed settings for the kwatch monitoring agent.

Document keys are camelCase (``pvcMonitor``, ``ignorePodLabels``), attributes
are snake_case. Every field has a default, so a document only needs to carry
the values it changes.
"""
import re
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from kwatch.config.rules import split_allow_forbid
from kwatch.models.custom_errors import (
    ConfigConflictError,
    ConfigError,
    InvalidRuleError,
    RegexCompileError,
)


class KwatchModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def drop_null_values(cls, data: Any) -> Any:
        # A key set to null keeps its default, same as an omitted key
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class AppConfig(KwatchModel):
    # Used for outgoing http(s) requests, except requests to the cluster
    proxy_url: str = Field(default="", alias="proxyURL")

    # Shown in notifications to tell which cluster has an issue
    cluster_name: str = ""

    disable_startup_message: bool = False


class UpgraderConfig(KwatchModel):
    disable_update_check: bool = False


class PvcMonitorConfig(KwatchModel):
    enabled: bool = True

    # Minutes between two usage checks
    interval: int = 5

    # Usage percentage above which a notification is sent
    threshold: float = 80


class IgnorePodLabelRule(KwatchModel):
    """
    Exclude pods whose ``label`` equals ``value`` or matches ``value_regex``.

    Exactly one of ``value`` and ``value_regex`` must be set. The pattern is
    compiled once by :meth:`validate_rule`; matching never compiles. Rules are
    frozen so the compiled pattern always reflects ``value_regex``.
    """

    model_config = ConfigDict(frozen=True)

    label: str = ""
    value: str = ""
    value_regex: str = ""

    _matcher: Optional[re.Pattern] = PrivateAttr(default=None)

    def validate_rule(self, source: Optional[str] = None) -> "IgnorePodLabelRule":
        """
        Check the rule is well formed and compile its pattern.

        Raises:
            InvalidRuleError: label is empty, or neither value nor valueRegex is set
            ConfigConflictError: both value and valueRegex are set
            RegexCompileError: valueRegex is not a valid regular expression
        """
        if not self.label:
            raise InvalidRuleError(f"no label supplied: {self!r}", source)

        if self.value and self.value_regex:
            raise ConfigConflictError(
                "either value or valueRegex must be set to ignore pod labels, "
                f"but not both (label {self.label!r})",
                source,
            )

        if not self.value and not self.value_regex:
            raise InvalidRuleError(
                "either value or valueRegex must be set to ignore pod labels "
                f"(label {self.label!r})",
                source,
            )

        if self.value_regex and self._matcher is None:
            try:
                self._matcher = re.compile(self.value_regex)
            except re.error as exc:
                raise RegexCompileError(self.value_regex, str(exc), source) from exc

        return self

    @property
    def matcher(self) -> Optional[re.Pattern]:
        return self._matcher

    def matches(self, value: str) -> bool:
        if self.value_regex:
            if self._matcher is None:
                raise ConfigError(
                    f"label rule for {self.label!r} used before validation"
                )
            return self._matcher.search(value) is not None
        return value == self.value


class Config(KwatchModel):
    app: AppConfig = Field(default_factory=AppConfig)
    upgrader: UpgraderConfig = Field(default_factory=UpgraderConfig)
    pvc_monitor: PvcMonitorConfig = Field(default_factory=PvcMonitorConfig)

    # Max tail log lines in messages, 0 sends every line
    max_recent_log_lines: int = 0

    # Do not report containers killed because their graceful shutdown failed
    ignore_failed_graceful_shutdown: bool = False

    # Watched (or, prefixed with "!", forbidden) namespaces and reasons.
    # Empty watches everything.
    namespaces: List[str] = []
    reasons: List[str] = []

    ignore_container_names: List[str] = []
    ignore_pod_labels: List[IgnorePodLabelRule] = []

    # Provider name to provider settings, e.g. {"slack": {"webhook": "URL"}}
    alert: Dict[str, Dict[str, Any]] = {}

    _allowed_namespaces: List[str] = PrivateAttr(default_factory=list)
    _forbidden_namespaces: List[str] = PrivateAttr(default_factory=list)
    _allowed_reasons: List[str] = PrivateAttr(default_factory=list)
    _forbidden_reasons: List[str] = PrivateAttr(default_factory=list)

    @field_validator("alert", mode="before")
    @classmethod
    def empty_providers(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {name: settings or {} for name, settings in value.items()}
        return value

    def derive_filters(self) -> None:
        """Compute the allowed/forbidden lists from namespaces and reasons."""
        self._allowed_namespaces, self._forbidden_namespaces = split_allow_forbid(
            self.namespaces
        )
        self._allowed_reasons, self._forbidden_reasons = split_allow_forbid(
            self.reasons
        )

    @property
    def allowed_namespaces(self) -> List[str]:
        return list(self._allowed_namespaces)

    @property
    def forbidden_namespaces(self) -> List[str]:
        return list(self._forbidden_namespaces)

    @property
    def allowed_reasons(self) -> List[str]:
        return list(self._allowed_reasons)

    @property
    def forbidden_reasons(self) -> List[str]:
        return list(self._forbidden_reasons)

    @property
    def proxies(self) -> Dict[str, str]:
        """Proxy mapping for outbound HTTP clients, empty when none is set."""
        if self.app.proxy_url:
            return {"https": self.app.proxy_url}
        return {}
