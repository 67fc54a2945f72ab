from typing import Dict, List, Optional
from pydantic import BaseModel
from kwatch.utils.logger import get_logger
from kwatch.models.config import Config

logger = get_logger(__name__)


class Container(BaseModel):
    name: str
    reason: str = ""


class Pod(BaseModel):
    name: str
    namespace: str
    labels: Dict[str, str] = {}
    containers: List[Container] = []


class Event(BaseModel):
    pod: Pod
    container: Optional[Container] = None
    reason: str = ""


class EventFilter:
    """
    Decide which pod events are reported, based on a loaded Config.

    Allow lists admit only the listed items, forbid lists reject them,
    and when neither is set everything is admitted.
    """

    def __init__(self, config: Config):
        self.config = config

    @staticmethod
    def _admitted(item: str, allowed: List[str], forbidden: List[str]) -> bool:
        if allowed:
            return item in allowed
        return item not in forbidden

    def namespace_allowed(self, namespace: str) -> bool:
        return self._admitted(
            namespace,
            self.config.allowed_namespaces,
            self.config.forbidden_namespaces,
        )

    def reason_allowed(self, reason: str) -> bool:
        return self._admitted(
            reason,
            self.config.allowed_reasons,
            self.config.forbidden_reasons,
        )

    def container_ignored(self, name: str) -> bool:
        return name in self.config.ignore_container_names

    def pod_ignored(self, pod: Pod) -> bool:
        """True when any label rule matches the pod. Pods without the label never match."""
        for rule in self.config.ignore_pod_labels:
            value = pod.labels.get(rule.label)
            if value is None:
                continue
            if rule.matches(value):
                logger.debug("Pod %s/%s ignored by label %s", pod.namespace, pod.name, rule.label)
                return True
        return False

    def should_notify(self, event: Event) -> bool:
        pod = event.pod
        if not self.namespace_allowed(pod.namespace):
            logger.debug("Namespace %s filtered out", pod.namespace)
            return False

        # reasons
        if event.reason and not self.reason_allowed(event.reason):
            logger.debug("Reason %s filtered out for pod %s", event.reason, pod.name)
            return False

        if event.container is not None and self.container_ignored(event.container.name):
            logger.debug("Container %s ignored in pod %s", event.container.name, pod.name)
            return False

        return not self.pod_ignored(pod)
