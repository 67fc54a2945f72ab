from kwatch.config.loader import load_config_from_string
from kwatch.models.cluster_components import (
    Container,
    Event,
    EventFilter,
    Pod,
)


def _filter(document: str) -> EventFilter:
    return EventFilter(load_config_from_string(document))


def test_default_config_notifies_everything():
    event_filter = _filter("")
    event = Event(
        pod=Pod(name="cart-123", namespace="robot-shop", labels={"service": "cart"}),
        container=Container(name="cart"),
        reason="OOMKilled",
    )

    assert event_filter.should_notify(event)


def test_forbidden_namespace_is_filtered():
    event_filter = _filter('namespaces: ["!kube-system"]\n')

    assert not event_filter.namespace_allowed("kube-system")
    assert event_filter.namespace_allowed("robot-shop")
    assert not event_filter.should_notify(
        Event(pod=Pod(name="coredns-0", namespace="kube-system"))
    )


def test_allowed_namespaces_admit_only_listed():
    event_filter = _filter("namespaces: [robot-shop, payments]\n")

    assert event_filter.namespace_allowed("payments")
    assert not event_filter.namespace_allowed("default")


def test_reasons_filter():
    event_filter = _filter("reasons: [OOMKilled]\n")
    pod = Pod(name="cart-123", namespace="robot-shop")

    assert event_filter.should_notify(Event(pod=pod, reason="OOMKilled"))
    assert not event_filter.should_notify(Event(pod=pod, reason="Error"))


def test_ignored_container():
    event_filter = _filter("ignoreContainerNames: [istio-proxy]\n")
    pod = Pod(name="cart-123", namespace="robot-shop")

    assert not event_filter.should_notify(
        Event(pod=pod, container=Container(name="istio-proxy"))
    )
    assert event_filter.should_notify(Event(pod=pod, container=Container(name="cart")))


def test_pod_label_rules():
    event_filter = _filter(
        """
ignorePodLabels:
  - label: app
    valueRegex: "^batch-"
  - label: tier
    value: canary
"""
    )

    assert event_filter.pod_ignored(
        Pod(name="a", namespace="jobs", labels={"app": "batch-nightly"})
    )
    assert event_filter.pod_ignored(
        Pod(name="b", namespace="web", labels={"tier": "canary"})
    )
    assert not event_filter.pod_ignored(
        Pod(name="c", namespace="web", labels={"app": "web", "tier": "stable"})
    )
    # no label, no match
    assert not event_filter.pod_ignored(Pod(name="d", namespace="web"))


def test_forbidden_reason_is_filtered():
    event_filter = _filter('reasons: ["!Error"]\n')
    pod = Pod(name="cart-123", namespace="robot-shop")

    assert not event_filter.reason_allowed("Error")
    assert event_filter.reason_allowed("OOMKilled")
    assert not event_filter.should_notify(Event(pod=pod, reason="Error"))
    assert event_filter.should_notify(Event(pod=pod, reason="OOMKilled"))
