import pytest

from kwatch.config.rules import (
    check_allow_forbid,
    resolve_allow_forbid,
    split_allow_forbid,
)
from kwatch.models.custom_errors import ConfigConflictError


def test_split_mixed_tokens_preserves_order():
    allow, forbid = split_allow_forbid(["a", "!b", "c"])

    assert allow == ["a", "c"]
    assert forbid == ["b"]


def test_split_only_forbidden():
    assert split_allow_forbid(["!x", "!y"]) == ([], ["x", "y"])


@pytest.mark.parametrize("items", [[], None])
def test_split_empty_input_returns_empty_lists(items):
    allow, forbid = split_allow_forbid(items)

    assert allow == []
    assert forbid == []


def test_split_strips_single_marker_only():
    allow, forbid = split_allow_forbid(["!!double", "mid!dle", "!"])

    assert allow == ["mid!dle"]
    assert forbid == ["!double", ""]


def test_split_partitions_every_token():
    items = ["default", "!kube-system", "monitoring", "!!odd", "!kube-public"]

    allow, forbid = split_allow_forbid(items)

    assert len(allow) + len(forbid) == len(items)
    assert allow == [item for item in items if not item.startswith("!")]
    assert ["!" + item for item in forbid] == [
        item for item in items if item.startswith("!")
    ]


def test_resolve_pure_lists_are_accepted():
    assert resolve_allow_forbid(["a", "b"], "namespaces") == (["a", "b"], [])
    assert resolve_allow_forbid(["!a", "!b"], "namespaces") == ([], ["a", "b"])


def test_resolve_mixed_lists_conflict():
    with pytest.raises(ConfigConflictError, match="namespaces"):
        resolve_allow_forbid(["a", "!b", "c"], "namespaces")


def test_check_conflict_carries_source():
    with pytest.raises(ConfigConflictError) as exc_info:
        check_allow_forbid(["OOMKilled"], ["Error"], "reasons", "cfg.yaml")

    assert exc_info.value.source == "cfg.yaml"
    assert str(exc_info.value).startswith("cfg.yaml: ")
