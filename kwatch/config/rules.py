"""
Allow/forbid resolution for the namespace and reason filters.

A token prefixed with ``!`` forbids the named item, any other token allows it.
A single setting may hold allowed items or forbidden items, never both.
"""
from typing import Iterable, List, Optional, Tuple

from kwatch.models.custom_errors import ConfigConflictError

NEGATION_MARKER = "!"


def split_allow_forbid(
    items: Optional[Iterable[str]],
) -> Tuple[List[str], List[str]]:
    """
    Split tokens into allowed and forbidden lists, preserving order.

    Only one leading marker is stripped, so ``"!!x"`` forbids ``"!x"``.
    """
    allow: List[str] = []
    forbid: List[str] = []
    for item in items or ():
        if item.startswith(NEGATION_MARKER):
            forbid.append(item[len(NEGATION_MARKER):])
            continue
        allow.append(item)
    return allow, forbid


def check_allow_forbid(
    allow: List[str],
    forbid: List[str],
    kind: str,
    source: Optional[str] = None,
) -> None:
    if allow and forbid:
        raise ConfigConflictError(
            f"either allowed or forbidden {kind} must be set, can't set both "
            f"(allowed: {allow}, forbidden: {forbid})",
            source,
        )


def resolve_allow_forbid(
    items: Optional[Iterable[str]],
    kind: str,
    source: Optional[str] = None,
) -> Tuple[List[str], List[str]]:
    """Split ``items`` and raise ConfigConflictError if both modes are used."""
    allow, forbid = split_allow_forbid(items)
    check_allow_forbid(allow, forbid, kind, source)
    return allow, forbid
