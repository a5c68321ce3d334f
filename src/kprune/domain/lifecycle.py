"""Per-object lifecycle directives honoured while pruning."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

ON_REMOVE_ANNOTATION: Final[str] = "cli-utils.sigs.k8s.io/on-remove"
ON_REMOVE_KEEP: Final[str] = "keep"


def prevent_delete_annotation(annotations: Mapping[str, str] | None) -> bool:
    """Return True if the object asks to be kept when omitted from an apply."""

    if not annotations:
        return False
    return annotations.get(ON_REMOVE_ANNOTATION) == ON_REMOVE_KEEP
