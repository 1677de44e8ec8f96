"""Path resolution over heterogeneous source trees.

Purpose
-------
Walk one :class:`~lib_tag_merge.domain.tag.PathAlternative` through a source
value and report a :class:`~lib_tag_merge.domain.resolution.Resolved` value or
:data:`~lib_tag_merge.domain.resolution.NOT_APPLICABLE`. The resolver knows
nothing about concrete shapes; it asks a
:class:`~lib_tag_merge.application.ports.ShapeClassifier` for each step.

Rules
-----
* ``None`` anywhere along the path (including the final leaf) means "not
  applicable": an unset optional never overrides and never fails.
* A ``Terminal`` step (accessor result) ends the walk even when segments remain.
* An empty alternative resolves to the source itself.
"""

from __future__ import annotations

from typing import Any, Iterable

from ..domain.resolution import NOT_APPLICABLE, Descend, Outcome, Resolved, Terminal
from ..domain.tag import PathAlternative
from .ports import ShapeClassifier


def resolve_path(source: Any, alternative: PathAlternative | Iterable[str], classify: ShapeClassifier) -> Outcome:
    """Resolve *alternative* against *source*.

    Parameters
    ----------
    source:
        Root source value (record, mapping, sequence).
    alternative:
        Path alternative or any iterable of segments.
    classify:
        Callable returning the shape adapter for a value.

    Returns
    -------
    Resolved | NOT_APPLICABLE
        The leaf value, or the marker telling the selector to move on.

    Raises
    ------
    FieldError
        Terminal failures reported by shape adapters (missing final member,
        invalid key type, failing accessor).

    Examples
    --------
    >>> from lib_tag_merge.adapters.shapes.default import classify
    >>> resolve_path({"EV": {"Data": ["a", "b"]}}, ["EV", "Data", "1"], classify)
    Resolved(value='b')
    >>> resolve_path({"EV": None}, ["EV", "URL"], classify)
    NOT_APPLICABLE
    """

    segments = tuple(alternative)
    current = source
    for position, segment in enumerate(segments):
        if current is None:
            return NOT_APPLICABLE
        step = classify(current).step(current, segment, final=position == len(segments) - 1)
        if isinstance(step, Terminal):
            current = step.value
            break
        if not isinstance(step, Descend):
            return NOT_APPLICABLE
        current = step.value
    if current is None and segments:
        return NOT_APPLICABLE
    return Resolved(current)
