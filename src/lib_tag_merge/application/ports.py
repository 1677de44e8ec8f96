"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the resolver and the reconciler depend on so
concrete source shapes and hydration strategies stay replaceable.

Contents
--------
* :class:`SourceShape` – one traversal step over a record, mapping, sequence
  or leaf value.
* :class:`ShapeClassifier` – picks the :class:`SourceShape` for a value.
* :class:`Hydrator` – converts text into a destination type.

System Role
-----------
These protocols enforce Dependency Inversion (DIP). The default implementations
live in :mod:`lib_tag_merge.adapters`.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..domain.resolution import Step


@runtime_checkable
class SourceShape(Protocol):
    """Traverse one segment of a source value.

    Why
    ----
    Records, keyed maps and indexed sequences each interpret a segment
    differently; the resolver only needs the outcome of a single step.

    Methods
    -------
    :meth:`step`
        Return ``Descend``/``Terminal``/``NOT_APPLICABLE`` or raise a terminal
        :class:`~lib_tag_merge.domain.errors.FieldError`.
    """

    kind: str

    def step(self, value: Any, segment: str, *, final: bool) -> Step:
        """Interpret *segment* against *value*; *final* marks the last segment."""


@runtime_checkable
class ShapeClassifier(Protocol):
    """Map an arbitrary value to the :class:`SourceShape` that can traverse it."""

    def __call__(self, value: Any) -> SourceShape:
        """Return the shape for *value*."""


@runtime_checkable
class Hydrator(Protocol):
    """Convert textual source data into a destination field type.

    Only invoked for tags carrying the ``hydrate`` option when the selected
    value is a ``str``. Failures are signalled by raising any exception.
    """

    def __call__(self, target_type: Any, text: str) -> Any:
        """Return *text* converted to *target_type*."""
