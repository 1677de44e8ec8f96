"""Application-layer merge policy.

Purpose
-------
Drive parse → resolve → select → reconcile → assign for every tagged field of a
destination record. Remains free of validation and wiring so alternative
composition roots can reuse it.

Contents
    - ``merge_fields``: loop over tagged destination fields.
    - ``merge_field``: one field, returning whether it was assigned.

System Role
-----------
Called by :func:`lib_tag_merge.core.merge` after the destination and source
handles were validated. Fields are processed in declaration order; the first
terminal error stops the loop and already-assigned fields keep their new values.
"""

from __future__ import annotations

from typing import Any

from ..domain.errors import FieldError
from ..domain.resolution import NOT_APPLICABLE, Resolved, type_name
from ..domain.tag import TAG_KEY, parse_tag
from ..fields import TaggedField, tagged_fields
from ..observability import log_debug
from .ports import Hydrator, ShapeClassifier
from .reconcile import reconcile
from .resolve import resolve_path
from .select import select_value


def merge_fields(
    destination: Any,
    source: Any,
    *,
    classify: ShapeClassifier,
    hydrator: Hydrator,
    tag_key: str = TAG_KEY,
    strict_options: bool = False,
) -> list[str]:
    """Merge every tagged field of *destination* from *source*.

    Returns
    -------
    list[str]
        Names of the fields that were assigned, in declaration order.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> from lib_tag_merge.adapters.shapes.default import classify
    >>> from lib_tag_merge.adapters.hydrators.default import hydrate_text
    >>> from lib_tag_merge.fields import tagged
    >>> @dataclass
    ... class Target:
    ...     name: str = tagged("A|B", default="")
    >>> @dataclass
    ... class Source:
    ...     A: str = "x"
    ...     B: str = "y"
    >>> target = Target()
    >>> merge_fields(target, Source(), classify=classify, hydrator=hydrate_text)
    ['name']
    >>> target.name
    'y'
    """

    assigned: list[str] = []
    for item in tagged_fields(type(destination), tag_key=tag_key):
        if merge_field(destination, source, item, classify=classify, hydrator=hydrator, strict_options=strict_options):
            assigned.append(item.name)
    return assigned


def merge_field(
    destination: Any,
    source: Any,
    item: TaggedField,
    *,
    classify: ShapeClassifier,
    hydrator: Hydrator,
    strict_options: bool = False,
) -> bool:
    """Resolve, select, reconcile and assign a single field.

    Returns ``False`` when no alternative produced a value; the field is then
    left exactly as it was.
    """

    try:
        expression = parse_tag(item.tag, strict=strict_options)
        outcomes = []
        for alternative in expression.alternatives:
            outcome = resolve_path(source, alternative, classify)
            if outcome is NOT_APPLICABLE:
                log_debug("alternative_not_applicable", field=item.name, tag=item.tag, path=str(alternative))
            outcomes.append(outcome)
        selected = select_value(outcomes, skip_zero=expression.skip_zero)
        if not isinstance(selected, Resolved):
            log_debug("field_skipped", field=item.name, tag=item.tag)
            return False
        value = reconcile(
            selected.value,
            item.type,
            hydrate=expression.hydrate,
            hydrator=hydrator,
            tag=item.tag,
        )
    except FieldError as exc:
        exc.with_context(
            tag=item.tag,
            destination_type=type_name(item.type),
            source_type=type_name(type(source)),
            field=item.name,
        )
        raise
    setattr(destination, item.name, value)
    log_debug("field_merged", field=item.name, tag=item.tag, value_type=selected.type_name)
    return True
