"""Composition root for ``lib_tag_merge``.

Purpose
-------
Provide the entry points that validate handles, wire the default adapters
(source shapes, text hydrator) into the merge policy, and emit structured
observability signals.

Contents
--------
* :func:`merge` – populate one destination record from one source record.
* :func:`merge_all` – overlay several sources in order of increasing precedence.
* :func:`resolve` – resolve a tag against any source value (used by the CLI).
* :func:`_validate_destination` / :func:`_validate_source` – handle checks.

System Role
-----------
This is the canonical place to swap adapters: callers pass their own
``hydrator``; the shape classifier is fixed to
:func:`lib_tag_merge.adapters.shapes.default.classify`.
"""

from __future__ import annotations

import dataclasses
from typing import Any

from .adapters.hydrators.default import hydrate_text
from .adapters.shapes.default import classify, is_record
from .application.merge import merge_fields
from .application.ports import Hydrator
from .application.resolve import resolve_path
from .application.select import select_value
from .domain.errors import DestinationInvalid, FieldError, SourceInvalid
from .domain.resolution import NOT_APPLICABLE, Outcome, type_name
from .domain.tag import TAG_KEY, parse_tag
from .observability import log_debug, log_error, log_info, make_event


def merge(
    destination: Any,
    source: Any,
    *,
    hydrator: Hydrator = hydrate_text,
    tag_key: str = TAG_KEY,
    strict_options: bool = False,
) -> list[str]:
    """Populate tagged fields of *destination* from *source* in place.

    Why
    ----
    Applications assemble one settings object from several origins; declaring
    the source paths on the fields keeps the precedence visible where the
    field is defined.

    What
    ----
    Validates both handles, then parses, resolves, selects and reconciles each
    tagged field in declaration order. Fields whose alternatives all miss are
    left untouched, so repeated merges behave as a sparse overlay.

    Parameters
    ----------
    destination:
        Mutable (non-frozen) dataclass instance.
    source:
        Record-like object (dataclass, plain object, named tuple).
    hydrator:
        Text conversion collaborator for tags with the ``hydrate`` option.
    tag_key:
        Dataclass metadata key holding the tag text.
    strict_options:
        Reject unknown tag options instead of ignoring them.

    Returns
    -------
    list[str]
        Names of the assigned fields.

    Raises
    ------
    ValidationError
        Bad destination or source; nothing was modified.
    FieldError
        First terminal field failure; earlier fields stay assigned.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> from lib_tag_merge.fields import tagged
    >>> @dataclass
    ... class Service:
    ...     URL: str | None = None
    >>> @dataclass
    ... class Sources:
    ...     EV: dict
    ...     FV: Service
    >>> @dataclass
    ... class Settings:
    ...     url: str = tagged("EV.URL|FV.URL", default="")
    >>> settings = Settings()
    >>> merge(settings, Sources(EV={"URL": "env-url"}, FV=Service("file-url")))
    ['url']
    >>> settings.url
    'file-url'
    """

    _validate_destination(destination)
    _validate_source(source)
    event = make_event(type_name(type(destination)), type_name(type(source)))
    try:
        assigned = merge_fields(
            destination,
            source,
            classify=classify,
            hydrator=hydrator,
            tag_key=tag_key,
            strict_options=strict_options,
        )
    except FieldError as exc:
        log_error("merge_failed", **event, field=exc.field, tag=exc.tag, error=str(exc))
        raise
    log_info("merge_complete", **event, assigned=len(assigned))
    return assigned


def merge_all(destination: Any, *sources: Any, **options: Any) -> list[str]:
    """Merge *sources* into *destination* one after another.

    Later sources take precedence where they resolve a value; fields they miss
    keep what earlier sources assigned. Returns every assigned field name once,
    in first-assignment order.
    """

    assigned: list[str] = []
    for source in sources:
        for name in merge(destination, source, **options):
            if name not in assigned:
                assigned.append(name)
    return assigned


def resolve(source: Any, tag: str, *, strict_options: bool = False) -> Outcome:
    """Resolve *tag* against any *source* value and apply the selection rules.

    Unlike :func:`merge`, no destination type is involved, so hydration and the
    assignability check are skipped.

    Examples
    --------
    >>> resolve({"EV": {"Count": 0}, "FV": {"Count": 42}}, "EV.Count|FV.Count,skipzero")
    Resolved(value=42)
    >>> resolve({"EV": {}}, "EV.Missing")
    NOT_APPLICABLE
    """

    expression = parse_tag(tag, strict=strict_options)
    try:
        outcomes = [resolve_path(source, alternative, classify) for alternative in expression.alternatives]
    except FieldError as exc:
        exc.with_context(tag=tag, source_type=type_name(type(source)))
        raise
    selected = select_value(outcomes, skip_zero=expression.skip_zero)
    if selected is NOT_APPLICABLE:
        log_debug("tag_unresolved", tag=tag)
    return selected


def _validate_destination(destination: Any) -> None:
    """Require a mutable dataclass instance."""

    if destination is None or isinstance(destination, type) or not dataclasses.is_dataclass(destination):
        raise DestinationInvalid(f"invalid destination: mutable dataclass instance required, got {type_name(type(destination))}")
    params = getattr(type(destination), "__dataclass_params__", None)
    if params is not None and params.frozen:
        raise DestinationInvalid(f"invalid destination: {type_name(type(destination))} is frozen")


def _validate_source(source: Any) -> None:
    """Require a record-like source object."""

    if source is None or not is_record(source):
        raise SourceInvalid(f"invalid source: record instance required, got {type_name(type(source))}")
