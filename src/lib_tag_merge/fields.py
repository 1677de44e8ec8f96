"""Dataclass field annotations carrying merge tags.

Purpose
-------
Attach tag text to destination fields and read it back together with the
resolved field type. Tags live in :func:`dataclasses.field` metadata under
:data:`~lib_tag_merge.domain.tag.TAG_KEY` so plain ``field(metadata=...)``
declarations work as well as :func:`tagged`.

Contents
--------
* :func:`tagged` – ``dataclasses.field`` wrapper that records a tag.
* :class:`TaggedField` – destination field with its raw tag and type.
* :func:`tagged_fields` – tagged fields of a dataclass in declaration order.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, get_type_hints

from .domain.tag import TAG_KEY


def tagged(tag: str, *, tag_key: str = TAG_KEY, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> Any:
    """Return a :func:`dataclasses.field` whose metadata holds *tag*.

    Examples
    --------
    >>> @dataclass
    ... class Settings:
    ...     url: str = tagged("EV.URL|FV.Service.URL", default="")
    >>> [(item.name, item.tag) for item in tagged_fields(Settings)]
    [('url', 'EV.URL|FV.Service.URL')]
    """

    merged = dict(metadata or {})
    merged[tag_key] = tag
    return dataclasses.field(metadata=merged, **kwargs)


@dataclass(frozen=True, slots=True)
class TaggedField:
    """A destination field that carries a merge tag."""

    name: str
    tag: str
    type: Any


def tagged_fields(cls: type, *, tag_key: str = TAG_KEY) -> Iterator[TaggedField]:
    """Yield the tagged fields of dataclass *cls* in declaration order.

    Field types come from :func:`typing.get_type_hints`; when a hint cannot be
    evaluated the raw annotation is used, and string annotations degrade to
    ``Any`` so the assignability check does not reject valid values.
    """

    hints = _type_hints(cls)
    for item in dataclasses.fields(cls):
        raw = item.metadata.get(tag_key)
        if raw is None:
            continue
        field_type = hints.get(item.name, item.type)
        if isinstance(field_type, str):
            field_type = Any
        yield TaggedField(name=item.name, tag=raw, type=field_type)


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls)
    except (NameError, TypeError):
        return {}
