"""Type reconciliation between selected values and destination fields.

Purpose
-------
Apply optional hydration and then enforce that the value can be assigned to the
declared field type without implicit narrowing.

Contents
--------
* :func:`reconcile` – hydration plus assignability check.
* :func:`is_assignable` – structural ``isinstance`` over typing constructs.
"""

from __future__ import annotations

import types
from typing import Any, Final, Literal, Union, get_args, get_origin, is_typeddict

from ..domain.errors import HydrationFailure, TypeIncompatible
from ..domain.resolution import type_name
from .ports import Hydrator

# int is accepted where float/complex is declared (PEP 484 numeric tower).
_NUMERIC_PROMOTIONS: Final[dict[type, tuple[type, ...]]] = {
    float: (int,),
    complex: (int, float),
}


def reconcile(
    value: Any,
    field_type: Any,
    *,
    hydrate: bool,
    hydrator: Hydrator,
    tag: str,
) -> Any:
    """Return *value* ready to be assigned to a field declared as *field_type*.

    Why
    ----
    Source trees are untyped; the destination is the only authority on types,
    so mismatches must fail loudly instead of silently storing the wrong kind.

    Parameters
    ----------
    value:
        Selected value.
    field_type:
        Resolved annotation of the destination field.
    hydrate:
        Whether the tag carries the ``hydrate`` option.
    hydrator:
        Collaborator used to convert text when *hydrate* applies.
    tag:
        Tag text, attached to errors.

    Raises
    ------
    HydrationFailure
        The hydrator raised; the original exception is chained.
    TypeIncompatible
        The (possibly hydrated) value is not assignable to *field_type*.

    Examples
    --------
    >>> from lib_tag_merge.adapters.hydrators.default import hydrate_text
    >>> reconcile("42", int, hydrate=True, hydrator=hydrate_text, tag="EV.Count,hydrate")
    42
    >>> reconcile("42", int, hydrate=False, hydrator=hydrate_text, tag="EV.Count")
    Traceback (most recent call last):
    ...
    lib_tag_merge.domain.errors.TypeIncompatible: merge field (field: ?, tag: 'EV.Count', dst type: int, src type: str): source type is incompatible with destination type
    """

    source_type = type_name(type(value))
    if hydrate and isinstance(value, str) and not is_assignable(value, field_type):
        try:
            value = hydrator(field_type, value)
        except Exception as exc:
            raise HydrationFailure(
                f"hydration failed: {exc}",
                tag=tag,
                destination_type=type_name(field_type),
                source_type=source_type,
            ) from exc
    if not is_assignable(value, field_type):
        raise TypeIncompatible(
            "source type is incompatible with destination type",
            tag=tag,
            destination_type=type_name(field_type),
            source_type=type_name(type(value)),
        )
    return value


def is_assignable(value: Any, field_type: Any) -> bool:
    """Return ``True`` when *value* may be stored in a field typed *field_type*.

    Examples
    --------
    >>> is_assignable(1, float), is_assignable(True, int), is_assignable(None, int | None)
    (True, False, True)
    >>> is_assignable(["a"], list[str]), is_assignable("a", Literal["a", "b"])
    (True, True)
    """

    if field_type is Any or field_type is object:
        return True
    if field_type is None or field_type is type(None):
        return value is None
    origin = get_origin(field_type)
    if origin is Union or origin is types.UnionType:
        return any(is_assignable(value, member) for member in get_args(field_type))
    if origin is Literal:
        return any(value == option and type(value) is type(option) for option in get_args(field_type))
    if origin is not None:
        return _is_instance(value, origin)
    if isinstance(field_type, type):
        return _is_instance(value, field_type)
    # TypeVar, NewType, forward references: nothing to check against
    return True


def _is_instance(value: Any, cls: Any) -> bool:
    if not isinstance(cls, type):
        return True
    if is_typeddict(cls):
        return isinstance(value, dict)
    if isinstance(value, bool) and cls in (int, float, complex):
        return False
    try:
        if isinstance(value, cls):
            return True
    except TypeError:
        # non-runtime protocols and other classes that refuse instance checks
        return True
    return isinstance(value, _NUMERIC_PROMOTIONS.get(cls, ()))
