"""Source shape adapters.

Purpose
-------
Implement the :class:`~lib_tag_merge.application.ports.SourceShape` port for the
value kinds a source tree is built from, and pick the right one per value.

Key behaviours
--------------
* **Records** (dataclasses, plain objects, slotted classes, named tuples):
  exported members first, then zero-argument accessors. Accessor results end
  the path. A missing name is terminal on the final segment only.
* **Mappings**: the segment is converted to the key type found in the mapping
  (``str`` passthrough, ``int``/``float``/``bool``/``Decimal`` parsed). Missing
  keys are "not applicable".
* **Sequences** (lists, tuples, other non-text sequences): non-negative
  in-range indices only; everything else is "not applicable".
* **Leaves** (scalars, callables, classes, sets, text): never traversable.
"""

from __future__ import annotations

import enum
import inspect
import types
from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Final

from ...domain.errors import AccessorFailure, InvalidKeyType, PathNotFound
from ...domain.resolution import NOT_APPLICABLE, Descend, Step, Terminal, type_name

_MISSING: Final = object()
_TEXT_TYPES: Final[tuple[type, ...]] = (str, bytes, bytearray)
_SCALAR_TYPES: Final[tuple[type, ...]] = (int, float, complex, Decimal, enum.Enum)
_METHOD_DESCRIPTOR_TYPES: Final[tuple[type, ...]] = (
    types.MethodDescriptorType,
    types.WrapperDescriptorType,
    types.ClassMethodDescriptorType,
)


class RecordShape:
    """Traverse struct-like objects by member name or zero-argument accessor."""

    kind = "record"

    def step(self, value: Any, segment: str, *, final: bool) -> Step:
        """Descend into member *segment* or call the accessor of that name.

        Examples
        --------
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Service:
        ...     url: str
        ...     def upper(self) -> str:
        ...         return self.url.upper()
        >>> RecordShape().step(Service("a"), "url", final=True)
        Descend(value='a')
        >>> RecordShape().step(Service("a"), "upper", final=False)
        Terminal(value='A')
        >>> RecordShape().step(Service("a"), "port", final=False)
        NOT_APPLICABLE
        """

        if not segment.startswith("_"):
            member = _lookup_member(value, segment)
            if member is not _MISSING:
                return Descend(member)
            accessor = _lookup_accessor(value, segment)
            if accessor is not None:
                return Terminal(_call_accessor(accessor, value, segment))
        if final:
            raise PathNotFound(
                f"{type_name(type(value))} has no exported member or accessor {segment!r}",
                source_type=type_name(type(value)),
            )
        return NOT_APPLICABLE


class MappingShape:
    """Traverse keyed collections, converting the segment to the key type."""

    kind = "mapping"

    def step(self, value: Any, segment: str, *, final: bool) -> Step:
        """Descend into the entry keyed by *segment*.

        Examples
        --------
        >>> MappingShape().step({"key": "value"}, "key", final=True)
        Descend(value='value')
        >>> MappingShape().step({1: "one"}, "1", final=True)
        Descend(value='one')
        >>> MappingShape().step({"other": 1}, "key", final=True)
        NOT_APPLICABLE
        """

        for key in _candidate_keys(value, segment):
            if key in value:
                return Descend(value[key])
        return NOT_APPLICABLE


class SequenceShape:
    """Traverse indexed collections by non-negative position."""

    kind = "sequence"

    def step(self, value: Any, segment: str, *, final: bool) -> Step:
        """Descend into the element at index *segment* when it exists.

        Examples
        --------
        >>> SequenceShape().step(["a", "b"], "1", final=True)
        Descend(value='b')
        >>> SequenceShape().step(["a", "b"], "2", final=True)
        NOT_APPLICABLE
        >>> SequenceShape().step(["a", "b"], "-1", final=True)
        NOT_APPLICABLE
        """

        if not (segment.isascii() and segment.isdigit()):
            return NOT_APPLICABLE
        index = int(segment)
        if index >= len(value):
            return NOT_APPLICABLE
        return Descend(value[index])


class LeafShape:
    """Values that cannot be traversed any further."""

    kind = "leaf"

    def step(self, value: Any, segment: str, *, final: bool) -> Step:
        return NOT_APPLICABLE


RECORD: Final = RecordShape()
MAPPING: Final = MappingShape()
SEQUENCE: Final = SequenceShape()
LEAF: Final = LeafShape()


def classify(value: Any) -> RecordShape | MappingShape | SequenceShape | LeafShape:
    """Return the shape adapter able to traverse *value*.

    Examples
    --------
    >>> [classify(v).kind for v in ({}, [], "text", 3, object())]
    ['mapping', 'sequence', 'leaf', 'leaf', 'leaf']
    >>> from collections import namedtuple
    >>> classify(namedtuple("Point", "x y")(1, 2)).kind
    'record'
    """

    if isinstance(value, Mapping):
        return MAPPING
    if is_record(value):
        return RECORD
    if isinstance(value, _TEXT_TYPES):
        return LEAF
    if isinstance(value, Sequence):
        return SEQUENCE
    return LEAF


def is_record(value: Any) -> bool:
    """Return ``True`` for struct-like objects that expose named members.

    Named tuples count as records; classes, modules, functions, scalars and
    collections do not.
    """

    if isinstance(value, tuple):
        return hasattr(type(value), "_fields")
    if value is None or isinstance(value, type) or inspect.ismodule(value) or callable(value):
        return False
    if isinstance(value, (*_TEXT_TYPES, *_SCALAR_TYPES, bool, Mapping, Sequence, set, frozenset)):
        return False
    return hasattr(value, "__dict__") or bool(_slot_names(type(value)))


def _lookup_member(value: Any, name: str) -> Any:
    """Return the data member *name* of *value* or :data:`_MISSING`.

    Instance attributes always count as members, even when they hold callables.
    Class-level attributes count when they are not routines: properties,
    cached properties, slots, named tuple fields and plain class attributes.
    Computed members run under :func:`_call_accessor`; only an unset slot
    reads as missing.
    """

    instance_dict = getattr(value, "__dict__", None)
    if isinstance(instance_dict, dict) and name in instance_dict:
        return instance_dict[name]
    static = inspect.getattr_static(value, name, _MISSING)
    if static is _MISSING or _is_routine(static):
        return _MISSING
    if isinstance(static, types.MemberDescriptorType):
        try:
            return getattr(value, name)
        except AttributeError:
            return _MISSING
    return _call_accessor(lambda: getattr(value, name), value, name)


def _lookup_accessor(value: Any, name: str) -> Callable[[], Any] | None:
    """Return a bound zero-argument method called *name*, if *value* has one."""

    static = inspect.getattr_static(value, name, _MISSING)
    if static is _MISSING or not _is_routine(static):
        return None
    bound = getattr(value, name)
    return bound if _takes_no_arguments(bound) else None


def _call_accessor(accessor: Callable[[], Any], value: Any, name: str) -> Any:
    """Invoke *accessor*, wrapping anything it raises in :class:`AccessorFailure`."""

    try:
        return accessor()
    except Exception as exc:
        raise AccessorFailure(
            f"accessor {name!r} raised {type(exc).__name__}: {exc}",
            source_type=type_name(type(value)),
        ) from exc


def _is_routine(attribute: Any) -> bool:
    """Return ``True`` for functions and method objects, not for other descriptors."""

    if isinstance(attribute, (staticmethod, classmethod, *_METHOD_DESCRIPTOR_TYPES)):
        return True
    return inspect.isfunction(attribute) or inspect.ismethod(attribute) or inspect.isbuiltin(attribute)


def _takes_no_arguments(function: Callable[..., Any]) -> bool:
    """Return ``True`` when *function* can be called without arguments."""

    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return False
    for parameter in signature.parameters.values():
        if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        if parameter.default is inspect.Parameter.empty:
            return False
    return True


def _slot_names(cls: type) -> tuple[str, ...]:
    names: list[str] = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        names.extend([slots] if isinstance(slots, str) else slots)
    return tuple(names)


def _candidate_keys(mapping: Mapping[Any, Any], segment: str) -> list[Any]:
    """Convert *segment* into the key(s) worth probing in *mapping*.

    A mapping whose keys share one kind gets exactly one conversion, and a
    segment that does not parse as that kind is an :class:`InvalidKeyType`.
    Mixed string/numeric mappings probe every kind the segment parses as.

    Examples
    --------
    >>> _candidate_keys({"a": 1}, "a"), _candidate_keys({2.5: 1}, "2.5")
    (['a'], [2.5])
    >>> _candidate_keys({}, "a")
    ['a']
    >>> _candidate_keys({(1, 2): 1}, "a")
    Traceback (most recent call last):
    ...
    lib_tag_merge.domain.errors.InvalidKeyType: merge field (field: ?, tag: ?, dst type: ?, src type: dict): unsupported mapping key type tuple
    """

    kinds = {type(key) for key in mapping.keys()}
    if not kinds:
        return [segment]
    for kind in kinds:
        if kind is not str and kind not in _KEY_PARSERS:
            raise InvalidKeyType(
                f"unsupported mapping key type {type_name(kind)}",
                source_type=type_name(type(mapping)),
            )
    if len(kinds) == 1:
        (kind,) = kinds
        if kind is str:
            return [segment]
        try:
            return [_KEY_PARSERS[kind](segment)]
        except (ValueError, InvalidOperation) as exc:
            raise InvalidKeyType(
                f"segment {segment!r} is not a valid {type_name(kind)} key",
                source_type=type_name(type(mapping)),
            ) from exc
    candidates: list[Any] = [segment] if str in kinds else []
    for kind in kinds - {str}:
        try:
            candidates.append(_KEY_PARSERS[kind](segment))
        except (ValueError, InvalidOperation):
            continue
    return candidates


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    raise ValueError(f"not a boolean: {text!r}")


_KEY_PARSERS: Final[dict[type, Callable[[str], Any]]] = {
    int: int,
    float: float,
    bool: _parse_bool,
    Decimal: Decimal,
}
