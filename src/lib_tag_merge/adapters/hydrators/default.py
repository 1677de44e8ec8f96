"""Default text hydrator.

Purpose
-------
Provide a ready-made :class:`~lib_tag_merge.application.ports.Hydrator` so tags
carrying the ``hydrate`` option work without extra wiring. Environment-derived
sources are mostly text; this adapter turns that text into the destination
field type.

Key behaviours
--------------
* Scalars: ``str``, ``bool`` (``true/false/yes/no/on/off/1/0``), ``int``,
  ``float``, ``complex``, ``Decimal``, ``Path``.
* ``Enum`` subclasses match member names first, then member values.
* ``Optional[T]`` maps ``null``/``none``/empty text to ``None``.
* Containers (``list``, ``tuple``, ``set``, ``dict`` and their generics) are
  parsed with :func:`yaml.safe_load`, so both JSON and YAML flow syntax work.
* Classes exposing a ``from_text`` classmethod delegate to it.
* Anything else raises :class:`ValueError`; the reconciler reports it as a
  :class:`~lib_tag_merge.domain.errors.HydrationFailure`.
"""

from __future__ import annotations

import enum
import types
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable, Final, Union, get_args, get_origin

import yaml

from ...observability import log_debug

_TRUE_WORDS: Final[frozenset[str]] = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS: Final[frozenset[str]] = frozenset({"false", "no", "off", "0"})
_NULL_WORDS: Final[frozenset[str]] = frozenset({"", "null", "none", "~"})
_CONTAINER_TYPES: Final[tuple[type, ...]] = (list, tuple, set, frozenset, dict)


def hydrate_text(target_type: Any, text: str) -> Any:
    """Convert *text* into an instance of *target_type*.

    Why
    ----
    Sources such as environment variables carry everything as strings while
    destination records declare precise types.

    Parameters
    ----------
    target_type:
        Destination field annotation (class or typing construct).
    text:
        Textual value selected by the merge.

    Returns
    -------
    Any
        Converted value. Assignability is checked afterwards by the reconciler.

    Raises
    ------
    ValueError
        When the text does not represent a value of *target_type*.

    Examples
    --------
    >>> hydrate_text(int, "42"), hydrate_text(bool, "Yes"), hydrate_text(float, "2.5")
    (42, True, 2.5)
    >>> hydrate_text(list[int], "[1, 2]")
    [1, 2]
    >>> hydrate_text(int | None, "none") is None
    True
    >>> hydrate_text(int, "forty-two")
    Traceback (most recent call last):
    ...
    ValueError: invalid literal for int() with base 10: 'forty-two'
    """

    log_debug("hydrate_text", target=_describe(target_type), size=len(text))
    return _hydrate(target_type, text)


def _hydrate(target_type: Any, text: str) -> Any:
    if target_type is Any or target_type is object:
        return text
    origin = get_origin(target_type)
    if origin is Union or origin is types.UnionType:
        return _hydrate_union(get_args(target_type), text)
    if origin in _CONTAINER_TYPES:
        return _hydrate_container(origin, text)
    if not isinstance(target_type, type):
        raise ValueError(f"cannot hydrate text into {_describe(target_type)}")
    converter = _converter_for(target_type)
    if converter is None:
        raise ValueError(f"no text conversion known for {_describe(target_type)}")
    return converter(text)


def _hydrate_union(members: tuple[Any, ...], text: str) -> Any:
    """Try each union member in declaration order; ``None`` wins for null words."""

    if type(None) in members and text.strip().lower() in _NULL_WORDS:
        return None
    errors: list[str] = []
    for member in members:
        if member is type(None):
            continue
        try:
            return _hydrate(member, text)
        except ValueError as exc:
            errors.append(str(exc))
    raise ValueError("; ".join(errors) or f"cannot hydrate {text!r}")


def _hydrate_container(container: type, text: str) -> Any:
    """Parse *text* as a YAML flow document and check the container kind."""

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid {container.__name__} literal: {exc}") from exc
    if container is dict:
        if not isinstance(loaded, dict):
            raise ValueError(f"expected a mapping literal, got {type(loaded).__name__}")
        return loaded
    if not isinstance(loaded, list):
        raise ValueError(f"expected a sequence literal, got {type(loaded).__name__}")
    return loaded if container is list else container(loaded)


def _converter_for(target: type) -> Callable[[str], Any] | None:
    """Return the text converter for concrete class *target*."""

    from_text = getattr(target, "from_text", None)
    if callable(from_text):
        return from_text
    if issubclass(target, enum.Enum):
        return lambda text: _hydrate_enum(target, text)
    if issubclass(target, bool):
        return _hydrate_bool
    if target in _CONTAINER_TYPES:
        return lambda text: _hydrate_container(target, text)
    if issubclass(target, Decimal):
        return _hydrate_decimal
    if issubclass(target, (str, int, float, complex, Path)):
        return lambda text: target(text.strip()) if target is not str else text
    return None


def _hydrate_bool(text: str) -> bool:
    """Parse human friendly booleans.

    Examples
    --------
    >>> _hydrate_bool("on"), _hydrate_bool("0")
    (True, False)
    """

    lowered = text.strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    raise ValueError(f"not a boolean: {text!r}")


def _hydrate_decimal(text: str) -> Decimal:
    try:
        return Decimal(text.strip())
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal: {text!r}") from exc


def _hydrate_enum(target: type[enum.Enum], text: str) -> enum.Enum:
    """Match an enum member by name, then by (stringified) value."""

    stripped = text.strip()
    if stripped in target.__members__:
        return target.__members__[stripped]
    for member in target:
        if str(member.value) == stripped:
            return member
    raise ValueError(f"{stripped!r} is not a member of {target.__name__}")


def _describe(target_type: Any) -> str:
    return target_type.__name__ if isinstance(target_type, type) else repr(target_type)
