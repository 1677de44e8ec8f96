"""Value selection across path alternatives.

Alternatives are evaluated in tag order and the *last* adopted one wins. With
``skipzero`` a resolution equal to the zero value of its own type is ignored
without stopping the iteration.
"""

from __future__ import annotations

import dataclasses
from decimal import Decimal
from typing import Any, Final, Iterable

from ..domain.resolution import NOT_APPLICABLE, Outcome, Resolved

_NUMERIC_TYPES: Final[tuple[type, ...]] = (int, float, complex, Decimal)
_SIZED_TYPES: Final[tuple[type, ...]] = (str, bytes, bytearray, list, tuple, dict, set, frozenset)


def select_value(outcomes: Iterable[Outcome], *, skip_zero: bool = False) -> Outcome:
    """Return the last adoptable outcome or :data:`NOT_APPLICABLE`.

    Examples
    --------
    >>> select_value([Resolved("x"), Resolved("y")])
    Resolved(value='y')
    >>> select_value([Resolved(7), Resolved(0)], skip_zero=True)
    Resolved(value=7)
    >>> select_value([NOT_APPLICABLE, Resolved(0)], skip_zero=True)
    NOT_APPLICABLE
    """

    selected: Outcome = NOT_APPLICABLE
    for outcome in outcomes:
        if not isinstance(outcome, Resolved):
            continue
        if skip_zero and is_zero(outcome.value):
            continue
        selected = outcome
    return selected


def is_zero(value: Any) -> bool:
    """Return ``True`` when *value* equals the zero value of its own type.

    Numbers are zero when they equal ``0``; text and the builtin containers when
    they are empty. Dataclass instances are compared against ``type(value)()``
    when every field has a default. Other objects are never constructed and
    never count as zero.

    Examples
    --------
    >>> is_zero(0), is_zero(""), is_zero([]), is_zero(False), is_zero(3)
    (True, True, True, True, False)
    >>> is_zero(None)
    True
    """

    if value is None:
        return True
    if isinstance(value, _NUMERIC_TYPES):
        return bool(value == 0)
    if isinstance(value, _SIZED_TYPES):
        return len(value) == 0
    if not dataclasses.is_dataclass(value) or isinstance(value, type):
        return False
    try:
        zero = type(value)()
    except TypeError:
        return False
    try:
        return bool(value == zero)
    except Exception:  # noqa: BLE001 - incomparable values are never zero
        return False
