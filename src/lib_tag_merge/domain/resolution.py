"""Resolution outcome value objects.

A path alternative either resolves to a value (:class:`Resolved`, which may
hold a zero value or even ``None`` for identity resolution) or is
:data:`NOT_APPLICABLE`, meaning "try the next alternative". Terminal failures
are raised as :mod:`lib_tag_merge.domain.errors` exceptions instead.

Shape adapters report each traversal step as :class:`Descend` (keep walking),
:class:`Terminal` (accessor result that ends the path) or
:data:`NOT_APPLICABLE`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Final, Literal, Union


class _NotApplicable(enum.Enum):
    NOT_APPLICABLE = "not-applicable"

    def __repr__(self) -> str:
        return "NOT_APPLICABLE"

    def __bool__(self) -> bool:
        return False


NOT_APPLICABLE: Final = _NotApplicable.NOT_APPLICABLE


@dataclass(frozen=True, slots=True)
class Resolved:
    """A value found at the end of a path alternative."""

    value: Any

    @property
    def type_name(self) -> str:
        return type_name(type(self.value))


@dataclass(frozen=True, slots=True)
class Descend:
    """Continue traversal with ``value``."""

    value: Any


@dataclass(frozen=True, slots=True)
class Terminal:
    """Stop traversal; ``value`` is the leaf regardless of remaining segments."""

    value: Any


Outcome = Union[Resolved, Literal[_NotApplicable.NOT_APPLICABLE]]
Step = Union[Descend, Terminal, Literal[_NotApplicable.NOT_APPLICABLE]]


def type_name(tp: Any) -> str:
    """Return a readable name for a class or typing construct.

    Examples
    --------
    >>> type_name(int), type_name(list[str])
    ('int', 'list[str]')
    """

    if isinstance(tp, type) and not getattr(tp, "__args__", None):
        return tp.__qualname__
    return repr(tp).replace("typing.", "")
