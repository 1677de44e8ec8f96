"""Tag expression value objects and the tag grammar parser.

Purpose
-------
Turn the raw annotation string attached to a destination field into a
structured :class:`TagExpression`. Parsing is pure and happens fresh on every
merge call.

Grammar
-------
``path ("|" path)* ("," option)*`` where ``path := segment ("." segment)*`` and
a segment is any non-empty token excluding ``.``, ``|`` and ``,``.

Contents
--------
* :data:`TAG_KEY` – dataclass metadata key holding the tag string.
* :data:`OPTION_HYDRATE` / :data:`OPTION_SKIPZERO` / :data:`KNOWN_OPTIONS`.
* :class:`PathAlternative` – one dotted path.
* :class:`TagExpression` – ordered alternatives plus options.
* :func:`parse_tag` – the parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterator

from .errors import EmptyTag, MalformedTag

TAG_KEY: Final[str] = "smap"

OPTION_HYDRATE: Final[str] = "hydrate"
OPTION_SKIPZERO: Final[str] = "skipzero"
KNOWN_OPTIONS: Final[frozenset[str]] = frozenset({OPTION_HYDRATE, OPTION_SKIPZERO})

_ALTERNATIVE_SEPARATOR: Final[str] = "|"
_SEGMENT_SEPARATOR: Final[str] = "."
_OPTION_SEPARATOR: Final[str] = ","


@dataclass(frozen=True, slots=True)
class PathAlternative:
    """Ordered segments naming a member, key, index or accessor at each depth.

    The tag grammar never produces an empty alternative; one built by hand
    resolves to the whole source (identity).

    Examples
    --------
    >>> str(PathAlternative(("FV", "Service", "URL")))
    'FV.Service.URL'
    """

    segments: tuple[str, ...]

    def __str__(self) -> str:
        return _SEGMENT_SEPARATOR.join(self.segments)

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)


@dataclass(frozen=True, slots=True)
class TagExpression:
    """Parsed tag: alternatives in precedence order (last wins) plus options.

    ``options`` keeps first-seen order so :meth:`render` is stable; unknown
    names are preserved but ignored by the engine.

    Examples
    --------
    >>> expr = parse_tag("EV.URL | FV.Service.URL, hydrate")
    >>> expr.render()
    'EV.URL|FV.Service.URL,hydrate'
    >>> expr.hydrate, expr.skip_zero
    (True, False)
    """

    alternatives: tuple[PathAlternative, ...]
    options: tuple[str, ...] = ()

    @property
    def hydrate(self) -> bool:
        return OPTION_HYDRATE in self.options

    @property
    def skip_zero(self) -> bool:
        return OPTION_SKIPZERO in self.options

    @property
    def unknown_options(self) -> tuple[str, ...]:
        return tuple(option for option in self.options if option not in KNOWN_OPTIONS)

    def paths(self) -> str:
        """Return the alternatives joined with ``|`` (used in diagnostics)."""

        return _ALTERNATIVE_SEPARATOR.join(str(alternative) for alternative in self.alternatives)

    def render(self) -> str:
        """Serialise back to canonical tag text."""

        return _OPTION_SEPARATOR.join([self.paths(), *self.options])

    def __str__(self) -> str:
        return self.render()


def parse_tag(raw: str, *, strict: bool = False) -> TagExpression:
    """Parse *raw* tag text into a :class:`TagExpression`.

    Why
    ----
    Grammar violations must surface before any source data is touched, so a
    broken annotation fails the merge even when the source is empty.

    What
    ----
    Splits at the first comma into paths and options, drops empty alternatives
    (``"A||B"`` is tolerated), rejects empty segments and empty options.

    Parameters
    ----------
    raw:
        Tag text as written on the field.
    strict:
        Reject option names other than ``hydrate`` and ``skipzero``.

    Raises
    ------
    EmptyTag
        No alternative survived (``""``, ``"|"``, ``"||"``).
    MalformedTag
        Empty path segment, empty option, or unknown option under *strict*.

    Examples
    --------
    >>> [str(alt) for alt in parse_tag("EV.AISvcURL||FV.Service.URL").alternatives]
    ['EV.AISvcURL', 'FV.Service.URL']
    >>> parse_tag("Foo..Bar")
    Traceback (most recent call last):
    ...
    lib_tag_merge.domain.errors.MalformedTag: merge field (field: ?, tag: 'Foo..Bar', dst type: ?, src type: ?): empty path segment in 'Foo..Bar'
    """

    paths_text, _, options_text = raw.partition(_OPTION_SEPARATOR)
    alternatives = tuple(_parse_alternatives(paths_text, raw))
    if not alternatives:
        raise EmptyTag("tag has no path alternatives", tag=raw)
    options = _parse_options(options_text, raw, strict=strict) if _OPTION_SEPARATOR in raw else ()
    return TagExpression(alternatives=alternatives, options=options)


def _parse_alternatives(paths_text: str, raw: str) -> Iterator[PathAlternative]:
    """Yield one :class:`PathAlternative` per non-empty ``|`` candidate."""

    for candidate in paths_text.split(_ALTERNATIVE_SEPARATOR):
        candidate = candidate.strip()
        if not candidate:
            continue
        segments = tuple(candidate.split(_SEGMENT_SEPARATOR))
        if any(not segment.strip() for segment in segments):
            raise MalformedTag(f"empty path segment in {candidate!r}", tag=raw)
        yield PathAlternative(tuple(segment.strip() for segment in segments))


def _parse_options(options_text: str, raw: str, *, strict: bool) -> tuple[str, ...]:
    """Split and validate the option list, keeping first-seen order without duplicates."""

    seen: list[str] = []
    for token in options_text.split(_OPTION_SEPARATOR):
        option = token.strip()
        if not option:
            raise MalformedTag("empty option", tag=raw)
        if strict and option not in KNOWN_OPTIONS:
            raise MalformedTag(f"unknown option {option!r}", tag=raw)
        if option not in seen:
            seen.append(option)
    return tuple(seen)
