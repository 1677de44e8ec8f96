"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the parser, the resolver, the
reconciler, and the merge orchestrator. The hierarchy lives in the domain layer
so the application layer and adapters can raise it without depending on each
other.

Contents
--------
* :class:`MergeError` – umbrella base class for every failure of a merge.
* :class:`ValidationError` – bad destination or source handle
  (:class:`DestinationInvalid`, :class:`SourceInvalid`).
* :class:`FieldError` – base for failures tied to one destination field; it
  carries the diagnostic context (tag, destination type, source type, field).
* :class:`MalformedTag` / :class:`EmptyTag` – parse-time grammar violations.
* :class:`PathNotFound` – an explicitly requested member does not exist.
* :class:`InvalidKeyType` – a path segment cannot become a mapping key.
* :class:`AccessorFailure` – a zero-argument accessor raised.
* :class:`TypeIncompatible` – resolved value not assignable to the field.
* :class:`HydrationFailure` – the hydration collaborator raised.

System Role
-----------
Every failure aborts the whole merge. "Try the next alternative" is internal
control flow of the resolver and is deliberately absent from this module.
"""

from __future__ import annotations


class MergeError(Exception):
    """Base type for all exceptions emitted by ``lib_tag_merge``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class ValidationError(MergeError):
    """Raised when the destination or source handle is unusable.

    Raised before any field is processed, so the destination is untouched.
    """


class DestinationInvalid(ValidationError):
    """Destination is not a mutable dataclass instance."""


class SourceInvalid(ValidationError):
    """Source is ``None`` or not a record-like object."""


class FieldError(MergeError):
    """Failure while merging a single destination field.

    Why
    ----
    Errors must be diagnosable without re-running the merge, so each one carries
    the tag text and the destination/source type names.

    What
    ----
    Stores the human readable *reason* plus optional context attributes. Inner
    components know only part of the context; :meth:`with_context` lets the
    orchestrator fill in the rest before re-raising the same instance.

    Examples
    --------
    >>> err = PathNotFound("no member 'URL'", tag="EV.URL")
    >>> str(err.with_context(field="url", destination_type="str"))
    "merge field (field: url, tag: 'EV.URL', dst type: str, src type: ?): no member 'URL'"
    """

    def __init__(
        self,
        reason: str,
        *,
        tag: str | None = None,
        destination_type: str | None = None,
        source_type: str | None = None,
        field: str | None = None,
    ) -> None:
        super().__init__(reason)
        self.reason = reason
        self.tag = tag
        self.destination_type = destination_type
        self.source_type = source_type
        self.field = field

    def with_context(
        self,
        *,
        tag: str | None = None,
        destination_type: str | None = None,
        source_type: str | None = None,
        field: str | None = None,
    ) -> FieldError:
        """Fill context attributes that are still unset and return ``self``."""

        if self.tag is None:
            self.tag = tag
        if self.destination_type is None:
            self.destination_type = destination_type
        if self.source_type is None:
            self.source_type = source_type
        if self.field is None:
            self.field = field
        return self

    def __str__(self) -> str:
        return (
            f"merge field (field: {self.field or '?'}, tag: {'?' if self.tag is None else repr(self.tag)}, "
            f"dst type: {self.destination_type or '?'}, src type: {self.source_type or '?'}): {self.reason}"
        )


class MalformedTag(FieldError):
    """Raised when a tag violates the grammar (empty segment, empty option, unknown strict option)."""


class EmptyTag(MalformedTag):
    """Raised when a tag contains no path alternative at all (``""``, ``"|"``)."""


class PathNotFound(FieldError):
    """A final path segment names a member or accessor that does not exist."""


class InvalidKeyType(FieldError):
    """A mapping uses a key kind the segment cannot be converted to."""


class AccessorFailure(FieldError):
    """A zero-argument accessor raised; the original exception is chained."""


class TypeIncompatible(FieldError):
    """The selected value is not assignable to the destination field type."""


class HydrationFailure(FieldError):
    """The hydration collaborator could not convert the text; the cause is chained."""
