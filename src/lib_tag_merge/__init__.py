"""Public package surface for the tag-driven field merge engine.

Destination dataclasses declare where each field comes from with a tag such as
``"EV.URL|FV.Service.URL,hydrate"``; :func:`merge` resolves those tags against a
source record and assigns the results in place. See
:mod:`lib_tag_merge.core` for the composition root.
"""

from __future__ import annotations

from .adapters.hydrators.default import hydrate_text
from .application.ports import Hydrator
from .application.resolve import resolve_path
from .core import merge, merge_all, resolve
from .domain.errors import (
    AccessorFailure,
    DestinationInvalid,
    EmptyTag,
    FieldError,
    HydrationFailure,
    InvalidKeyType,
    MalformedTag,
    MergeError,
    PathNotFound,
    SourceInvalid,
    TypeIncompatible,
    ValidationError,
)
from .domain.resolution import NOT_APPLICABLE, Resolved
from .domain.tag import OPTION_HYDRATE, OPTION_SKIPZERO, TAG_KEY, PathAlternative, TagExpression, parse_tag
from .fields import tagged, tagged_fields
from .observability import bind_trace_id, get_logger

__all__ = [
    "AccessorFailure",
    "DestinationInvalid",
    "EmptyTag",
    "FieldError",
    "HydrationFailure",
    "Hydrator",
    "InvalidKeyType",
    "MalformedTag",
    "MergeError",
    "NOT_APPLICABLE",
    "OPTION_HYDRATE",
    "OPTION_SKIPZERO",
    "PathAlternative",
    "PathNotFound",
    "Resolved",
    "SourceInvalid",
    "TAG_KEY",
    "TagExpression",
    "TypeIncompatible",
    "ValidationError",
    "bind_trace_id",
    "get_logger",
    "hydrate_text",
    "merge",
    "merge_all",
    "parse_tag",
    "resolve",
    "resolve_path",
    "tagged",
    "tagged_fields",
]
