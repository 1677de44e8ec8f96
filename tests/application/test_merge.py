"""Orchestration tests for ``merge_fields``: ordering, precedence and failure context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import pytest

from lib_tag_merge.adapters.hydrators.default import hydrate_text
from lib_tag_merge.adapters.shapes.default import classify
from lib_tag_merge.application.merge import merge_fields
from lib_tag_merge.domain.errors import EmptyTag, PathNotFound, TypeIncompatible
from lib_tag_merge.fields import tagged
from tests.support import EnvVars, FileVals, FileValsService, Sources


def _merge(destination: Any, source: Any, **options: Any) -> list[str]:
    return merge_fields(destination, source, classify=classify, hydrator=hydrate_text, **options)


@dataclass
class Ordered:
    first: str = tagged("EV.AISvcKey", default="")
    second: int = tagged("EV.AISvcURL", default=0)
    third: str = tagged("EV.Value", default="")


def test_assigned_fields_are_reported_in_order() -> None:
    @dataclass
    class Pair:
        a: str = tagged("EV.AISvcKey", default="")
        b: str = tagged("EV.Value", default="preset")

    pair = Pair()
    assert _merge(pair, Sources(EV=EnvVars(AISvcKey="key"))) == ["a", "b"]
    assert (pair.a, pair.b) == ("key", "")


def test_first_terminal_error_stops_without_rollback() -> None:
    destination = Ordered(third="untouched")
    source = Sources(EV=EnvVars(AISvcKey="key", AISvcURL="not-a-number", Value="later"))
    with pytest.raises(TypeIncompatible) as info:
        _merge(destination, source)
    assert destination.first == "key"
    assert destination.third == "untouched"
    error = info.value
    assert error.field == "second"
    assert error.tag == "EV.AISvcURL"
    assert error.destination_type == "int"
    assert error.source_type == "str"


def test_resolution_errors_gain_field_context() -> None:
    @dataclass
    class Broken:
        value: str = tagged("EV.DoesNotExist", default="")

    with pytest.raises(PathNotFound) as info:
        _merge(Broken(), Sources(EV=EnvVars()))
    assert info.value.field == "value"
    assert info.value.destination_type == "str"
    assert info.value.source_type == "EnvVars"
    assert "EV.DoesNotExist" in str(info.value)


def test_parse_errors_surface_even_without_source_data() -> None:
    @dataclass
    class Empty:
        value: str = tagged("", default="")

    with pytest.raises(EmptyTag) as info:
        _merge(Empty(), Sources())
    assert info.value.field == "value"


def test_total_miss_leaves_existing_values() -> None:
    @dataclass
    class Optionals:
        url: Optional[str] = tagged("EV.URL|FV.Service.URL", default=None)
        name: str = tagged("EV.Nil.URL", default="preset")

    destination = Optionals()
    source = Sources(EV=EnvVars(URL=None), FV=FileVals(Service=FileValsService(URL=None)))
    assert _merge(destination, source) == []
    assert destination.url is None
    assert destination.name == "preset"


def test_strict_options_reject_unknown_names() -> None:
    from lib_tag_merge.domain.errors import MalformedTag

    @dataclass
    class Strict:
        value: str = tagged("EV.Value,someday", default="")

    assert _merge(Strict(), Sources(EV=EnvVars(Value="v"))) == ["value"]
    with pytest.raises(MalformedTag):
        _merge(Strict(), Sources(EV=EnvVars(Value="v")), strict_options=True)
