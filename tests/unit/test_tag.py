"""Tag grammar tests: alternatives, options, malformed inputs and rendering."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_tag_merge.domain.errors import EmptyTag, MalformedTag
from lib_tag_merge.domain.tag import PathAlternative, TagExpression, parse_tag


def _paths(expression: TagExpression) -> list[tuple[str, ...]]:
    return [alternative.segments for alternative in expression.alternatives]


def test_single_path() -> None:
    assert _paths(parse_tag("EV.AISvcURL")) == [("EV", "AISvcURL")]


def test_multiple_paths_keep_tag_order() -> None:
    expression = parse_tag("EV.AISvcURL|FV.Service.URL")
    assert _paths(expression) == [("EV", "AISvcURL"), ("FV", "Service", "URL")]


def test_doubled_alternative_separator_is_tolerated() -> None:
    assert _paths(parse_tag("EV.AISvcURL||FV.Service.URL")) == [("EV", "AISvcURL"), ("FV", "Service", "URL")]


@pytest.mark.parametrize("raw", ["", "|", "||", " | ", ",hydrate"])
def test_empty_tags(raw: str) -> None:
    with pytest.raises(EmptyTag):
        parse_tag(raw)


@pytest.mark.parametrize("raw", ["Foo..Bar", "Foo.", ".Foo", "Foo.Bar.", ".Foo.Bar", "EV.AISvcURL|Foo..Bar"])
def test_malformed_paths(raw: str) -> None:
    with pytest.raises(MalformedTag) as info:
        parse_tag(raw)
    assert not isinstance(info.value, EmptyTag)
    assert info.value.tag == raw


def test_empty_tag_is_a_malformed_tag() -> None:
    assert issubclass(EmptyTag, MalformedTag)


def test_options_are_parsed_and_trimmed() -> None:
    expression = parse_tag("EV.Count|FV.Count, skipzero ,hydrate")
    assert expression.options == ("skipzero", "hydrate")
    assert expression.skip_zero and expression.hydrate


def test_empty_option_is_malformed() -> None:
    with pytest.raises(MalformedTag):
        parse_tag("EV.Count,")
    with pytest.raises(MalformedTag):
        parse_tag("EV.Count,hydrate,,skipzero")


def test_unknown_option_is_preserved_but_inert() -> None:
    expression = parse_tag("EV.Count,future")
    assert expression.options == ("future",)
    assert expression.unknown_options == ("future",)
    assert not expression.hydrate and not expression.skip_zero


def test_unknown_option_rejected_when_strict() -> None:
    with pytest.raises(MalformedTag, match="unknown option 'future'"):
        parse_tag("EV.Count,future", strict=True)


def test_duplicate_options_collapse() -> None:
    assert parse_tag("A,hydrate,hydrate").options == ("hydrate",)


def test_render_is_canonical() -> None:
    expression = parse_tag(" EV.URL | FV.Service.URL ,hydrate")
    assert expression.render() == "EV.URL|FV.Service.URL,hydrate"
    assert str(expression) == expression.render()
    assert expression.paths() == "EV.URL|FV.Service.URL"


def test_round_trip_example() -> None:
    expression = parse_tag("EV.URL|FV.Service.URL,hydrate")
    assert parse_tag(expression.render()) == expression


def test_hand_built_empty_alternative_renders_empty() -> None:
    assert str(PathAlternative(())) == ""


SEGMENT = st.text(alphabet="abcXYZ019_-", min_size=1, max_size=6)
ALTERNATIVE = st.lists(SEGMENT, min_size=1, max_size=4).map(tuple)
OPTIONS = st.lists(st.sampled_from(["hydrate", "skipzero", "custom"]), max_size=3, unique=True)


@given(st.lists(ALTERNATIVE, min_size=1, max_size=4), OPTIONS, st.sampled_from(["", " ", "  "]))
def test_parse_render_round_trip(alternatives, options, pad) -> None:
    raw = "|".join(pad + ".".join(segments) + pad for segments in alternatives)
    if options:
        raw += "," + ",".join(pad + option + pad for option in options)
    expression = parse_tag(raw)
    assert _paths(expression) == list(alternatives)
    assert expression.options == tuple(options)
    assert parse_tag(expression.render()) == expression
