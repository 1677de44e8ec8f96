"""Default text hydrator tests."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_tag_merge.adapters.hydrators.default import hydrate_text


class Level(Enum):
    LOW = 1
    HIGH = 2


class Version:
    def __init__(self, major: int, minor: int) -> None:
        self.major, self.minor = major, minor

    @classmethod
    def from_text(cls, text: str) -> "Version":
        major, minor = text.split(".")
        return cls(int(major), int(minor))


@pytest.mark.parametrize(
    ("target", "text", "expected"),
    [
        (str, " keep spaces ", " keep spaces "),
        (int, " 42 ", 42),
        (float, "3.5", 3.5),
        (complex, "1+2j", 1 + 2j),
        (Decimal, "1.10", Decimal("1.10")),
        (Path, "/etc/app", Path("/etc/app")),
        (bool, "TRUE", True),
        (bool, "off", False),
        (Level, "HIGH", Level.HIGH),
        (Level, "1", Level.LOW),
        (Optional[int], "7", 7),
        (Optional[int], "null", None),
        (int | None, "", None),
        (list, "[a, b]", ["a", "b"]),
        (list[int], "[1, 2, 3]", [1, 2, 3]),
        (tuple[int, ...], "[1, 2]", (1, 2)),
        (set[str], '["x", "x"]', {"x"}),
        (dict[str, int], '{"a": 1}', {"a": 1}),
        (dict, "a: 1", {"a": 1}),
        (Any, "raw", "raw"),
    ],
)
def test_hydrate_text(target: Any, text: str, expected: Any) -> None:
    assert hydrate_text(target, text) == expected


def test_from_text_classmethod() -> None:
    version = hydrate_text(Version, "1.2")
    assert (version.major, version.minor) == (1, 2)


@pytest.mark.parametrize(
    ("target", "text"),
    [
        (int, "forty-two"),
        (bool, "maybe"),
        (Decimal, "n/a"),
        (Level, "MEDIUM"),
        (list[int], "{a: 1}"),
        (dict, "[1]"),
        (list, "[unclosed"),
        (bytes, "x"),
    ],
)
def test_hydrate_text_rejects(target: Any, text: str) -> None:
    with pytest.raises(ValueError):
        hydrate_text(target, text)


def test_union_reports_every_member_failure() -> None:
    with pytest.raises(ValueError, match="not a boolean"):
        hydrate_text(int | bool, "maybe")


@given(st.integers())
def test_integers_round_trip_through_text(number: int) -> None:
    assert hydrate_text(int, str(number)) == number
