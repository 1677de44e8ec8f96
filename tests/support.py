"""Shared source and destination records for the merge test suites.

The shapes mirror a typical settings assembly: ``EV`` holds environment-derived
values, ``FV`` holds file-derived values, and destination dataclasses declare
which of them win.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from lib_tag_merge import tagged


@dataclass
class FileValsService:
    URL: Optional[str] = None


@dataclass
class FileVals:
    Service: FileValsService = field(default_factory=FileValsService)
    Count: int = 0


@dataclass
class Nested:
    URL: str = ""


@dataclass
class EnvVars:
    AISvcURL: str = ""
    AISvcKey: str = ""
    Nil: Optional[Nested] = None
    Count: int = 0
    URL: Optional[str] = None
    Data: dict[str, str] = field(default_factory=dict)
    Value: str = ""
    IntMap: dict[int, str] = field(default_factory=dict)
    FloatMap: dict[float, int] = field(default_factory=dict)
    Users: list[str] = field(default_factory=list)
    Text: str = ""

    def GetValue(self) -> str:
        return "method value"

    def Broken(self) -> str:
        raise RuntimeError("accessor exploded")

    def NeedsArgument(self, name: str) -> str:
        return name


@dataclass
class Sources:
    EV: Optional[EnvVars] = None
    FV: Optional[FileVals] = None


@dataclass
class Config:
    AISvcURL: str = tagged("EV.AISvcURL|FV.Service.URL", default="")
    AISvcKey: str = tagged("EV.AISvcKey", default="")
    Extra: str = ""
    NoTag: str = ""


@dataclass
class ConfigSkipZero:
    Count: int = tagged("EV.Count|FV.Count,skipzero", default=0)


@dataclass
class ConfigMap:
    Value: str = tagged("EV.Data.key", default="")


def sources(**env: object) -> Sources:
    """Build a :class:`Sources` with ``EV`` populated from keyword arguments."""

    return Sources(EV=EnvVars(**env), FV=FileVals())  # type: ignore[arg-type]
