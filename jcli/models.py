"""Read-only views of Jenkins entities and per-item report results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Job:
    name: str
    url: str


@dataclass(frozen=True)
class Build:
    number: int
    result: str  # "SUCCESS", "FAILURE", ..., or "IN_PROGRESS" while running
    url: str


@dataclass(frozen=True)
class Node:
    """A build agent.  ``online`` stays None until the node has been polled."""

    name: str
    online: bool | None = None


class StatusMarker(Enum):
    OK = ("✓", "green")
    FAILED = ("✗", "red")
    UNKNOWN = ("?", "yellow")

    def __init__(self, glyph: str, color: str):
        self.glyph = glyph
        self.color = color


@dataclass
class Outcome:
    """Result of reporting on one job or node.

    Produced for every item, including failed ones, so a fan-out always has
    one printable line per item.
    """

    name: str
    line: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
