# src/skill_installer/domain/skill.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True, slots=True)
class SkillHeader:
    """Fields read from the header block of a manifest."""

    name: str
    description: str = ""
    model: str = ""
    tags: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Skill:
    name: str
    description: str
    model: str
    tags: tuple[str, ...]
    languages: tuple[str, ...]
    root_path: str  # slash path inside the content source, e.g. "skills/code-review"
    manifest_path: str
    content: bytes = field(default=b"", repr=False, compare=False)


class ProbeStatus(str, Enum):
    PARSED = "parsed"
    FALLBACK = "fallback"  # manifest present, header unusable
    ABSENT = "absent"  # no manifest, not a unit


@dataclass(frozen=True, slots=True)
class Probe:
    status: ProbeStatus
    path: str
    skill: Optional[Skill] = None

    @property
    def is_unit(self) -> bool:
        return self.skill is not None
