# src/skill_installer/domain/types.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class WriteStatus(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    WOULD_CREATE = "would_create"
    WOULD_UPDATE = "would_update"


_LABELS = {
    WriteStatus.CREATED: "CREATED: {path}",
    WriteStatus.UPDATED: "UPDATED: {path}",
    WriteStatus.SKIPPED: "SKIP: {path} (already exists, use --force to overwrite)",
    WriteStatus.WOULD_CREATE: "WOULD CREATE: {path}",
    WriteStatus.WOULD_UPDATE: "WOULD OVERWRITE: {path}",
}


@dataclass(frozen=True, slots=True)
class WriteResult:
    status: WriteStatus
    path: Path

    @property
    def changed(self) -> bool:
        return self.status in (WriteStatus.CREATED, WriteStatus.UPDATED)

    def __str__(self) -> str:
        return _LABELS[self.status].format(path=self.path)


@dataclass(frozen=True, slots=True)
class WritePolicy:
    force: bool = False
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class InstallRequest:
    skills_dest: Path
    agents_dest: Optional[Path] = None
    commands_dest: Optional[Path] = None
    tags: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()
    source: Optional[str] = None
    force: bool = False
    dry_run: bool = False
    skip_agents: bool = False
    skip_commands: bool = False

    @property
    def policy(self) -> WritePolicy:
        return WritePolicy(force=self.force, dry_run=self.dry_run)


@dataclass(slots=True)
class InstallReport:
    skills: list[WriteResult] = field(default_factory=list)
    agents: list[WriteResult] = field(default_factory=list)
    commands: list[WriteResult] = field(default_factory=list)

    def all(self) -> list[WriteResult]:
        return [*self.skills, *self.agents, *self.commands]

    def count(self, status: WriteStatus) -> int:
        return sum(1 for r in self.all() if r.status is status)
