from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from skill_installer.domain.errors import UnknownTarget
from skill_installer.services.installer import copilot_agent_name


@dataclass(frozen=True, slots=True)
class Target:
    key: str
    name: str
    skills_path: str
    agents_path: str = ""
    commands_path: str = ""
    global_skills_path: str = ""  # relative to the home directory
    global_agents_path: str = ""
    agent_rename: Optional[Callable[[str], str]] = None

    @property
    def supports_global(self) -> bool:
        return bool(self.global_skills_path)


@dataclass(frozen=True, slots=True)
class Destinations:
    skills: Path
    agents: Optional[Path]
    commands: Optional[Path]


TARGETS: dict[str, Target] = {
    t.key: t
    for t in (
        Target(
            key="claude",
            name="Claude Code",
            skills_path=".claude/skills",
            agents_path=".claude/agents",
            commands_path=".claude/commands",
            global_skills_path=".claude/skills",
            global_agents_path=".claude/agents",
        ),
        Target(
            key="copilot",
            name="GitHub Copilot",
            skills_path=".github/skills",
            agents_path=".github",
            global_skills_path=".copilot/skills",
            agent_rename=copilot_agent_name,
        ),
        Target(key="cursor", name="Cursor", skills_path=".cursor/skills", agents_path=".cursor/agents"),
        Target(key="opencode", name="OpenCode", skills_path=".opencode/skills", agents_path=".opencode/agents"),
        Target(key="vscode", name="VS Code (with Claude extension)", skills_path=".vscode/claude/skills", agents_path=".vscode/claude/agents"),
    )
}


def resolve_target(key: str) -> Target:
    try:
        return TARGETS[key.strip().lower()]
    except KeyError:
        raise UnknownTarget(key) from None


def destinations(target: Target, *, global_scope: bool = False, project_dir: Optional[Path] = None, home: Optional[Path] = None) -> Destinations:
    """Project scope roots everything at ``project_dir``; global scope uses the home-relative paths and never installs commands."""
    if global_scope:
        if not target.supports_global:
            raise ValueError(f"target '{target.key}' has no global install location")
        h = home or Path.home()
        return Destinations(
            skills=h / target.global_skills_path,
            agents=h / target.global_agents_path if target.global_agents_path else None,
            commands=None,
        )
    base = project_dir or Path(".")
    return Destinations(
        skills=base / target.skills_path,
        agents=base / target.agents_path if target.agents_path else None,
        commands=base / target.commands_path if target.commands_path else None,
    )
