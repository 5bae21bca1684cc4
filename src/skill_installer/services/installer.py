# src/skill_installer/services/installer.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from skill_installer.adapters.source import EmbeddedSource, LocalDirSource
from skill_installer.config import const
from skill_installer.domain import InstallReport, InstallRequest, Skill, WritePolicy, WriteResult
from skill_installer.domain.errors import ReadFailure
from skill_installer.ports import ContentSource, Fetcher, GitClient, walk_files
from skill_installer.services.acquire import acquire
from skill_installer.services.discovery import discover, discover_flat
from skill_installer.services.filters import select
from skill_installer.services.writer import FileWriter

log = logging.getLogger("skill_installer.installer")

RenameFunc = Callable[[str], str]
StrOrPath = Union[str, Path]


def copilot_agent_name(filename: str) -> str:
    """GitHub Copilot only picks up agents named ``*.agent.md``."""
    if filename.endswith(".agent.md"):
        return filename
    if filename.endswith(".md"):
        return filename[: -len(".md")] + ".agent.md"
    return filename


def _relative(path: str, root: str) -> str:
    root = root.strip("/")
    if not root:
        return path
    return path[len(root) + 1 :] if path.startswith(root + "/") else path


class Installer:
    """
    Installs units from a content source (the bundled one by default):
      - install_skills: discover -> filter -> write every file of each unit
      - install_from:   mirror an external path / git repo / tarball verbatim
      - install_agents / install_commands: flat *.md subtrees with an optional rename hook
    Errors abort the current call and propagate; files already written stay in place.
    """

    def __init__(
        self,
        source: Optional[ContentSource] = None,
        *,
        policy: Optional[WritePolicy] = None,
        git: Optional[GitClient] = None,
        fetcher: Optional[Fetcher] = None,
    ) -> None:
        self.source: ContentSource = source if source is not None else EmbeddedSource()
        self.policy = policy or WritePolicy()
        self.writer = FileWriter(self.policy)
        self.git = git
        self.fetcher = fetcher

    # --- catalogue

    def list_skills(self) -> list[Skill]:
        return discover(self.source)

    def list_agents(self) -> list[Skill]:
        return discover_flat(self.source, const.AGENTS_ROOT)

    def list_commands(self) -> list[Skill]:
        return discover_flat(self.source, const.COMMANDS_ROOT)

    # --- install

    def _write_tree(self, source: ContentSource, root: str, dest: Path, results: list[WriteResult], rel_to: str) -> None:
        path = root
        try:
            for path in walk_files(source, root, skip_dirs=const.SKIP_DIRS):
                data = source.read_bytes(path)
                results.append(self.writer.write(dest / _relative(path, rel_to), data))
        except FileNotFoundError as e:
            # listed a moment ago, gone now
            raise ReadFailure(f"{source!r}:{path}", reason=str(e)) from e

    def install_skills(
        self,
        dest: StrOrPath,
        tags: Optional[Sequence[str]] = None,
        languages: Optional[Sequence[str]] = None,
    ) -> list[WriteResult]:
        dest = Path(dest)
        chosen = select(self.list_skills(), tags, languages)
        log.info("install.skills", extra={"extra": {"dest": str(dest), "selected": [s.name for s in chosen]}})
        seen: dict[str, str] = {}
        results: list[WriteResult] = []
        for skill in chosen:
            if skill.name in seen:
                log.warning(
                    "install.duplicate_name",
                    extra={"extra": {"name": skill.name, "first": seen[skill.name], "second": skill.root_path}},
                )
            seen.setdefault(skill.name, skill.root_path)
            self._write_tree(self.source, skill.root_path, dest, results, const.SKILLS_ROOT)
        return results

    def install_from(self, locator: str, dest: StrOrPath) -> list[WriteResult]:
        dest = Path(dest)
        results: list[WriteResult] = []
        with acquire(locator, git=self.git, fetcher=self.fetcher) as root:
            log.info("install.from", extra={"extra": {"locator": locator, "root": str(root), "dest": str(dest)}})
            self._write_tree(LocalDirSource(root), "", dest, results, "")
        return results

    def _install_flat(self, items: list[Skill], root: str, dest: Path, rename: Optional[RenameFunc]) -> list[WriteResult]:
        results: list[WriteResult] = []
        for item in items:
            fname = _relative(item.root_path, root)
            if rename is not None:
                fname = rename(fname)
            results.append(self.writer.write(dest / fname, item.content))
        return results

    def install_agents(self, dest: StrOrPath, rename: Optional[RenameFunc] = None) -> list[WriteResult]:
        return self._install_flat(self.list_agents(), const.AGENTS_ROOT, Path(dest), rename)

    def install_commands(self, dest: StrOrPath, rename: Optional[RenameFunc] = None) -> list[WriteResult]:
        return self._install_flat(self.list_commands(), const.COMMANDS_ROOT, Path(dest), rename)

    # --- composition

    def run(self, request: InstallRequest, *, rename_agents: Optional[RenameFunc] = None) -> InstallReport:
        report = InstallReport()
        if request.source:
            report.skills = self.install_from(request.source, request.skills_dest)
        else:
            report.skills = self.install_skills(request.skills_dest, request.tags, request.languages)
        if not request.skip_agents and request.agents_dest is not None:
            report.agents = self.install_agents(request.agents_dest, rename_agents)
        if not request.skip_commands and request.commands_dest is not None:
            report.commands = self.install_commands(request.commands_dest)
        return report


def install(request: InstallRequest, *, source: Optional[ContentSource] = None, rename_agents: Optional[RenameFunc] = None, **ports) -> InstallReport:
    return Installer(source, policy=request.policy, **ports).run(request, rename_agents=rename_agents)
