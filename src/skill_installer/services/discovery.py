# src/skill_installer/services/discovery.py
from __future__ import annotations

import logging
from typing import Iterator, Optional

from skill_installer.config import const
from skill_installer.domain import Probe, ProbeStatus, Skill
from skill_installer.domain.errors import MissingName
from skill_installer.ports.source import ContentSource, join
from skill_installer.services.manifest import parse_manifest

log = logging.getLogger("skill_installer.discovery")


def _read_manifest(source: ContentSource, unit_dir: str) -> Optional[tuple[str, bytes]]:
    # SKILL.md first, then the lowercase variant
    for fname in const.MANIFEST_NAMES:
        path = join(unit_dir, fname)
        try:
            return path, source.read_bytes(path)
        except FileNotFoundError:
            continue
    return None


def probe_unit(source: ContentSource, unit_dir: str) -> Probe:
    """Classify one candidate directory: parsed unit, fallback unit, or not a unit at all."""
    found = _read_manifest(source, unit_dir)
    if found is None:
        return Probe(ProbeStatus.ABSENT, unit_dir)
    manifest_path, content = found
    dir_name = unit_dir.rstrip("/").rsplit("/", 1)[-1]
    try:
        header = parse_manifest(content, path=manifest_path)
    except MissingName:
        log.warning("discovery.fallback", extra={"extra": {"path": manifest_path, "name": dir_name}})
        skill = Skill(
            name=dir_name,
            description="",
            model=const.DEFAULT_MODEL,
            tags=(),
            languages=(),
            root_path=unit_dir,
            manifest_path=manifest_path,
            content=content,
        )
        return Probe(ProbeStatus.FALLBACK, unit_dir, skill)
    skill = Skill(
        name=header.name,
        description=header.description,
        model=header.model or const.DEFAULT_MODEL,
        tags=header.tags,
        languages=header.languages,
        root_path=unit_dir,
        manifest_path=manifest_path,
        content=content,
    )
    return Probe(ProbeStatus.PARSED, unit_dir, skill)


def probe_all(source: ContentSource, root: str = const.SKILLS_ROOT) -> Iterator[Probe]:
    try:
        entries = source.list_dir(root)
    except FileNotFoundError:
        log.info("discovery.no_root", extra={"extra": {"root": root}})
        return
    for entry in sorted(entries, key=lambda e: e.name):
        if entry.is_dir:
            yield probe_unit(source, join(root, entry.name))


def discover(source: ContentSource, root: str = const.SKILLS_ROOT) -> list[Skill]:
    skills = [p.skill for p in probe_all(source, root) if p.skill is not None]
    log.debug("discovery.done", extra={"extra": {"root": root, "count": len(skills)}})
    return skills


def discover_flat(source: ContentSource, root: str) -> list[Skill]:
    """Single-file entries (``agents/*.md``, ``commands/*.md``); a missing root yields nothing."""
    try:
        entries = source.list_dir(root)
    except FileNotFoundError:
        log.info("discovery.no_root", extra={"extra": {"root": root}})
        return []
    items: list[Skill] = []
    for entry in sorted(entries, key=lambda e: e.name):
        if entry.is_dir or not entry.name.endswith(".md"):
            continue
        path = join(root, entry.name)
        content = source.read_bytes(path)
        stem = entry.name[: -len(".md")]
        try:
            header = parse_manifest(content, path=path)
        except MissingName:
            header = None
        items.append(
            Skill(
                name=header.name if header else stem,
                description=header.description if header else "",
                model=(header.model if header else "") or const.DEFAULT_MODEL,
                tags=header.tags if header else (),
                languages=header.languages if header else (),
                root_path=path,
                manifest_path=path,
                content=content,
            )
        )
    return items
