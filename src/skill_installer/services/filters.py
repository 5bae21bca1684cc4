from __future__ import annotations
from typing import Iterable, Optional, Sequence

from skill_installer.config import const
from skill_installer.domain import Skill


def _contains(values: Iterable[str], item: str) -> bool:
    item = item.casefold()
    return any(v.casefold() == item for v in values)


def matches(skill: Skill, tags: Optional[Sequence[str]] = None, languages: Optional[Sequence[str]] = None) -> bool:
    """AND across the tag and language selections, OR within each; an empty selection passes."""
    if tags and not any(_contains(skill.tags, t) for t in tags):
        return False
    if languages:
        if _contains(skill.languages, const.ANY_LANGUAGE):
            return True
        if not any(_contains(skill.languages, lang) for lang in languages):
            return False
    return True


def select(skills: Iterable[Skill], tags: Optional[Sequence[str]] = None, languages: Optional[Sequence[str]] = None) -> list[Skill]:
    return [s for s in skills if matches(s, tags, languages)]
