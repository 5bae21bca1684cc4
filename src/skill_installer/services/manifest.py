"""Header block ("frontmatter") parsing for skill manifests.

Only a handful of keys are understood and the format is deliberately narrower
than YAML: one ``key: value`` per line, lists written either as a bare token or
as ``[a, b, c]``. Anything else inside the block is ignored, which keeps older
installers working with manifests that grew new fields.
"""

from __future__ import annotations

from typing import Optional

from skill_installer.domain import SkillHeader
from skill_installer.domain.errors import MissingName

DELIMITER = "---"
_SCALARS = ("name", "description", "model")
_LISTS = ("tags", "languages")


def parse_list(raw: str) -> tuple[str, ...]:
    """``"[a, b ,c]"`` -> ``("a", "b", "c")``; ``"a"`` -> ``("a",)``; ``""`` / ``"[]"`` -> ``()``."""
    s = raw.strip()
    if not s:
        return ()
    if s.startswith("[") and s.endswith("]"):
        return tuple(item.strip() for item in s[1:-1].split(",") if item.strip())
    return (s,)


def header_lines(text: str) -> list[str]:
    """Trimmed lines between the first and second delimiter (to end of text if unclosed)."""
    out: list[str] = []
    inside = False
    for line in text.split("\n"):
        trimmed = line.strip()
        if trimmed == DELIMITER:
            if inside:
                break
            inside = True
            continue
        if inside:
            out.append(trimmed)
    return out


def parse_manifest(content: bytes, *, path: Optional[str] = None) -> SkillHeader:
    text = content.decode("utf-8", errors="replace")
    fields: dict[str, str] = {}
    lists: dict[str, tuple[str, ...]] = {}
    for line in header_lines(text):
        for key in _SCALARS:
            if line.startswith(key + ":"):
                fields[key] = line[len(key) + 1 :].strip()
                break
        else:
            for key in _LISTS:
                if line.startswith(key + ":"):
                    lists[key] = parse_list(line[len(key) + 1 :])
                    break

    name = fields.get("name", "")
    if not name:
        raise MissingName(path)
    return SkillHeader(
        name=name,
        description=fields.get("description", ""),
        model=fields.get("model", ""),
        tags=lists.get("tags", ()),
        languages=lists.get("languages", ()),
    )
