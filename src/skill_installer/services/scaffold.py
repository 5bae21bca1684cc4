# src/skill_installer/services/scaffold.py
from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Sequence

from skill_installer.config import const
from skill_installer.domain import WritePolicy, WriteResult
from skill_installer.domain.errors import InvalidSkillName
from skill_installer.services.writer import FileWriter

_name_re = re.compile(r"^[a-zA-Z0-9_\-]+$")

_TEMPLATE = """---
name: {name}
description: {description}
model: {model}
tags: [{tags}]
languages: [{languages}]
---

# {title}

You are a specialized agent for {description}.

## Capabilities

- [List what this skill can do]

## Guidelines

1. [First guideline]
2. [Second guideline]

## Output Format

[Describe expected output format]

## Tools to Use

- **Read** - Read files
- **Grep** - Search code
- **Glob** - Find files

## Do NOT

- [Things to avoid]
"""


def render_skill_template(
    name: str,
    description: str,
    model: str = const.DEFAULT_MODEL,
    tags: Sequence[str] = (),
    languages: Sequence[str] = (const.ANY_LANGUAGE,),
) -> str:
    return _TEMPLATE.format(
        name=name,
        description=description,
        model=model,
        tags=", ".join(tags),
        languages=", ".join(languages),
        title=name.replace("-", " ").replace("_", " ").title(),
    )


def create_skill(
    name: str,
    *,
    parent: Optional[Path] = None,
    description: str = "",
    model: str = const.DEFAULT_MODEL,
    tags: Sequence[str] = (),
    languages: Sequence[str] = (),
    policy: Optional[WritePolicy] = None,
) -> WriteResult:
    """Write ``<parent>/<name>/SKILL.md`` from the template, honouring force/dry-run."""
    if not _name_re.match(name):
        raise InvalidSkillName(name)
    text = render_skill_template(
        name,
        description or f"Custom skill for {name}",
        model,
        tags or ("custom",),
        languages or (const.ANY_LANGUAGE,),
    )
    target = (parent or Path(".")) / name / const.MANIFEST_NAMES[0]
    return FileWriter(policy).write(target, text.encode("utf-8"))
