# src/skill_installer/config/const.py
from __future__ import annotations

VERSION = "3.0.0"

# layout of a content source
SKILLS_ROOT = "skills"
AGENTS_ROOT = "agents"
COMMANDS_ROOT = "commands"
MANIFEST_NAMES = ("SKILL.md", "skill.md")

DEFAULT_MODEL = "sonnet"
ANY_LANGUAGE = "any"

# "from" locators whose URL contains one of these are cloned instead of downloaded
GIT_HOSTS = ("github.com", "gitlab.com", "bitbucket.org")
TEMP_PREFIX = "skill-installer-"
SKIP_DIRS = frozenset({".git"})

# network limits, seconds
GIT_TIMEOUT = 120.0
HTTP_CONNECT_TIMEOUT = 10.0
HTTP_READ_TIMEOUT = 60.0

CONFIG_FILES = (
    ".skill-installer.yaml",
    ".skill-installer.yml",
    "skill-installer.yaml",
    "skill-installer.yml",
)
DEFAULT_TARGET = "claude"
LOG_LEVEL = "WARNING"
