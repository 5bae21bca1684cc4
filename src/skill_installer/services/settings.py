# src/skill_installer/services/settings.py
from __future__ import annotations
from dataclasses import dataclass, replace
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import dotenv_values

from skill_installer.config import const
from skill_installer.domain.errors import ConfigError


def find_config(directory: Path) -> Optional[Path]:
    for name in const.CONFIG_FILES:
        p = directory / name
        if p.is_file():
            return p
    return None


def load_config_file(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(str(path), reason=str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError(str(path), reason="top level must be a mapping")
    return data


def _as_list(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(v.strip() for v in value.split(",") if v.strip())
    return tuple(str(v).strip() for v in value if str(v).strip())


def _as_float(value: Optional[str], default: float) -> float:
    try:
        return float(value) if value else default
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    target: str = const.DEFAULT_TARGET
    tags: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()
    source: Optional[str] = None
    skip_agents: bool = False
    skip_commands: bool = False
    log_level: str = const.LOG_LEVEL
    git_timeout: float = const.GIT_TIMEOUT
    http_timeout: float = const.HTTP_READ_TIMEOUT
    log_file: Optional[Path] = None
    config_path: Optional[Path] = None

    @staticmethod
    def from_sources(config_file: Optional[str] = None, env_file: Optional[str] = ".env", cwd: Optional[Path] = None) -> "Settings":
        """
        Defaults < config file (explicit, or the first .skill-installer.y(a)ml found in cwd) < .env < environment.
        """
        base = cwd or Path.cwd()
        if config_file:
            path: Optional[Path] = Path(config_file).expanduser()
            if not path.is_file():
                raise ConfigError(str(path), reason="no such file")
        else:
            path = find_config(base)
        data = load_config_file(path) if path else {}

        env_file_vars: Dict[str, Optional[str]] = {}
        if env_file and (base / env_file).is_file():
            env_file_vars = dotenv_values(base / env_file)

        def pick_env(key: str, default: Optional[str] = None) -> Optional[str]:
            return os.environ.get(key) or env_file_vars.get(key) or default

        log_file = pick_env("SKILL_INSTALLER_LOG_FILE")
        return Settings(
            target=str(data.get("target") or const.DEFAULT_TARGET),
            tags=_as_list(data.get("tags")),
            languages=_as_list(data.get("languages")),
            source=str(data["from"]) if data.get("from") else None,
            skip_agents=bool(data.get("skip_agents", False)),
            skip_commands=bool(data.get("skip_commands", False)),
            log_level=pick_env("SKILL_INSTALLER_LOG_LEVEL", const.LOG_LEVEL) or const.LOG_LEVEL,
            git_timeout=_as_float(pick_env("SKILL_INSTALLER_GIT_TIMEOUT"), const.GIT_TIMEOUT),
            http_timeout=_as_float(pick_env("SKILL_INSTALLER_HTTP_TIMEOUT"), const.HTTP_READ_TIMEOUT),
            log_file=Path(log_file).expanduser() if log_file else None,
            config_path=path,
        )

    def with_overrides(self, **kw) -> "Settings":
        # command-line values win only when actually given
        safe = {k: v for k, v in kw.items() if k in self.__dataclass_fields__ and v not in (None, (), [], "", False)}
        for key in ("tags", "languages"):
            if key in safe:
                safe[key] = tuple(safe[key])
        return replace(self, **safe)
