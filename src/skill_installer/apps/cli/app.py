# src/skill_installer/apps/cli/app.py
from __future__ import annotations

import json
import os
import traceback
from functools import wraps
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from skill_installer.adapters.git import GitPythonClient
from skill_installer.adapters.http import RequestsFetcher
from skill_installer.config import const
from skill_installer.domain import InstallRequest, WritePolicy, WriteResult, WriteStatus
from skill_installer.domain.errors import InstallerError
from skill_installer.services.filters import select
from skill_installer.services.installer import Installer
from skill_installer.services.logging import setup_logging
from skill_installer.services.scaffold import create_skill
from skill_installer.services.settings import Settings
from skill_installer.services.targets import TARGETS, destinations, resolve_target

app = typer.Typer(help="Install AI coding assistant skills, agents and commands.", no_args_is_help=True)
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

_STYLES = {
    WriteStatus.CREATED: "green",
    WriteStatus.UPDATED: "yellow",
    WriteStatus.SKIPPED: "dim",
    WriteStatus.WOULD_CREATE: "cyan",
    WriteStatus.WOULD_UPDATE: "cyan",
}


def _run_safe(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except InstallerError as e:
            if os.getenv("SKILL_INSTALLER_DEBUG") == "1":
                traceback.print_exc()
            err_console.print(f"[red]Error:[/red] {e}", markup=True, highlight=False)
            raise typer.Exit(code=1)

    return wrapper


def _split(values: Optional[List[str]]) -> tuple[str, ...]:
    # accept both --tag a --tag b and --tag a,b
    out: list[str] = []
    for v in values or []:
        out.extend(p.strip() for p in v.split(",") if p.strip())
    return tuple(out)


def _print_results(title: str, results: list[WriteResult]) -> None:
    console.print(f"\n[bold]{title}[/bold]")
    if not results:
        console.print("  (nothing to install)")
    for r in results:
        console.print(str(r), style=_STYLES[r.status], markup=False, highlight=False)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config file (default: .skill-installer.yaml in the current directory)"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write JSON logs to this file (rotated)"),
):
    """Loads settings once and configures logging before any subcommand runs."""
    try:
        settings = Settings.from_sources(config_file=config)
    except InstallerError as e:
        err_console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(code=1)
    settings = settings.with_overrides(log_level=log_level, log_file=log_file)
    setup_logging(settings.log_level, settings.log_file)
    ctx.obj = settings


@app.command("install")
@_run_safe
def install_cmd(
    ctx: typer.Context,
    target: Optional[str] = typer.Option(None, "--target", "-t", help="claude, copilot, cursor, opencode, vscode"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", help="Only skills with one of these tags"),
    lang: Optional[List[str]] = typer.Option(None, "--lang", help="Only skills for one of these languages"),
    source: Optional[str] = typer.Option(None, "--from", help="Install from a local path, git URL or tarball URL"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing files"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Show what would be done without making changes"),
    global_scope: bool = typer.Option(False, "--global", help="Install to the user-level directory"),
    skip_agents: bool = typer.Option(False, "--skip-agents", help="Skip installing agents"),
    skip_commands: bool = typer.Option(False, "--skip-commands", help="Skip installing commands"),
    project_dir: Path = typer.Option(Path("."), "--dir", help="Project directory for project-scoped installs"),
):
    """Install skills (and agents/commands) into a target's directories."""
    settings: Settings = ctx.obj
    settings = settings.with_overrides(
        target=target,
        tags=_split(tag),
        languages=_split(lang),
        source=source,
        skip_agents=skip_agents,
        skip_commands=skip_commands,
    )
    tgt = resolve_target(settings.target)
    if global_scope and not tgt.supports_global:
        raise typer.BadParameter(f"target '{tgt.key}' has no global install location", param_hint="--global")
    dest = destinations(tgt, global_scope=global_scope, project_dir=project_dir)

    request = InstallRequest(
        skills_dest=dest.skills,
        agents_dest=dest.agents,
        commands_dest=dest.commands,
        tags=settings.tags,
        languages=settings.languages,
        source=settings.source,
        force=force,
        dry_run=dry_run,
        skip_agents=settings.skip_agents,
        skip_commands=settings.skip_commands,
    )
    inst = Installer(
        policy=request.policy,
        git=GitPythonClient(timeout=settings.git_timeout),
        fetcher=RequestsFetcher(read_timeout=settings.http_timeout),
    )
    console.print(f"Installing for [bold]{tgt.name}[/bold] into {dest.skills}")
    report = inst.run(request, rename_agents=tgt.agent_rename)

    _print_results("Skills", report.skills)
    if report.agents:
        _print_results("Agents", report.agents)
    if report.commands:
        _print_results("Commands", report.commands)

    if dry_run:
        console.print("\n(dry run - no files were modified)")
    else:
        console.print(
            f"\nDone: {report.count(WriteStatus.CREATED)} created, "
            f"{report.count(WriteStatus.UPDATED)} updated, {report.count(WriteStatus.SKIPPED)} skipped."
        )


@app.command("list")
@_run_safe
def list_cmd(
    tag: Optional[List[str]] = typer.Option(None, "--tag", help="Filter by tags"),
    lang: Optional[List[str]] = typer.Option(None, "--lang", help="Filter by language"),
    json_output: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """List the bundled skills."""
    skills = select(Installer().list_skills(), _split(tag), _split(lang))

    if json_output:
        payload = {
            "skills": [
                {"name": s.name, "description": s.description, "model": s.model, "tags": list(s.tags), "languages": list(s.languages)}
                for s in skills
            ]
        }
        typer.echo(json.dumps(payload, ensure_ascii=False))
        return

    if not skills:
        console.print("No skills match the specified filters.")
        return

    table = Table(title=f"Available skills ({len(skills)})")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    table.add_column("Tags")
    table.add_column("Languages")
    for s in skills:
        table.add_row(s.name, s.description, ", ".join(s.tags), ", ".join(s.languages))
    console.print(table)


@app.command("init")
@_run_safe
def init_cmd(
    name: str = typer.Argument(..., help="Skill name, e.g. my-skill"),
    desc: str = typer.Option("", "--desc", "-d", help="Description of the skill"),
    model: str = typer.Option(const.DEFAULT_MODEL, "--model", help="Model to use (haiku, sonnet, opus)"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", help="Tags for the skill"),
    lang: Optional[List[str]] = typer.Option(None, "--lang", help="Languages for the skill (default: any)"),
    parent: Path = typer.Option(Path("."), "--dir", help="Directory to create the skill in"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing SKILL.md"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Show what would be done"),
):
    """Create a new skill directory with a SKILL.md template."""
    result = create_skill(
        name,
        parent=parent,
        description=desc,
        model=model,
        tags=_split(tag),
        languages=_split(lang),
        policy=WritePolicy(force=force, dry_run=dry_run),
    )
    if result.status is WriteStatus.SKIPPED:
        err_console.print(f"[red]Error:[/red] {result.path} already exists (use --force to overwrite)", highlight=False)
        raise typer.Exit(code=1)
    console.print(str(result), style=_STYLES[result.status], markup=False, highlight=False)
    if result.changed:
        console.print("\nEdit the file to customize your skill, then move the directory to your skills location.")


@app.command("targets")
def targets_cmd():
    """List supported installation targets."""
    table = Table(title="Targets")
    table.add_column("Key", style="bold")
    table.add_column("Name")
    table.add_column("Skills")
    table.add_column("Agents")
    table.add_column("Global")
    for t in TARGETS.values():
        table.add_row(t.key, t.name, t.skills_path, t.agents_path or "-", "~/" + t.global_skills_path if t.global_skills_path else "-")
    console.print(table)


@app.command("version")
def version_cmd():
    """Print the version number."""
    typer.echo(f"skill-installer v{const.VERSION}")
