from pathlib import Path
from typing import Any, Callable, Dict

import click
from rich.console import Console

from agent_sync.config import load_config
from agent_sync.errors import SyncAppError
from agent_sync.logger import setup_logging
from agent_sync.models import SyncResult
from agent_sync.project import ProjectService
from agent_sync.sync_service import RulesSyncService
from agent_sync.tools import parse_tool, tool_values
from agent_sync.tui import SyncConsoleUI


def _from_option(help_text: str) -> Callable:
    return click.option(
        "--from",
        "source",
        type=click.Choice(tool_values(), case_sensitive=False),
        default=None,
        help=help_text,
    )


def _run_sync(
    project_root: Path, source: str | None, dry_run: bool
) -> tuple[SyncResult, str]:
    config = load_config(project_root)
    service = RulesSyncService(project_root=project_root, config=config)
    if source is None:
        return service.export_rules(preview=dry_run), "export"
    tool = parse_tool(source)
    return service.import_rules(tool, preview=dry_run), f"import:{tool.value}"


def _render_and_exit(
    ui: SyncConsoleUI, result: SyncResult, mode: str, verbose: bool
) -> None:
    ui.render_sync_result(result, mode=mode, verbose=verbose)
    if result.has_errors():
        raise click.exceptions.Exit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Show detailed progress.")
@click.option(
    "-C",
    "--project-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Project root holding agentsync.json.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, project_dir: Path) -> None:
    """Keep agent rules in sync across Cursor, Windsurf and GitHub Copilot."""
    setup_logging(verbose=verbose)
    ctx.obj = {"project_root": project_dir.resolve(), "verbose": verbose}


@cli.command(help="Create .agentsync/rules and agentsync.json.")
@_from_option("Import existing rules from this tool right after init.")
@click.pass_obj
def init(obj: Dict[str, Any], source: str | None) -> None:
    ui = SyncConsoleUI(Console())
    project = ProjectService(obj["project_root"])

    try:
        project.init_project()
    except SyncAppError as exc:
        raise click.ClickException(f"Fatal: {exc}")

    ui.render_init(
        project.config_path, project.rules.rules_dir, project.detect_tool_rules()
    )
    if source is None:
        return

    try:
        result, mode = _run_sync(obj["project_root"], source, dry_run=False)
    except SyncAppError as exc:
        raise click.ClickException(f"Fatal: {exc}")
    _render_and_exit(ui, result, mode, obj["verbose"])


@cli.command(help="Export canonical rules, or import them with --from.")
@_from_option("Import rules from this tool instead of exporting.")
@click.option(
    "-n", "--dry-run", is_flag=True, help="Show what would change without writing."
)
@click.pass_obj
def sync(obj: Dict[str, Any], source: str | None, dry_run: bool) -> None:
    ui = SyncConsoleUI(Console())

    try:
        result, mode = _run_sync(obj["project_root"], source, dry_run)
    except SyncAppError as exc:
        raise click.ClickException(f"Fatal: {exc}")

    _render_and_exit(ui, result, mode, obj["verbose"])


@cli.command(help="Create a new canonical rule from a template.")
@click.argument("name")
@click.pass_obj
def add(obj: Dict[str, Any], name: str) -> None:
    ui = SyncConsoleUI(Console())
    project = ProjectService(obj["project_root"])

    try:
        path = project.add_rule(name)
    except SyncAppError as exc:
        raise click.ClickException(f"Fatal: {exc}")

    ui.render_rule_created(name, path)


def main() -> int:
    # Without standalone mode click returns the code of a raised Exit.
    try:
        code = cli(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return 2
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
