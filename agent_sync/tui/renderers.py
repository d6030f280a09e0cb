from pathlib import Path

from rich.console import Console
from rich.markup import escape

from agent_sync.models import SyncDirection, SyncIssue, SyncResult
from agent_sync.tui.enums import UIStyle
from agent_sync.tui.sections import UISection
from agent_sync.tui.tables import ResultTable, ToolsTable


def _issue_lines(issues: list[SyncIssue]) -> str:
    return UISection.bullets([escape(str(issue)) for issue in issues])


class SyncConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_sync_result(
        self, result: SyncResult, mode: str, verbose: bool = False
    ) -> None:
        self.console.print(
            UISection.wrap(
                "sync overview",
                ResultTable.summary_block(result, mode=mode),
                style=UIStyle.BLUE.value,
            )
        )

        if result.has_changes() or (verbose and result.unchanged):
            title = "planned changes" if result.preview else "changes"
            self.console.print(
                UISection.wrap(
                    title,
                    ResultTable.changes_table(result, include_unchanged=verbose),
                    style=UIStyle.CYAN.value,
                )
            )
        else:
            self.console.print(
                UISection.note("changes", "No changes required.", style=UIStyle.DIM.value)
            )

        if result.skipped:
            self.console.print(
                UISection.note(
                    "skipped", _issue_lines(result.skipped), style=UIStyle.YELLOW.value
                )
            )
        if result.conflicts:
            self.console.print(
                UISection.note(
                    "conflicts",
                    _issue_lines(result.conflicts),
                    style=UIStyle.YELLOW.value,
                )
            )
        if result.errors:
            self.console.print(
                UISection.note(
                    "errors", _issue_lines(result.errors), style=UIStyle.RED.value
                )
            )

        if result.preview and result.has_changes():
            rerun = "agentsync sync"
            if result.direction == SyncDirection.IMPORT:
                rerun = f"{rerun} --from <tool>"
            self.console.print(
                UISection.note(
                    "next",
                    f"Dry run only, nothing was written.\n- {rerun}",
                    style=UIStyle.DIM.value,
                )
            )

    def render_init(
        self, config_path: Path, rules_dir: Path, detected: list[dict]
    ) -> None:
        self.console.print(
            UISection.note(
                "init",
                f"Created [bold]{escape(str(rules_dir))}[/bold]\n"
                f"Created [bold]{escape(str(config_path))}[/bold]",
                style=UIStyle.GREEN.value,
            )
        )
        if not detected:
            self.console.print(
                UISection.note(
                    "next",
                    "Add a rule, then export it.\n"
                    "- agentsync add <name>\n"
                    "- agentsync sync",
                    style=UIStyle.DIM.value,
                )
            )
            return

        self.console.print(
            UISection.wrap(
                "existing tool rules",
                ToolsTable.detected_table(detected),
                style=UIStyle.CYAN.value,
            )
        )
        hints = [f"agentsync sync --from {row['tool']}" for row in detected]
        self.console.print(
            UISection.note(
                "next",
                "Import existing rules into the canonical store.\n"
                + UISection.bullets(hints),
                style=UIStyle.DIM.value,
            )
        )

    def render_rule_created(self, name: str, path: Path) -> None:
        self.console.print(
            UISection.note(
                "rule",
                f"Rule added: [bold]{escape(name)}[/bold]\n{escape(str(path))}\n"
                "Run `agentsync sync` to export it.",
                style=UIStyle.GREEN.value,
            )
        )
