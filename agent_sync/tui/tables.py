from rich.markup import escape
from rich.table import Column, Table

from agent_sync.models import SyncResult
from agent_sync.tui.enums import RESULT_BUCKET_STYLE, UIStyle


class ResultTable:
    @staticmethod
    def summary_block(result: SyncResult, mode: str) -> Table:
        counts = result.summary()
        chips = [f"{key}={value}" for key, value in counts.items() if value > 0]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Mode", mode)
        table.add_row("Preview", "yes" if result.preview else "no")
        table.add_row("Counts", "  ".join(chips))
        return table

    @staticmethod
    def changes_table(result: SyncResult, include_unchanged: bool = False) -> Table:
        table = Table(
            Column(header="Status", width=10),
            Column(header="Rule", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        buckets = {
            "created": result.created,
            "updated": result.updated,
            "deleted": result.deleted,
        }
        if include_unchanged:
            buckets["unchanged"] = result.unchanged
        for bucket, identities in buckets.items():
            style = RESULT_BUCKET_STYLE.get(bucket, UIStyle.WHITE.value)
            for identity in identities:
                table.add_row(f"[{style}]{bucket}[/{style}]", escape(identity))
        return table


class ToolsTable:
    @staticmethod
    def detected_table(rows: list[dict]) -> Table:
        table = Table(
            Column(header="Tool", width=16),
            Column(header="Directory", overflow="ellipsis"),
            Column(header="Rules", justify="right", width=6),
            expand=True,
            header_style="bold",
        )
        for row in rows:
            table.add_row(row["label"], escape(row["directory"]), str(row["count"]))
        return table
