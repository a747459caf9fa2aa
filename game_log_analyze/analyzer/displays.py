"""
Display component builders for the live tracker.
"""

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .live import AnalyzerSnapshot


class DisplayBuilder:
    """Builds rich display components for the tracker."""

    @staticmethod
    def create_title() -> Text:
        """Create the tracker title line."""
        return Text("Game Log Analyzer", style="bold bright_red underline")

    @staticmethod
    def create_stats_table(snapshot: AnalyzerSnapshot) -> Table:
        """Create the table of current statistics."""
        table = Table(show_header=True, header_style="blue", box=None)
        table.add_column("DPS", justify="right")
        table.add_column("Total", justify="right")
        table.add_column("AverageHit", justify="right")
        table.add_column("MinHit", justify="right")
        table.add_column("MaxHit", justify="right")

        table.add_row(
            f"[green]{round(snapshot.dps, 2)}[/green]",
            f"[green]{snapshot.total_damage}[/green]",
            f"[green]{round(snapshot.average_hit, 2)}[/green]",
            f"[green]{snapshot.minimum_hit}[/green]",
            f"[green]{snapshot.maximum_hit}[/green]",
        )
        return table

    @staticmethod
    def create_stats_panel(snapshot: AnalyzerSnapshot) -> Panel:
        """Create the framed statistics panel."""
        return Panel(
            DisplayBuilder.create_stats_table(snapshot),
            title="Stats from log",
            title_align="left",
            padding=(1, 3),
            expand=False,
        )

    @staticmethod
    def create_tracker_view(snapshot: AnalyzerSnapshot) -> Group:
        """Create the full tracker screen."""
        return Group(DisplayBuilder.create_title(), DisplayBuilder.create_stats_panel(snapshot))
