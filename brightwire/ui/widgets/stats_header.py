"""Stats Header Widget - dashboard counters"""
from typing import Optional

from rich.text import Text
from textual.widgets import Static

from brightwire.api.models import DashboardStats


class StatsHeaderWidget(Static):
    """Shows total, weekly and top-service counters"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.stats: Optional[DashboardStats] = None
        self.admin_email = ""
        self.error_message: Optional[str] = None

    def update_stats(self, stats: DashboardStats):
        """Show fresh counters and clear any previous error"""
        self.stats = stats
        self.error_message = None
        self.refresh_display()

    def set_admin(self, email: str):
        self.admin_email = email
        self.refresh_display()

    def show_error(self, message: str):
        """Keep the last counters but flag that refreshing failed"""
        self.error_message = message
        self.refresh_display()

    def render_content(self) -> Text:
        content = Text()
        content.append("Brightwire Admin", style="bold cyan")
        if self.admin_email:
            content.append(f"  ({self.admin_email})", style="dim")
        content.append("\n")

        if self.stats is None:
            content.append("Loading...\n", style="dim")
        else:
            content.append("Total: ", style="dim")
            content.append(f"{self.stats.total}", style="bold white")
            content.append("   This week: ", style="dim")
            content.append(f"{self.stats.this_week}", style="bold green")
            content.append("   Top service: ", style="dim")
            content.append(f"{self.stats.top_service}\n", style="bold yellow")

        if self.error_message:
            content.append(f"✗ {self.error_message}\n", style="red")
        return content

    def refresh_display(self):
        self.update(self.render_content())
