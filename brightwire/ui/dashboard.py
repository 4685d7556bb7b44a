"""
Admin dashboard (Textual)
"""
import asyncio
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from brightwire.api.models import SubmissionStatus
from brightwire.ui.client import AdminClient, ClientError
from brightwire.ui.widgets import StatsHeaderWidget, SubmissionTable


class AdminDashboard(App):
    """Polls the admin API and triages submissions"""

    TITLE = "Brightwire Admin"

    CSS = """
    #stats {
        height: auto;
        border: solid cyan;
        padding: 0 1;
    }

    #submissions {
        height: 1fr;
        border: solid green;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("n", "set_status('new')", "New"),
        Binding("m", "set_status('read')", "Read"),
        Binding("p", "set_status('processed')", "Processed"),
    ]

    def __init__(
        self,
        client: AdminClient,
        admin_email: str = "",
        refresh_interval: float = 30.0,
    ):
        super().__init__()
        self.client = client
        self.admin_email = admin_email
        self.refresh_interval = refresh_interval

        self.stats_widget: Optional[StatsHeaderWidget] = None
        self.table: Optional[SubmissionTable] = None

    def compose(self) -> ComposeResult:
        yield Header()
        self.stats_widget = StatsHeaderWidget(id="stats")
        yield self.stats_widget
        self.table = SubmissionTable(id="submissions")
        yield self.table
        yield Footer()

    async def on_mount(self) -> None:
        self.stats_widget.set_admin(self.admin_email)
        await self.action_refresh()
        if self.refresh_interval > 0:
            self.set_interval(self.refresh_interval, self.action_refresh)

    async def on_unmount(self) -> None:
        await self.client.close()

    async def action_refresh(self) -> None:
        """Reload submissions and counters"""
        try:
            submissions, stats = await asyncio.gather(
                self.client.list_submissions(),
                self.client.get_stats(),
            )
        except ClientError as e:
            self.stats_widget.show_error(e.message)
            self.notify(e.message, title="Refresh failed", severity="error")
            return

        self.table.load(submissions)
        self.stats_widget.update_stats(stats)

    async def action_set_status(self, status: str) -> None:
        """Set the selected submission's status"""
        submission_id = self.table.selected_id()
        if submission_id is None:
            return

        try:
            await self.client.update_status(submission_id, status)
        except ClientError as e:
            self.notify(e.message, title="Update failed", severity="error")
            return

        self.table.set_status(submission_id, SubmissionStatus(status))
        self.notify(f"#{submission_id} marked {status}")
