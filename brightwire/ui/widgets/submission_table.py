"""Submission Table Widget - list of contact submissions"""
from typing import List, Optional

from rich.markup import escape
from rich.text import Text
from textual.widgets import DataTable

from brightwire.api.models import Submission, SubmissionStatus

STATUS_COLORS = {
    SubmissionStatus.NEW: "yellow",
    SubmissionStatus.READ: "cyan",
    SubmissionStatus.PROCESSED: "green",
}

STATUS_ICONS = {
    SubmissionStatus.NEW: "●",
    SubmissionStatus.READ: "◐",
    SubmissionStatus.PROCESSED: "✓",
}

COLUMNS = ("ID", "Received", "Name", "Email", "Phone", "Service", "Message", "Status")

MESSAGE_PREVIEW = 40


def status_label(status: SubmissionStatus) -> Text:
    return Text(
        f"{STATUS_ICONS[status]} {status.value}",
        style=STATUS_COLORS[status],
    )


def format_row(submission: Submission) -> tuple:
    """Cells for one submission, in COLUMNS order

    Submitted text is escaped because DataTable renders strings as markup.
    """
    message = submission.message.replace("\n", " ")
    if len(message) > MESSAGE_PREVIEW:
        message = message[:MESSAGE_PREVIEW] + "..."

    return (
        str(submission.id),
        submission.created_at.strftime("%Y-%m-%d %H:%M"),
        escape(submission.name),
        escape(submission.email),
        escape(submission.phone or "-"),
        escape(submission.service),
        escape(message),
        status_label(submission.status),
    )


class SubmissionTable(DataTable):
    """Submissions in server order (newest first), one row each"""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("cursor_type", "row")
        kwargs.setdefault("zebra_stripes", True)
        super().__init__(*args, **kwargs)
        self.submissions: List[Submission] = []

    def on_mount(self) -> None:
        self._ensure_columns()

    def _ensure_columns(self) -> None:
        if self.columns:
            return
        for label in COLUMNS:
            self.add_column(label, key=label.lower())

    def load(self, submissions: List[Submission]) -> None:
        """Replace the rows, keeping the cursor on the same submission if it is still listed"""
        self._ensure_columns()
        selected_id = self.selected_id()
        self.submissions = list(submissions)
        self.clear()
        for submission in self.submissions:
            self.add_row(*format_row(submission), key=str(submission.id))

        if selected_id is not None:
            for index, submission in enumerate(self.submissions):
                if submission.id == selected_id:
                    self.move_cursor(row=index)
                    break

    def selected_id(self) -> Optional[int]:
        if not self.submissions:
            return None
        index = self.cursor_row
        if 0 <= index < len(self.submissions):
            return self.submissions[index].id
        return None

    def set_status(self, submission_id: int, status: SubmissionStatus) -> None:
        """Reflect an acknowledged status change without refetching"""
        for index, submission in enumerate(self.submissions):
            if submission.id == submission_id:
                self.submissions[index] = submission.model_copy(update={"status": status})
                self.update_cell(str(submission_id), "status", status_label(status))
                break
