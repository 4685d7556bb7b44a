"""UI Widgets for the Brightwire admin dashboard"""

from .stats_header import StatsHeaderWidget
from .submission_table import SubmissionTable, format_row, status_label

__all__ = [
    "StatsHeaderWidget",
    "SubmissionTable",
    "format_row",
    "status_label",
]
