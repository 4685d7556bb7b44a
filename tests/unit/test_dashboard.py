"""
Tests for the admin dashboard and its widgets
"""
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest
from rich.text import Text

from brightwire.api.models import DashboardStats, Submission, SubmissionStatus
from brightwire.ui.client import ClientError
from brightwire.ui.dashboard import AdminDashboard
from brightwire.ui.widgets import StatsHeaderWidget, SubmissionTable, format_row, status_label


def make_submission(submission_id: int, **overrides) -> Submission:
    values = {
        "id": submission_id,
        "name": "Jo",
        "email": "jo@x.com",
        "phone": None,
        "service": "Wiring",
        "message": "Hi",
        "created_at": datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc),
        "status": SubmissionStatus.NEW,
    }
    values.update(overrides)
    return Submission(**values)


def make_client(submissions=None, stats=None) -> AsyncMock:
    client = AsyncMock()
    client.list_submissions.return_value = submissions if submissions is not None else []
    client.get_stats.return_value = stats or DashboardStats(total=0, this_week=0, top_service="None")
    return client


class TestFormatRow:
    """format_row のテスト"""

    def test_cells(self):
        cells = format_row(make_submission(3, phone="555-0100"))

        assert cells[:7] == ("3", "2026-03-02 09:30", "Jo", "jo@x.com", "555-0100", "Wiring", "Hi")
        assert isinstance(cells[7], Text)
        assert cells[7].plain == "● new"

    def test_missing_phone(self):
        assert format_row(make_submission(1))[4] == "-"

    def test_long_message_is_shortened(self):
        cells = format_row(make_submission(1, message="line one\n" + "x" * 60))

        assert cells[6].startswith("line one x")
        assert cells[6].endswith("...")
        assert "\n" not in cells[6]
        assert len(cells[6]) == 43

    def test_status_labels(self):
        assert status_label(SubmissionStatus.READ).plain == "◐ read"
        assert status_label(SubmissionStatus.PROCESSED).plain == "✓ processed"
        assert str(status_label(SubmissionStatus.PROCESSED).style) == "green"


class TestStatsHeaderWidget:
    """StatsHeaderWidget のテスト"""

    def test_initialization(self):
        widget = StatsHeaderWidget()
        assert widget.stats is None
        assert "Loading..." in widget.render_content().plain

    def test_update_stats(self):
        widget = StatsHeaderWidget()

        with patch.object(widget, 'update'):
            widget.set_admin("owner@sparkyelectric.test")
            widget.update_stats(DashboardStats(total=5, this_week=2, top_service="Lighting"))

        text = widget.render_content().plain
        assert "owner@sparkyelectric.test" in text
        assert "Total: 5" in text
        assert "This week: 2" in text
        assert "Top service: Lighting" in text

    def test_error_keeps_last_counters(self):
        widget = StatsHeaderWidget()

        with patch.object(widget, 'update'):
            widget.update_stats(DashboardStats(total=5, this_week=2, top_service="Lighting"))
            widget.show_error("timeout")

        text = widget.render_content().plain
        assert "Total: 5" in text
        assert "✗ timeout" in text

    def test_fresh_stats_clear_error(self):
        widget = StatsHeaderWidget()

        with patch.object(widget, 'update'):
            widget.show_error("timeout")
            widget.update_stats(DashboardStats(total=1, this_week=1, top_service="A"))

        assert widget.error_message is None
        assert "timeout" not in widget.render_content().plain


class TestSubmissionTable:
    """SubmissionTable のテスト"""

    def test_no_selection_when_empty(self):
        table = SubmissionTable()
        assert table.selected_id() is None


class TestAdminDashboard:
    """AdminDashboard のテスト (Pilot)"""

    @pytest.mark.asyncio
    async def test_loads_on_mount(self):
        client = make_client(
            submissions=[make_submission(2, name="Sam"), make_submission(1)],
            stats=DashboardStats(total=2, this_week=2, top_service="Wiring"),
        )
        app = AdminDashboard(client, admin_email="owner@sparkyelectric.test", refresh_interval=0)

        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.table.row_count == 2
            assert app.table.selected_id() == 2
            assert app.stats_widget.stats.total == 2
            assert app.stats_widget.admin_email == "owner@sparkyelectric.test"

        client.close.assert_awaited()

    @pytest.mark.asyncio
    async def test_mark_selected_as_read(self):
        client = make_client(submissions=[make_submission(7)])
        app = AdminDashboard(client, refresh_interval=0)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("m")
            await pilot.pause()

            client.update_status.assert_awaited_once_with(7, "read")
            assert app.table.submissions[0].status == SubmissionStatus.READ

    @pytest.mark.asyncio
    async def test_failed_update_keeps_status(self):
        client = make_client(submissions=[make_submission(7)])
        client.update_status.side_effect = ClientError("Invalid status", 400)
        app = AdminDashboard(client, refresh_interval=0)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("p")
            await pilot.pause()

            assert app.table.submissions[0].status == SubmissionStatus.NEW

    @pytest.mark.asyncio
    async def test_status_keys_do_nothing_without_rows(self):
        client = make_client()
        app = AdminDashboard(client, refresh_interval=0)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("n")
            await pilot.pause()

        client.update_status.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_refresh_failure_is_shown(self):
        client = make_client()
        client.list_submissions.side_effect = ClientError("Cannot reach http://localhost:5000")
        app = AdminDashboard(client, refresh_interval=0)

        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.stats_widget.error_message == "Cannot reach http://localhost:5000"

    @pytest.mark.asyncio
    async def test_manual_refresh(self):
        client = make_client()
        app = AdminDashboard(client, refresh_interval=0)

        async with app.run_test() as pilot:
            await pilot.pause()
            client.list_submissions.return_value = [make_submission(1)]
            await pilot.press("r")
            await pilot.pause()

            assert app.table.row_count == 1
        assert client.list_submissions.await_count == 2
