"""
Tests for ProgressReporter and ProgressState.
"""

import pytest

from asyncops.async_infrastructure.progress import ProgressReporter, ProgressState
from asyncops.errors.exceptions import ValidationError


class TestProgressState:
    """Test the derived percentage."""

    @pytest.mark.parametrize(
        "completed,total,expected",
        [(0, 6, 0), (1, 6, 16), (2, 6, 33), (5, 6, 83), (6, 6, 100), (1, 3, 33)],
    )
    def test_percentage_is_floored(self, completed, total, expected):
        assert ProgressState(completed, total).percentage == expected


class TestProgressReporter:
    """Test publishing and validation."""

    def test_update_publishes_percentage(self):
        published = []
        reporter = ProgressReporter(sink=published.append)

        assert reporter.update(1, 3) == 33
        assert reporter.update(3, 3) == 100

        assert published == [33, 100]
        assert reporter.value == 100
        assert reporter.state == ProgressState(3, 3)

    def test_value_before_first_update(self):
        reporter = ProgressReporter()

        assert reporter.value == 0
        assert reporter.state is None

    @pytest.mark.parametrize("completed,total", [(-1, 3), (4, 3), (0, 0), (1, -2)])
    def test_out_of_range_is_rejected(self, completed, total):
        published = []
        reporter = ProgressReporter(sink=published.append)

        with pytest.raises(ValidationError) as exc_info:
            reporter.update(completed, total)

        assert exc_info.value.error_code == "VALIDATION-OutOfRange"
        assert published == []

    def test_progress_cannot_go_backwards_within_a_run(self):
        reporter = ProgressReporter()
        reporter.update(2, 3)

        with pytest.raises(ValidationError):
            reporter.update(1, 3)

        assert reporter.value == 66

    def test_reset_starts_a_new_run(self):
        """After reset, lower values are accepted again and nothing is published by reset."""
        published = []
        reporter = ProgressReporter(sink=published.append)
        reporter.update(3, 3)

        reporter.reset()
        reporter.update(1, 3)

        assert published == [100, 33]

    def test_failing_sink_does_not_break_updates(self):
        def broken_sink(value):
            raise RuntimeError("display gone")

        reporter = ProgressReporter(sink=broken_sink)

        assert reporter.update(1, 2) == 50
        assert reporter.value == 50
