"""
Tests for RelayCommand.
"""

import pytest

from asyncops.commands import RelayCommand
from asyncops.errors.exceptions import FetchError


class RecordingErrorHandler:
    def __init__(self):
        self.errors = []

    def handle_error(self, error):
        self.errors.append(error)


class BrokenErrorHandler:
    def handle_error(self, error):
        raise RuntimeError("handler failed")


class TestRelayCommand:
    """Test the synchronous command."""

    def test_execute_runs_action(self):
        calls = []
        command = RelayCommand(lambda: calls.append("ran"))

        command.execute()

        assert calls == ["ran"]

    def test_predicate_blocks_execution(self):
        calls = []
        command = RelayCommand(lambda: calls.append("ran"), can_execute=lambda: False)

        command.execute()

        assert calls == []
        assert not command.can_execute()

    def test_cannot_execute_while_running(self):
        seen = []
        command = RelayCommand(lambda: seen.append(command.can_execute()))

        command.execute()

        assert seen == [False]
        assert command.can_execute()

    def test_execute_routes_fault_to_handler(self):
        handler = RecordingErrorHandler()

        def action():
            raise FetchError("down")

        command = RelayCommand(action, error_handler=handler)
        command.execute()

        assert isinstance(handler.errors[0], FetchError)
        assert not command.is_executing

    def test_execute_without_handler_does_not_raise(self):
        def action():
            raise RuntimeError("boom")

        RelayCommand(action).execute()

    def test_failing_handler_is_contained(self):
        def action():
            raise FetchError("down")

        command = RelayCommand(action, error_handler=BrokenErrorHandler())
        command.execute()

        assert not command.is_executing
        assert command.can_execute()

    @pytest.mark.asyncio
    async def test_execute_async_propagates_fault(self):
        def action():
            raise FetchError("down")

        command = RelayCommand(action)

        with pytest.raises(FetchError):
            await command.execute_async()

        assert command.can_execute()

    def test_notifications_around_invocation(self):
        observed = []
        command = RelayCommand(lambda: None)
        command.add_can_execute_changed(lambda cmd: observed.append(cmd.can_execute()))

        command.execute()

        assert observed == [False, True]
