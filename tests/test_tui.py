"""Tests for the interactive battery display."""

import asyncio
from unittest.mock import MagicMock, patch

from batstat.battery import BatteryReadError
from batstat.tui import BatteryApp, DisplayState


def run(coro):
    return asyncio.run(coro)


class TestDisplayLoop:
    """Tests for BatteryApp running under textual's test harness."""

    def test_blank_before_first_tick(self, settings, make_battery) -> None:
        """Test that nothing is drawn until the first timer fires."""
        make_battery(capacity=80)
        app = BatteryApp(settings.model_copy(update={"refresh_interval_s": 30.0}))

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.pause()
                assert app.state is None
                assert app.view() == ""

        run(scenario())

    def test_tick_updates_state(self, settings, make_battery) -> None:
        """Test the display picks up the battery after one interval."""
        make_battery(capacity=80, status="Charging")
        app = BatteryApp(settings.model_copy(update={"refresh_interval_s": 0.05}))

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.pause(0.3)
                assert app.state == DisplayState(capacity=80, charging=True, icon="🔋⚡")
                assert app.view() == "Battery: 🔋⚡ 80%"

        run(scenario())

    def test_follows_changes(self, settings, make_battery) -> None:
        """Test each tick rereads the battery."""
        make_battery(capacity=80)
        app = BatteryApp(settings.model_copy(update={"refresh_interval_s": 0.05}))

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.pause(0.3)
                make_battery(capacity=15)
                await pilot.pause(0.3)
                assert app.view() == "Battery: 🪫 15%"

        run(scenario())

    def test_quit_binding(self, settings, make_battery) -> None:
        """Test 'q' leaves the display with a clean return code."""
        make_battery()
        app = BatteryApp(settings)

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.press("q")
                await pilot.pause()

        run(scenario())
        assert app.return_code == 0


class TestTeardown:
    """Tests for shutting the display down while ticks are pending."""

    def test_exit_with_fast_ticks(self, settings, make_battery) -> None:
        """Test that exiting between rapid ticks never raises."""
        make_battery(capacity=50)

        for _ in range(10):
            app = BatteryApp(settings.model_copy(update={"refresh_interval_s": 0.01}))

            async def scenario() -> None:
                async with app.run_test() as pilot:
                    await pilot.pause(0.05)
                    app.exit()

            run(scenario())
            assert app.return_code == 0

    def test_quit_with_fast_ticks(self, settings, make_battery) -> None:
        """Test that 'q' cancels the pending tick before leaving."""
        make_battery(capacity=50)
        app = BatteryApp(settings.model_copy(update={"refresh_interval_s": 0.01}))

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.pause(0.05)
                await pilot.press("q")
                assert app._timer is None

        run(scenario())
        assert app.return_code == 0

    def test_tick_after_stop_is_noop(self, settings, make_battery) -> None:
        """Test that a tick delivered after stopping touches nothing."""
        make_battery(capacity=50)
        app = BatteryApp(settings)
        app.exit = MagicMock()
        app.stop_ticking()
        with patch("batstat.tui.find_battery_path") as find:
            app.tick()
        find.assert_not_called()
        app.exit.assert_not_called()
        assert app.state is None


class TestTick:
    """Tests for BatteryApp.tick exit paths."""

    def test_battery_gone_exits_quietly(self, settings) -> None:
        """Test the loop ends without an error when no battery is found."""
        app = BatteryApp(settings)
        app.exit = MagicMock()
        app.tick()
        app.exit.assert_called_once_with()
        assert app.state is None

    def test_read_failure_exits_with_error(self, settings, make_battery) -> None:
        """Test a read failure ends the loop with return code 1."""
        make_battery()
        app = BatteryApp(settings)
        app.exit = MagicMock()
        error = BatteryReadError(settings.power_supply_root / "BAT0" / "uevent", PermissionError("denied"))
        with patch("batstat.tui.read_battery_info", side_effect=error):
            app.tick()
        app.exit.assert_called_once_with(return_code=1, message="Error reading battery info: denied")
        assert app.state is None

    def test_view_without_state(self, settings) -> None:
        """Test view is blank before any tick."""
        assert BatteryApp(settings).view() == ""
