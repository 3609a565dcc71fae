from dataclasses import dataclass
from typing import ClassVar

from loguru import logger
from rich.console import RenderableType
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.timer import Timer
from textual.widgets import Static

from .battery import BatteryReadError, find_battery_path, read_battery_info
from .config import Settings
from .icons import battery_icon


@dataclass(frozen=True)
class DisplayState:
    capacity: int
    charging: bool
    icon: str


class BatteryApp(App[None]):
    """Single line battery display, redrawn once per refresh interval."""

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        Binding(key="q", action="quit", description="Quit"),
    ]

    DEFAULT_CSS = """
    Screen {
        background: $surface;
    }
    #battery_line {
        width: auto;
        height: 1;
    }
    """

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self.state: DisplayState | None = None
        self._line: Static | None = None
        self._timer: Timer | None = None
        self._stopped = False
        self._log_sink_id: int | None = None

    def compose(self) -> ComposeResult:
        self._line = Static("", id="battery_line", markup=False)
        yield self._line

    def on_load(self) -> None:
        # Anything written to the terminal while the app owns it would corrupt
        # the display, so send loguru output to the textual devtools log.
        logger.remove()
        self._log_sink_id = logger.add(
            lambda message: self.log(message.rstrip()),
            format="{time:HH:mm:ss.SSS} | {level: <8} | {message}",
            level=self.settings.log_level,
        )

    def on_mount(self) -> None:
        # The first draw happens when the first timer fires, not here.
        self._timer = self.set_timer(self.settings.refresh_interval_s, self.tick)

    def on_unmount(self) -> None:
        self.stop_ticking()
        if self._log_sink_id is not None:
            logger.remove(self._log_sink_id)
            self._log_sink_id = None

    def exit(
        self,
        result: None = None,
        return_code: int = 0,
        message: RenderableType | None = None,
    ) -> None:
        """Stop ticking, then leave the app. Every way out goes through here."""
        self.stop_ticking()
        super().exit(result, return_code=return_code, message=message)

    def stop_ticking(self) -> None:
        """Cancel the pending tick. Ticks already queued become no-ops."""
        self._stopped = True
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def tick(self) -> None:
        """
        Refresh the display from the battery and arm the next tick.

        Exits quietly once the battery disappears. A read failure exits with
        return code 1 and the error as the exit message.
        """
        if self._stopped:
            return
        path = find_battery_path(self.settings)
        if path is None:
            logger.info("Battery gone, leaving display.")
            self.exit()
            return
        try:
            record = read_battery_info(path, self.settings)
        except BatteryReadError as e:
            logger.error("Battery read failed: {}", e)
            self.exit(return_code=1, message=f"Error reading battery info: {e}")
            return
        self.state = DisplayState(
            capacity=record.capacity,
            charging=record.charging,
            icon=battery_icon(record.capacity, record.charging),
        )
        self._timer = self.set_timer(self.settings.refresh_interval_s, self.tick)
        if self._line is not None:
            self._line.update(self.view())

    def view(self) -> str:
        if self.state is None:
            return ""
        return f"Battery: {self.state.icon} {self.state.capacity}%"
