import threading
from collections.abc import Callable

from flowboard.logging.logger import Log


class PeriodicTask:
    """Runs an action now and then every ``interval_seconds`` until cancelled.

    A failing run is logged and the schedule continues. Cancelling stops
    further runs; a run already in progress finishes first.
    """

    def __init__(
        self,
        interval_seconds: float,
        action: Callable[[], None],
        name: str = "periodic-task",
    ) -> None:
        self._interval = interval_seconds
        self._action = action
        self._name = name
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()

    def start(self) -> None:
        """Run the schedule on a daemon thread."""
        if self._thread is not None:
            raise RuntimeError(f"{self._name} already started")
        self._thread = threading.Thread(target=self.run, name=self._name, daemon=True)
        self._thread.start()

    def run(self, max_runs: int | None = None) -> None:
        """Run the schedule in the current thread.

        If max_runs is set, stop after that many runs (for testing).
        """
        Log.debug(f"{self._name} started, interval {self._interval}s")
        runs = 0
        while not self._stop.is_set():
            self._run_once()
            runs += 1
            if max_runs is not None and runs >= max_runs:
                break
            self._stop.wait(self._interval)
        Log.debug(f"{self._name} stopped after {runs} run(s)")

    def cancel(self, timeout: float | None = None) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def __enter__(self) -> "PeriodicTask":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()

    def _run_once(self) -> None:
        try:
            self._action()
        except Exception:
            Log.exception(f"{self._name} run failed")
