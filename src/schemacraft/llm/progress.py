"""Interval-driven progress notifications for calls without real streaming."""

from __future__ import annotations

import logging
import threading

from schemacraft.models.generation import Progress, ProgressCallback

logger = logging.getLogger(__name__)


class ProgressTicker:
    """Emit increasing progress on a background thread until stopped.

    Percentages climb by ``step`` every ``interval_seconds`` and never pass
    ``cap``. Once :meth:`stop` returns no further notification is delivered.
    """

    def __init__(
        self,
        on_progress: ProgressCallback | None,
        *,
        interval_seconds: float,
        step: float = 5.0,
        cap: float = 95.0,
        step_name: str = "ai_processing",
        message: str = "AI is generating your schema...",
    ) -> None:
        self._on_progress = on_progress
        self._interval = interval_seconds
        self._step = step
        self._cap = cap
        self._step_name = step_name
        self._message = message
        self._percent = 0.0
        self._stopped = threading.Event()
        self._lock = threading.RLock()
        self._thread: threading.Thread | None = None

    @property
    def last_percent(self) -> float:
        return self._percent

    def start(self) -> None:
        if self._on_progress is None or self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run, name="schemacraft-progress", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        self._stopped.set()
        with self._lock:
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            with self._lock:
                if self._stopped.is_set() or self._percent >= self._cap:
                    continue
                self._percent = min(self._cap, self._percent + self._step)
                progress = Progress(
                    step_name=self._step_name,
                    percent_complete=self._percent,
                    message=self._message,
                )
                try:
                    self._on_progress(progress)
                except Exception:
                    logger.exception("Progress callback failed; ticker stopped.")
                    self._stopped.set()

    def __enter__(self) -> ProgressTicker:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
