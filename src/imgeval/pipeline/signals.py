"""Graceful Ctrl+C / SIGTERM handling for batch scoring."""

from __future__ import annotations

import signal
import threading
from types import FrameType
from typing import Any

_HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownHandler:
    """First signal asks the batch to stop after in-flight pairs; second one aborts."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._previous: dict[int, Any] = {}

    @property
    def is_shutting_down(self) -> bool:
        return self._event.is_set()

    def request_shutdown(self) -> None:
        self._event.set()

    def _handle(self, signum: int, frame: FrameType | None) -> None:
        if self._event.is_set():
            for sig in _HANDLED_SIGNALS:
                signal.signal(sig, signal.SIG_DFL)
            raise KeyboardInterrupt
        self._event.set()

    def install(self) -> None:
        # signal handlers can only be set from the main thread
        if threading.current_thread() is not threading.main_thread():
            return
        for sig in _HANDLED_SIGNALS:
            self._previous[sig] = signal.getsignal(sig)
            signal.signal(sig, self._handle)

    def uninstall(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            return
        for sig, previous in self._previous.items():
            if previous is not None:
                signal.signal(sig, previous)
        self._previous.clear()

    def __enter__(self) -> ShutdownHandler:
        self.install()
        return self

    def __exit__(self, *exc: object) -> None:
        self.uninstall()


def worker_init() -> None:
    """Worker process initializer: ignore SIGINT so the parent controls shutdown."""
    signal.signal(signal.SIGINT, signal.SIG_IGN)
