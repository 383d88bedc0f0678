"""Leveled observability hooks called by the metric pipelines.

The core never writes to a console directly. It reports progress checkpoints
to an injected observer; the default forwards them to :mod:`logging`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol


class ScoreObserver(Protocol):
    def patches_extracted(self, total: int, retained: int) -> None: ...

    def grid_chosen(self, step: int, blkm: int, blkn: int) -> None: ...

    def score_computed(self, metric: str, value: float) -> None: ...


class NullObserver:
    """Discards every event."""

    def patches_extracted(self, total: int, retained: int) -> None:
        pass

    def grid_chosen(self, step: int, blkm: int, blkn: int) -> None:
        pass

    def score_computed(self, metric: str, value: float) -> None:
        pass


class LoggingObserver:
    """Forwards events to a stdlib logger at a fixed level."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.DEBUG) -> None:
        self.logger = logger or logging.getLogger("imgeval")
        self.level = level

    def patches_extracted(self, total: int, retained: int) -> None:
        self.logger.log(
            self.level, "Extracted %d patches, %d retained after variance filter", total, retained
        )

    def grid_chosen(self, step: int, blkm: int, blkn: int) -> None:
        self.logger.log(self.level, "Downsampling: step=%d, blocks=%dx%d", step, blkn, blkm)

    def score_computed(self, metric: str, value: float) -> None:
        self.logger.log(self.level, "%s score: %.4f", metric, value)


@dataclass
class RecordingObserver:
    """Keeps every event in memory as ``(name, payload)`` tuples."""

    events: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    def patches_extracted(self, total: int, retained: int) -> None:
        self.events.append(("patches_extracted", {"total": total, "retained": retained}))

    def grid_chosen(self, step: int, blkm: int, blkn: int) -> None:
        self.events.append(("grid_chosen", {"step": step, "blkm": blkm, "blkn": blkn}))

    def score_computed(self, metric: str, value: float) -> None:
        self.events.append(("score_computed", {"metric": metric, "value": value}))

    def named(self, name: str) -> list[dict[str, Any]]:
        return [payload for event, payload in self.events if event == name]


def default_observer(observer: ScoreObserver | None) -> ScoreObserver:
    return observer if observer is not None else LoggingObserver()
