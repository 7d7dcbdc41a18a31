"""CycleToken: identifies one reload cycle so late feed completions can be ignored."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class CycleToken:
    """Handed to every fetch of a cycle; checked before any completion is applied."""

    cycle: int
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True
