"""Mutable viewer state shared by the scene selector and the feed effects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from timing import TaskHandle


@dataclass
class ViewerSession:
    active_id: Optional[str] = None
    highlighted_id: Optional[str] = None
    pan_paused: bool = False
    glitch_task: Optional[TaskHandle] = None
    noise_task: Optional[TaskHandle] = None
    presentation: Any = None

    @property
    def idle(self) -> bool:
        return self.active_id is None
