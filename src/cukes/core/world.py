from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class World:
    """State shared by the steps of a single scenario run.

    A fresh instance backs every scenario and every example row of an outline.
    """

    thing: bool = False
    last_thing: str = ""
    outcome: Optional[str] = None
    visited: List[str] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)

    def bump(self, name: str, by: int = 1) -> int:
        self.counts[name] = self.counts.get(name, 0) + by
        return self.counts[name]
