"""
The scored pair produced by the engine.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List

CSV_HEADER = ["metric", "s1", "s2", "score"]


@dataclass(frozen=True)
class Record:
    metric: str
    s1: str
    s2: str
    score: float

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

    def csv_row(self) -> List[str]:
        # fixed-point, six decimals
        return [self.metric, self.s1, self.s2, f"{self.score:f}"]
