"""
models.py
Data types shared by every scheduling discipline: the caller's process
descriptor, the per-run working record, timeline entries and the final
simulation result.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

UNSET = -1

# Gantt palette, cycled in order of first appearance
PALETTE = (
    '#e74c3c',  # red
    '#3498db',  # blue
    '#2ecc71',  # green
    '#9b59b6',  # purple
    '#f1c40f',  # yellow
    '#e67e22',  # orange
    '#1abc9c',  # teal
    '#34495e',  # dark blue
)


@dataclass(frozen=True)
class ProcessDescriptor:
    name: str
    arrival: int
    burst: int


@dataclass(eq=False)
class ProcessRecord:
    """Working copy of a descriptor, owned by one discipline run."""
    name: str
    arrival: int
    burst: int
    remaining: Optional[int] = None
    start: int = UNSET
    finish: int = UNSET

    def __post_init__(self):
        if self.remaining is None:
            self.remaining = self.burst

    @classmethod
    def from_descriptor(cls, desc):
        return cls(desc.name, desc.arrival, desc.burst)

    @property
    def finished(self):
        return self.finish != UNSET

    @property
    def turnaround(self):
        return self.finish - self.arrival

    @property
    def wait(self):
        return self.turnaround - self.burst

    def mark_started(self, time):
        # start is stamped on first dispatch only
        if self.start == UNSET:
            self.start = time

    def consume(self, amount):
        self.remaining -= amount
        assert 0 <= self.remaining <= self.burst, f"{self.name}: remaining out of range ({self.remaining})"

    def mark_finished(self, time):
        assert not self.finished, f"{self.name} finished twice"
        assert self.remaining == 0, f"{self.name} finished with {self.remaining} left"
        self.finish = time


@dataclass(frozen=True)
class TimelineEntry:
    name: str
    start: int
    end: int

    @property
    def duration(self):
        return self.end - self.start


@dataclass(frozen=True)
class SimulationResult:
    algorithm: str
    timeline: Tuple[TimelineEntry, ...]
    processes: Tuple[ProcessRecord, ...]
    report: str
    colors: Dict[str, str] = field(default_factory=dict)
    average_wait: float = 0.0
    average_turnaround: float = 0.0

    def metrics_rows(self) -> List[dict]:
        rows = []
        for p in self.processes:
            rows.append({
                'algorithm': self.algorithm,
                'name': p.name,
                'arrival': p.arrival,
                'burst': p.burst,
                'start': p.start,
                'finish': p.finish,
                'turnaround': p.turnaround,
                'waiting': p.wait,
            })
        return rows
