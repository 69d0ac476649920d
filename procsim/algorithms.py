"""
algorithms.py
Discrete-time CPU scheduling disciplines:
 - FCFS (non-preemptive, arrival order)
 - SJF (non-preemptive, shortest burst)
 - SRTF (preemptive SJF, re-evaluated every tick)
 - Round Robin (FIFO ready queue, fixed quantum)
 - MLFQ (three levels, Q0/Q1 quanta, Q2 = FCFS, aging)
Each discipline clones the caller's processes, simulates one run and hands
the finished records plus timeline to report.build_result.
"""
import logging
from collections import deque

from .models import ProcessRecord, TimelineEntry
from .report import build_result

log = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2
DEFAULT_Q0 = 2
DEFAULT_Q1 = 4
AGING_THRESHOLD = 10
NUM_QUEUES = 3


class UnknownAlgorithmError(KeyError):
    pass


def clamp_quantum(value, default):
    if value is None:
        return default
    return max(1, int(value))


def by_arrival(records):
    # sorted() is stable, so equal arrivals keep input order
    return sorted(records, key=lambda p: p.arrival)


# -------------------------
# Algorithm contract
# -------------------------
class SchedulingAlgorithm:
    """
    Base class for all disciplines. The constructor takes a private copy of
    the process list; run() may be called once per instance.
    """
    identifier = None

    def __init__(self, processes):
        if not processes:
            raise ValueError("at least one process is required")
        self.processes = [ProcessRecord.from_descriptor(p) for p in processes]
        self.timeline = []
        self._ran = False

    @property
    def name(self):
        raise NotImplementedError

    def run(self):
        if self._ran:
            raise RuntimeError(f"{self.name} already ran; build a new instance per simulation")
        self._ran = True
        procs = self._simulate()
        assert all(p.finished for p in procs), "simulation ended with unfinished processes"
        return build_result(self.name, procs, self.timeline)

    def _simulate(self):
        """Run the discipline; return the records in the order used for colouring."""
        raise NotImplementedError

    def _emit(self, proc, start, end):
        assert start < end, f"empty slice for {proc.name} at {start}"
        self.timeline.append(TimelineEntry(proc.name, start, end))
        log.debug("%s: %s runs %d-%d", self.identifier, proc.name, start, end)


# -------------------------
# FCFS
# -------------------------
class FCFS(SchedulingAlgorithm):
    identifier = 'FCFS'

    @property
    def name(self):
        return "First Come First Served (FCFS)"

    def _simulate(self):
        procs = by_arrival(self.processes)
        time = 0
        for p in procs:
            if time < p.arrival:
                time = p.arrival
            p.mark_started(time)
            self._emit(p, time, time + p.burst)
            p.consume(p.burst)
            time += p.burst
            p.mark_finished(time)
        return procs


# -------------------------
# SJF
# -------------------------
class SJF(SchedulingAlgorithm):
    identifier = 'SJF'

    @property
    def name(self):
        return "Shortest Job First (SJF)"

    def _simulate(self):
        procs = self.processes
        ready = []
        time = 0
        completed = 0
        while completed < len(procs):
            for p in procs:
                if p.arrival <= time and not p.finished and p not in ready:
                    ready.append(p)
            if not ready:
                time += 1
                continue
            # min() keeps the first of equal bursts in ready-set order
            cur = min(ready, key=lambda p: p.burst)
            ready.remove(cur)
            cur.mark_started(time)
            self._emit(cur, time, time + cur.burst)
            cur.consume(cur.burst)
            time += cur.burst
            cur.mark_finished(time)
            completed += 1
        return procs


# -------------------------
# SRTF
# -------------------------
class SRTF(SchedulingAlgorithm):
    identifier = 'SRTF'

    @property
    def name(self):
        return "Shortest Remaining Time First (SRTF)"

    def _simulate(self):
        procs = self.processes
        time = 0
        completed = 0
        current = None
        current_start = 0
        while completed < len(procs):
            shortest = None
            for p in procs:
                if p.arrival <= time and p.remaining > 0:
                    if shortest is None or p.remaining < shortest.remaining:
                        shortest = p
            if shortest is None:
                if current is not None:
                    self._emit(current, current_start, time)
                    current = None
                time += 1
                continue
            if current is not shortest:
                if current is not None:
                    log.debug("SRTF: %s preempts %s at %d", shortest.name, current.name, time)
                    self._emit(current, current_start, time)
                current = shortest
                current_start = time
                current.mark_started(time)
            current.consume(1)
            time += 1
            if current.remaining == 0:
                current.mark_finished(time)
                self._emit(current, current_start, time)
                current = None
                completed += 1
        return procs


# -------------------------
# Round Robin
# -------------------------
class RoundRobin(SchedulingAlgorithm):
    identifier = 'RoundRobin'

    def __init__(self, processes, quantum=None):
        super().__init__(processes)
        self.quantum = clamp_quantum(quantum, DEFAULT_QUANTUM)

    @property
    def name(self):
        return f"Round Robin (Q={self.quantum})"

    def _simulate(self):
        procs = by_arrival(self.processes)
        n = len(procs)
        q = deque()
        time = 0
        idx = 0
        while True:
            while idx < n and procs[idx].arrival <= time:
                q.append(procs[idx])
                idx += 1
            if not q:
                if idx < n:
                    log.debug("RR: idle until %d", procs[idx].arrival)
                    time = procs[idx].arrival
                    continue
                break
            p = q.popleft()
            p.mark_started(time)
            exec_time = min(self.quantum, p.remaining)
            self._emit(p, time, time + exec_time)
            p.consume(exec_time)
            time += exec_time
            # arrivals during the slice queue ahead of the preempted process
            while idx < n and procs[idx].arrival <= time:
                q.append(procs[idx])
                idx += 1
            if p.remaining > 0:
                q.append(p)
            else:
                p.mark_finished(time)
        return procs


# -------------------------
# MLFQ
# -------------------------
class _MlfqEntry:
    __slots__ = ('proc', 'level', 'enter_time')

    def __init__(self, proc, enter_time):
        self.proc = proc
        self.level = 0
        self.enter_time = enter_time


class MLFQ(SchedulingAlgorithm):
    """
    Three FIFO levels. Level 0 and 1 dispatch for q0/q1 time units, level 2
    runs to completion. A slice that uses the whole quantum demotes the
    process; a shorter slice re-queues it on the same level and keeps its
    enter time. Entries that waited more than AGING_THRESHOLD in
    level 1 or 2 while a higher level holds work move up one level.
    """
    identifier = 'MLFQ'

    def __init__(self, processes, q0=None, q1=None):
        super().__init__(processes)
        self.q0 = clamp_quantum(q0, DEFAULT_Q0)
        self.q1 = clamp_quantum(q1, DEFAULT_Q1)
        self.quanta = (self.q0, self.q1, None)
        self.level_trace = []

    @property
    def name(self):
        return f"MLFQ [Q0={self.q0}, Q1={self.q1}, Q2=FCFS]"

    def _simulate(self):
        procs = by_arrival(self.processes)
        pending = [_MlfqEntry(p, p.arrival) for p in procs]
        queues = [deque() for _ in range(NUM_QUEUES)]
        n = len(pending)
        time = 0
        admitted = 0
        completed = 0

        def admit():
            nonlocal admitted
            while admitted < n and pending[admitted].proc.arrival <= time:
                entry = pending[admitted]
                entry.enter_time = time
                queues[0].append(entry)
                admitted += 1

        while completed < n:
            admit()
            self._apply_aging(queues, time)

            level = next((i for i in range(NUM_QUEUES) if queues[i]), None)
            if level is None:
                if admitted < n:
                    time = pending[admitted].proc.arrival
                    log.debug("MLFQ: idle until %d", time)
                    continue
                break

            entry = queues[level].popleft()
            p = entry.proc
            p.mark_started(time)
            quantum = self.quanta[level]
            run_time = p.remaining if quantum is None else min(quantum, p.remaining)
            self._emit(p, time, time + run_time)
            self.level_trace.append((p.name, level, time, time + run_time))
            p.consume(run_time)
            time += run_time
            admit()

            if p.remaining == 0:
                p.mark_finished(time)
                completed += 1
            elif run_time == quantum and level < NUM_QUEUES - 1:
                entry.level = level + 1
                entry.enter_time = time
                queues[entry.level].append(entry)
                log.debug("MLFQ: %s demoted to Q%d at %d", p.name, entry.level, time)
            else:
                queues[level].append(entry)
        return procs

    def _apply_aging(self, queues, now):
        for level in range(1, NUM_QUEUES):
            if not any(queues[i] for i in range(level)):
                continue
            promoted = [e for e in queues[level] if now - e.enter_time > AGING_THRESHOLD]
            for entry in promoted:
                queues[level].remove(entry)
                entry.level = level - 1
                entry.enter_time = now
                queues[level - 1].append(entry)
                log.debug("MLFQ: %s aged up to Q%d at %d", entry.proc.name, entry.level, now)


# -------------------------
# Dispatch
# -------------------------
ALGORITHMS = {
    'FCFS': FCFS,
    'SJF': SJF,
    'SRTF': SRTF,
    'RoundRobin': RoundRobin,
    'MLFQ': MLFQ,
}

ALIASES = {
    'fcfs': 'FCFS',
    'sjf': 'SJF',
    'srtf': 'SRTF',
    'rr': 'RoundRobin',
    'roundrobin': 'RoundRobin',
    'mlfq': 'MLFQ',
}


def get_algorithm(identifier):
    key = ALIASES.get(str(identifier).strip().lower())
    if key is None:
        raise UnknownAlgorithmError(
            f"unknown algorithm {identifier!r}; choose one of {', '.join(ALGORITHMS)}")
    return ALGORITHMS[key]


def create(identifier, processes, quantum=None, q0=None, q1=None):
    cls = get_algorithm(identifier)
    if cls is RoundRobin:
        return cls(processes, quantum)
    elif cls is MLFQ:
        return cls(processes, q0, q1)
    return cls(processes)


def simulate(identifier, processes, quantum=None, q0=None, q1=None):
    """Build the selected discipline on a fresh clone of processes and run it once."""
    return create(identifier, processes, quantum=quantum, q0=q0, q1=q1).run()
