"""
report.py
Turns a discipline's finished records and timeline into the caller-facing
SimulationResult: per-process wait/turnaround, averages, colour
assignment and the printable statistics table.
"""
import logging

from .models import PALETTE, SimulationResult

log = logging.getLogger(__name__)

RULE_WIDTH = 39
TABLE_WIDTH = 55


# -------------------------
# Utilities
# -------------------------
def mean_or_zero(lst):
    return sum(lst) / len(lst) if lst else 0.0


def compute_metrics(records):
    """Return (turnaround, wait) dicts keyed by process name."""
    tat = {p.name: p.turnaround for p in records}
    wt = {p.name: tat[p.name] - p.burst for p in records}
    return tat, wt


def assign_colors(records, palette=PALETTE):
    colors = {}
    for p in records:
        if p.name not in colors:
            colors[p.name] = palette[len(colors) % len(palette)]
    return colors


def format_report(algorithm, records, average_wait, average_turnaround):
    """Fixed-width statistics table for records already sorted for display."""
    lines = [
        '=' * RULE_WIDTH,
        f"  {algorithm}",
        '=' * RULE_WIDTH,
        '',
        f"{'Name':<8} {'Arrival':<8} {'Burst':<8} {'Finish':<8} {'Wait':<8} {'Turnaround':<10}",
        '-' * TABLE_WIDTH,
    ]
    for p in records:
        lines.append(f"{p.name:<8} {p.arrival:<8d} {p.burst:<8d} {p.finish:<8d} {p.wait:<8d} {p.turnaround:<10d}")
    lines.append('-' * TABLE_WIDTH)
    lines.append('')
    lines.append(f"Average Waiting Time:    {average_wait:.2f}")
    lines.append(f"Average Turnaround Time: {average_turnaround:.2f}")
    return '\n'.join(lines) + '\n'


def build_result(algorithm, records, timeline):
    """
    records: the discipline's working records, all finished
    timeline: TimelineEntry list in dispatch order
    """
    assert records, "no processes to report on"
    for p in records:
        assert p.finished and p.remaining == 0, f"{p.name} did not finish"
        assert p.wait >= 0, f"{p.name} has negative waiting time {p.wait}"
    for prev, cur in zip(timeline, timeline[1:]):
        assert prev.end <= cur.start, f"overlapping timeline entries {prev} / {cur}"

    colors = assign_colors(records)
    ordered = sorted(records, key=lambda p: p.arrival)
    tat, wt = compute_metrics(ordered)
    avg_wt = mean_or_zero(list(wt.values()))
    avg_tat = mean_or_zero(list(tat.values()))
    log.info("%s finished at t=%d: avg wait %.2f, avg turnaround %.2f",
             algorithm, max(p.finish for p in ordered), avg_wt, avg_tat)
    return SimulationResult(
        algorithm=algorithm,
        timeline=tuple(timeline),
        processes=tuple(ordered),
        report=format_report(algorithm, ordered, avg_wt, avg_tat),
        colors=colors,
        average_wait=avg_wt,
        average_turnaround=avg_tat,
    )
