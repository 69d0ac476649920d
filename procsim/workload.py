"""
workload.py
Caller-side input handling: validation, CSV / interactive entry and the
sample workload. The engine assumes everything reaching it passed
validate_processes().
"""
import csv
import logging

from .models import ProcessDescriptor

log = logging.getLogger(__name__)


class ProcessValidationError(ValueError):
    """Raised when caller input cannot be turned into valid processes."""
    pass


class ProcessNamer:
    """Hands out default names P1, P2, ... for one input session."""

    def __init__(self, start=1):
        self.counter = start

    def peek(self):
        return f"P{self.counter}"

    def next_name(self):
        name = self.peek()
        self.counter += 1
        return name

    def reset(self, start=1):
        self.counter = start


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes):
    """
    Check a list of descriptors before handing it to a discipline.

    :raises ProcessValidationError: on the first problem found
    """
    if not processes:
        raise ProcessValidationError("Add at least one process")
    seen = set()
    for p in processes:
        if not isinstance(p.name, str) or not p.name.strip():
            raise ProcessValidationError("Process name must be a non-empty string")
        if p.name in seen:
            raise ProcessValidationError(f"Duplicate process name: {p.name}")
        seen.add(p.name)
        if not _is_int(p.arrival) or p.arrival < 0:
            raise ProcessValidationError(f"{p.name}: arrival must be an integer >= 0, got {p.arrival!r}")
        if not _is_int(p.burst) or p.burst <= 0:
            raise ProcessValidationError(f"{p.name}: burst must be an integer > 0, got {p.burst!r}")
    return processes


def make_process(name, arrival, burst, namer=None):
    """Build a descriptor from raw text fields the way the entry form does."""
    name = (name or '').strip()
    if not name:
        if namer is None:
            raise ProcessValidationError("Process name is required")
        name = namer.peek()
    arrival = (arrival or '').strip() or '0'
    burst = (burst or '').strip()
    if not burst:
        raise ProcessValidationError(f"{name}: burst time is required")
    try:
        at = int(arrival)
        bt = int(burst)
    except ValueError:
        raise ProcessValidationError(f"{name}: arrival and burst must be integers")
    if at < 0:
        raise ProcessValidationError(f"{name}: arrival must be >= 0")
    if bt <= 0:
        raise ProcessValidationError(f"{name}: burst must be > 0")
    if namer is not None:
        # the counter tracks added rows, named or not
        namer.next_name()
    return ProcessDescriptor(name, at, bt)


def sample_processes():
    return [
        ProcessDescriptor('P1', 0, 5),
        ProcessDescriptor('P2', 1, 3),
        ProcessDescriptor('P3', 2, 8),
        ProcessDescriptor('P4', 3, 6),
        ProcessDescriptor('P5', 4, 2),
    ]


# -------------------------
# CSV and interactive input
# -------------------------
def parse_csv(filename, namer=None):
    """
    Read processes from a CSV file. Each row is either name,arrival,burst or
    arrival,burst (unnamed rows get P1, P2, ...). Blank lines and lines
    starting with '#' are skipped; so is a header row.
    """
    namer = namer or ProcessNamer()
    procs = []
    first_row = True
    with open(filename, newline='') as f:
        rdr = csv.reader(f)
        for line_no, row in enumerate(rdr, start=1):
            row = [c.strip() for c in row]
            if not any(row) or row[0].startswith('#'):
                continue
            if len(row) == 2:
                name, at, bt = '', row[0], row[1]
            elif len(row) >= 3:
                name, at, bt = row[0], row[1], row[2]
            else:
                raise ProcessValidationError(
                    f"Line {line_no}: expected name,arrival,burst or arrival,burst")
            if first_row:
                first_row = False
                if not at.lstrip('-').isdigit() and not bt.lstrip('-').isdigit():
                    log.debug("skipping header row %r", row)
                    continue
            try:
                procs.append(make_process(name, at, bt, namer))
            except ProcessValidationError as e:
                raise ProcessValidationError(f"Line {line_no}: {e}")
    log.info("read %d processes from %s", len(procs), filename)
    return validate_processes(procs)


def input_interactive(namer=None, prompt=input):
    namer = namer or ProcessNamer()
    while True:
        try:
            n = int(prompt("Number of processes: ").strip())
            if n <= 0:
                print("Number must be positive.")
                continue
            break
        except ValueError:
            print("Please enter a valid integer.")
    procs = []
    while len(procs) < n:
        default = namer.peek()
        name = prompt(f"Name (default {default}): ")
        at = prompt(f"{name.strip() or default} arrival (default 0): ")
        bt = prompt(f"{name.strip() or default} burst: ")
        try:
            procs.append(make_process(name, at, bt, namer))
        except ProcessValidationError as e:
            print(e)
    return validate_processes(procs)
