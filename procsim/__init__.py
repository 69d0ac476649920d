"""CPU scheduling simulator: FCFS, SJF, SRTF, Round Robin and MLFQ."""
from .algorithms import (ALGORITHMS, FCFS, MLFQ, SJF, SRTF, RoundRobin,
                         SchedulingAlgorithm, UnknownAlgorithmError, simulate)
from .models import ProcessDescriptor, ProcessRecord, SimulationResult, TimelineEntry
from .workload import ProcessValidationError, validate_processes

__version__ = '1.0.0'
