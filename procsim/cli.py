"""
cli.py
Command-line front end: read processes (CSV, demo set or interactive),
run one or more disciplines, print reports, optionally plot Gantt charts
and save metrics.
Usage examples:
  procsim --demo
  procsim --input-file procs.csv --algos fcfs,srtf,rr --quantum 3
  procsim --demo --algos mlfq --q0 2 --q1 4 --save-png
"""
import argparse
import csv
import logging

import matplotlib.pyplot as plt

from .algorithms import (DEFAULT_Q0, DEFAULT_Q1, DEFAULT_QUANTUM,
                         UnknownAlgorithmError, get_algorithm, simulate)
from .plotting import plot_gantt
from .workload import (ProcessValidationError, input_interactive, parse_csv,
                       sample_processes, validate_processes)

log = logging.getLogger(__name__)

DEFAULT_ALGOS = 'fcfs,sjf,srtf,rr,mlfq'
METRICS_FIELDS = ['algorithm', 'name', 'arrival', 'burst', 'start', 'finish', 'turnaround', 'waiting']


def save_metrics_csv(results, filename):
    """results: iterable of SimulationResult"""
    with open(filename, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=METRICS_FIELDS)
        writer.writeheader()
        for result in results:
            for row in result.metrics_rows():
                writer.writerow(row)
    log.info("saved metrics CSV to %s", filename)


def run_algorithms(processes, algos, quantum=None, q0=None, q1=None,
                   plot=False, save_png=False, out=None):
    """Run each named discipline on its own clone of processes; return {identifier: result}."""
    validate_processes(processes)
    results = {}
    for algo in algos:
        key = get_algorithm(algo).identifier
        result = simulate(key, processes, quantum=quantum, q0=q0, q1=q1)
        results[key] = result
        print(result.report, file=out)
        if plot or save_png:
            savefile = f"gantt_{algo.lower()}.png" if save_png else None
            fig = plot_gantt(result, savefile=savefile, show=plot)
            if fig is not None and not plot:
                plt.close(fig)
    return results


def build_parser():
    parser = argparse.ArgumentParser(prog='procsim', description="CPU scheduling simulator")
    src = parser.add_mutually_exclusive_group()
    src.add_argument('--input-file', '-i', default=None,
                     help='CSV file with name,arrival,burst (or arrival,burst) per line')
    src.add_argument('--demo', action='store_true', help='run the sample workload')
    parser.add_argument('--algos', '-a', default=DEFAULT_ALGOS,
                        help=f"comma-separated algorithms: fcfs,sjf,srtf,rr,mlfq (default {DEFAULT_ALGOS})")
    parser.add_argument('--quantum', '-q', type=int, default=DEFAULT_QUANTUM,
                        help=f'Round Robin quantum (default {DEFAULT_QUANTUM}, values < 1 become 1)')
    parser.add_argument('--q0', type=int, default=DEFAULT_Q0, help=f'MLFQ level 0 quantum (default {DEFAULT_Q0})')
    parser.add_argument('--q1', type=int, default=DEFAULT_Q1, help=f'MLFQ level 1 quantum (default {DEFAULT_Q1})')
    parser.add_argument('--plot', action='store_true', help='show Gantt charts (matplotlib)')
    parser.add_argument('--save-png', action='store_true', help='save Gantt charts to gantt_<algo>.png')
    parser.add_argument('--metrics-csv', default=None, help='path to save per-algorithm metrics CSV')
    parser.add_argument('--verbose', '-v', action='store_true', help='log every dispatch decision')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )
    algos = [a.strip() for a in args.algos.split(',') if a.strip()]
    try:
        for algo in algos:
            get_algorithm(algo)
        if args.input_file:
            processes = parse_csv(args.input_file)
        elif args.demo:
            processes = sample_processes()
        else:
            print("No input-file and not demo => entering interactive mode.")
            processes = input_interactive()
        results = run_algorithms(processes, algos, quantum=args.quantum, q0=args.q0, q1=args.q1,
                                 plot=args.plot, save_png=args.save_png)
    except FileNotFoundError as e:
        log.error("File error: %s", e)
        return 1
    except ProcessValidationError as e:
        log.error("Process validation error: %s", e)
        return 1
    except UnknownAlgorithmError as e:
        log.error("%s", e.args[0])
        return 1
    if args.metrics_csv:
        save_metrics_csv(results.values(), args.metrics_csv)
        print(f"[io] metrics saved to {args.metrics_csv}")
    return 0

