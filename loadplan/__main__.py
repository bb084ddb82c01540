"""
loadplan command line
=====================

Load a project dataset, compute its schedule, print a report and save the
Gantt and resource load charts.
"""

import argparse
import logging
import sys
from datetime import date

import matplotlib.pyplot as plt

from loadplan.config import (
    DEFAULT_GANTT_FILE,
    DEFAULT_LOAD_CHART_FILE,
    GENERIC_RESOURCE_OUTPUT,
    LOAD_CHART_DAYS,
)
from loadplan.domain.errors import PlanError
from loadplan.examples.simple_project import create_sample_project
from loadplan.loader import load_project
from loadplan.services.allocation import find_overallocated_days
from loadplan.services.scheduler import ProjectScheduler
from loadplan.visualization.gantt import create_gantt_chart, create_resource_load_chart

logger = logging.getLogger("loadplan")


def _iso_date(value):
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date (YYYY-MM-DD): {value}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="loadplan",
        description="Schedule a project and chart its resource load",
    )
    parser.add_argument("project", nargs="?", help="Project dataset (JSON)")
    parser.add_argument(
        "--example", action="store_true", help="Run the built-in example project"
    )
    parser.add_argument(
        "--status-date",
        type=_iso_date,
        help="Date the charts are drawn for (default: project start)",
    )
    parser.add_argument(
        "--gantt",
        default=DEFAULT_GANTT_FILE,
        help=f"Output file for the Gantt chart (default: {DEFAULT_GANTT_FILE})",
    )
    parser.add_argument(
        "--load-chart",
        default=DEFAULT_LOAD_CHART_FILE,
        help=f"Output file for the load chart (default: {DEFAULT_LOAD_CHART_FILE})",
    )
    parser.add_argument(
        "--resource-output",
        type=float,
        default=GENERIC_RESOURCE_OUTPUT,
        help="Effort units one full-time resource delivers per day "
        f"(default: {GENERIC_RESOURCE_OUTPUT})",
    )
    parser.add_argument(
        "--horizon",
        type=int,
        default=LOAD_CHART_DAYS,
        help=f"Days covered by the load chart (default: {LOAD_CHART_DAYS})",
    )
    parser.add_argument(
        "--no-charts", action="store_true", help="Only print the schedule report"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def print_report(scheduler, status_date, horizon):
    project = scheduler.project

    print("Project Schedule Report")
    print("=======================")
    print(f"Project Start Date: {scheduler.project_start_date()}")
    print(f"Project End Date: {scheduler.project_end_date()}")
    print(f"Status Date: {status_date}")

    print("\nTasks:")
    for task in project.tasks:
        print(
            f"  Task {task.id}: {task.label} - "
            f"{scheduler.actual_start_date(task.id)} to "
            f"{scheduler.actual_end_date(task.id)}, "
            f"{scheduler.actual_remaining_work_days(task.id, status_date)} work days "
            f"remaining, FTE {task.allocated_resources:g}/{task.planned_resources:g}"
        )

    overallocated = find_overallocated_days(project, scheduler, status_date, horizon)
    if overallocated:
        print("\nOverallocated Resources:")
        for resource_id, days in overallocated.items():
            resource = scheduler.get_resource_by_id(resource_id)
            peak = max(load for _, load in days)
            print(
                f"  {resource.label}: {len(days)} day(s), first on {days[0][0]}, "
                f"peak load {peak:.0%}"
            )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.example and not args.project:
        parser.print_help()
        return 1

    try:
        if args.example:
            logger.info("Running example project")
            project = create_sample_project(
                generic_resource_output=args.resource_output
            )
        else:
            project = load_project(
                args.project, generic_resource_output=args.resource_output
            )

        scheduler = ProjectScheduler(project).calculate()
        status_date = args.status_date or scheduler.project_start_date() or date.today()

        print_report(scheduler, status_date, args.horizon)

        if not args.no_charts:
            gantt = create_gantt_chart(
                scheduler, status_date, filename=args.gantt, show=False
            )
            load_chart = create_resource_load_chart(
                scheduler,
                status_date,
                days=args.horizon,
                filename=args.load_chart,
                show=False,
            )
            plt.close(gantt)
            plt.close(load_chart)
            print(f"\nCharts saved to {args.gantt} and {args.load_chart}")
    except PlanError as e:
        logger.error(f"Cannot schedule project: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
