import logging
from datetime import date

import matplotlib.pyplot as plt
from matplotlib.patches import Patch

from loadplan.config import CHART_QUARTERS, LOAD_CHART_DAYS
from loadplan.services.allocation import (
    LOAD_COLORS,
    OVERLOAD_COLOR,
    load_color,
    resource_load_profile,
)
from loadplan.utils.calendar import next_quarter

logger = logging.getLogger(__name__)

BAR_COLOR = "#A0A0CC"
BAR_EDGE_COLOR = "#7979CC"


def _day_offset(status_date, day):
    """Days from the status date to ``day``, clamped at zero."""
    return max(0, (day - status_date).days)


def _draw_quarter_lines(ax, status_date, quarters=CHART_QUARTERS, limit=None):
    """Draw a dashed line with a date label at each upcoming quarter start."""
    quarter_start = next_quarter(status_date)
    for _ in range(quarters):
        x = _day_offset(status_date, quarter_start)
        if limit is not None and x > limit:
            break
        ax.axvline(x=x, color="black", linestyle="--", linewidth=0.8, alpha=0.5)
        ax.text(
            x,
            1.01,
            quarter_start.isoformat(),
            transform=ax.get_xaxis_transform(),
            ha="center",
            va="bottom",
            fontsize=8,
        )
        quarter_start = next_quarter(quarter_start)


def _allocation_label(scheduler, task):
    """Format the resources allocated to a task, e.g. "Alice:50%, FTE:0.5/1.0"."""
    parts = []
    for allocation in scheduler.project.get_allocations_for_task(task.id):
        resource = scheduler.get_resource_by_id(allocation.resource_id)
        parts.append(f"{resource.label}:{allocation.load * 100:.0f}%")
    allocated = scheduler.get_resource_allocations_for_task(task.id)
    parts.append(f"FTE:{allocated:g}/{task.planned_resources:g}")
    return ", ".join(parts)


def create_gantt_chart(scheduler, status_date: date, filename=None, show=True):
    """
    Create a Gantt chart of the work remaining at the status date.

    Tasks that are finished by the status date are left out. Each bar starts
    at the later of the task's actual start and the status date and is as long
    as the calendar days the task still has.

    Args:
        scheduler: The ProjectScheduler instance
        status_date: Date the chart is drawn for
        filename: Optional filename to save the chart
        show: Whether to display the chart (default: True)

    Returns:
        The matplotlib figure
    """
    project = scheduler.project

    fig, ax = plt.subplots(figsize=(14, 8))

    # {task_id: (row, bar start, bar end)}
    bars = {}
    row_labels = []

    for task in project.tasks:
        days = scheduler.actual_remaining_calendar_days(task.id, status_date)
        if days <= 0:
            continue

        row = len(row_labels)
        start = _day_offset(status_date, scheduler.actual_start_date(task.id))
        work_days = scheduler.actual_remaining_work_days(task.id, status_date)

        logger.debug(
            f"Rendering task {task.id}, start {scheduler.actual_start_date(task.id)} "
            f"end {scheduler.actual_end_date(task.id)}"
        )

        ax.barh(
            row,
            days,
            left=start,
            height=0.6,
            color=BAR_COLOR,
            edgecolor=BAR_EDGE_COLOR,
        )
        ax.text(
            start + days + 1,
            row,
            _allocation_label(scheduler, task),
            ha="left",
            va="center",
            fontsize=8,
        )

        row_labels.append(
            f"{task.label}, {work_days} days, {task.planned_resources:g} FTE"
        )
        bars[task.id] = (row, start, start + days)

    # Dependency arrows from the end of each predecessor to the start of the task
    for task in project.tasks:
        if task.id not in bars:
            continue
        row, start, _ = bars[task.id]
        for pred_id in task.predecessors:
            if pred_id not in bars:
                continue
            pred_row, _, pred_end = bars[pred_id]
            ax.annotate(
                "",
                xy=(start, row),
                xytext=(pred_end, pred_row),
                arrowprops=dict(arrowstyle="->", color="blue", linewidth=1),
            )

    ax.set_yticks(range(len(row_labels)))
    ax.set_yticklabels(row_labels, fontsize=8)
    ax.invert_yaxis()

    _draw_quarter_lines(ax, status_date)

    ax.set_title(f"Project Schedule (Status as of {status_date.isoformat()})")
    ax.set_xlabel("Days from status date")
    ax.grid(axis="x", alpha=0.3)

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=300, bbox_inches="tight")

    if show:
        plt.show()

    return fig


def create_resource_load_chart(
    scheduler, status_date: date, days=LOAD_CHART_DAYS, filename=None, show=True
):
    """
    Create a chart of the daily load of every resource.

    Each resource gets one row with one cell per day, coloured by how heavily
    the resource is loaded on that day.

    Args:
        scheduler: The ProjectScheduler instance
        status_date: First day of the chart
        days: Number of days to show
        filename: Optional filename to save the chart
        show: Whether to display the chart (default: True)

    Returns:
        The matplotlib figure
    """
    project = scheduler.project

    fig, ax = plt.subplots(figsize=(14, 8))

    for row, resource in enumerate(project.resources):
        profile = resource_load_profile(
            project, scheduler, resource.id, status_date, days
        )
        ax.barh(
            [row] * len(profile),
            [1] * len(profile),
            left=list(range(len(profile))),
            height=0.8,
            color=[load_color(load) for _, load in profile],
        )

    ax.set_yticks(range(len(project.resources)))
    ax.set_yticklabels([resource.label for resource in project.resources])
    ax.invert_yaxis()
    ax.set_xlim(0, days)

    _draw_quarter_lines(ax, status_date, limit=days)

    ax.set_title(f"Resource Load (from {status_date.isoformat()})")
    ax.set_xlabel("Days from status date")

    legend_elements = []
    lower_bound = 0.0
    for upper_bound, color in LOAD_COLORS:
        legend_elements.append(
            Patch(facecolor=color, label=f"{lower_bound:.0%}-{upper_bound:.0%}")
        )
        lower_bound = upper_bound
    legend_elements.append(Patch(facecolor=OVERLOAD_COLOR, label="Overallocated"))
    ax.legend(handles=legend_elements, loc="upper right")

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=300, bbox_inches="tight")

    if show:
        plt.show()

    return fig
