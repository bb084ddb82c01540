import logging
from datetime import timedelta

logger = logging.getLogger(__name__)


# Upper bound of each load band and the colour used for it on the load chart
LOAD_COLORS = [
    (0.25, "#00C000"),
    (0.5, "#00FF00"),
    (0.75, "#FFFF00"),
    (1.0, "#FF0000"),
]
OVERLOAD_COLOR = "#A00000"

# Sums of fractional loads are compared with this slack
LOAD_TOLERANCE = 1e-9


def calculate_resource_allocations(project):
    """
    Store the sum of allocation loads on every task of the project.

    Running this more than once gives the same result, since each pass
    recomputes the sums from the allocation list.

    Args:
        project: The Project to annotate

    Returns:
        dict: {task_id: allocated resources}
    """
    allocated = {
        task.id: project.get_resource_allocations_for_task(task.id)
        for task in project.tasks
    }
    for task in project.tasks:
        task.set_allocated_resources(allocated[task.id])
    logger.debug(f"Allocated resources per task: {allocated}")
    return allocated


def calculate_resource_load(project, scheduler, resource_id, day):
    """
    Sum the loads of a resource over all tasks active on a given day.

    A task is active from its actual start date to its actual end date,
    both inclusive.

    Args:
        project: The Project holding the allocations
        scheduler: ProjectScheduler supplying actual start and end dates
        resource_id: ID of the resource
        day: The date to evaluate

    Returns:
        float: Total load; above 1.0 means the resource is overallocated

    Raises:
        MissingReferenceError: If an allocation refers to an unknown task
    """
    total = 0.0
    for allocation in project.get_allocations_for_resource(resource_id):
        task = project.get_task_by_id(allocation.task_id)
        start = scheduler.actual_start_date(task.id)
        end = scheduler.actual_end_date(task.id)
        if start <= day <= end:
            total += allocation.load
    return total


def resource_load_profile(project, scheduler, resource_id, start_date, days):
    """
    Daily load of a resource over a period.

    Args:
        project: The Project holding the allocations
        scheduler: ProjectScheduler supplying actual dates
        resource_id: ID of the resource
        start_date: First day of the period
        days: Number of days in the period

    Returns:
        list: [(date, load)] for each day of the period
    """
    profile = []
    for offset in range(days):
        day = start_date + timedelta(days=offset)
        profile.append(
            (day, calculate_resource_load(project, scheduler, resource_id, day))
        )
    return profile


def find_overallocated_days(project, scheduler, start_date, days):
    """
    Find the days on which resources are loaded above 1.0.

    Returns:
        dict: {resource_id: [(date, load)]} for resources with at least one
        overallocated day
    """
    overallocations = {}
    for resource in project.resources:
        over = [
            (day, load)
            for day, load in resource_load_profile(
                project, scheduler, resource.id, start_date, days
            )
            if load > 1.0 + LOAD_TOLERANCE
        ]
        if over:
            logger.warning(
                f"Resource {resource.id} ({resource.label}) is overallocated "
                f"on {len(over)} day(s), first on {over[0][0].isoformat()}"
            )
            overallocations[resource.id] = over
    return overallocations


def load_color(load):
    """Return the chart colour for a resource load."""
    for upper_bound, color in LOAD_COLORS:
        if load <= upper_bound + LOAD_TOLERANCE:
            return color
    return OVERLOAD_COLOR
