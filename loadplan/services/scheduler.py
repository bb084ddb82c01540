import logging
from datetime import timedelta

from loadplan.domain.errors import DateOverflowError
from loadplan.services.allocation import (
    calculate_resource_allocations,
    calculate_resource_load,
)
from loadplan.utils.graph import build_dependency_graph, task_order

logger = logging.getLogger(__name__)


class ProjectScheduler:
    """
    Resolves the actual start and end dates of every task in a project.

    One computation pass aggregates the resource allocations, checks the
    dependency graph, walks the tasks in topological order and stores each
    task's actual dates. All queries read from these tables, so they are free
    of side effects and can be called any number of times.
    """

    def __init__(self, project):
        self.project = project
        self.task_graph = None
        self.task_order = []
        self.allocated_resources = {}  # {task_id: sum of allocation loads}
        self.start_dates = {}  # {task_id: actual start date}
        self.end_dates = {}  # {task_id: actual end date}
        self._calculated = False

    def calculate(self):
        """
        Compute the schedule of the whole project from scratch.

        Raises:
            MissingReferenceError: If a predecessor or allocation is dangling
            CyclicDependencyError: If the predecessors form a cycle
            DateOverflowError: If a date leaves the supported range
        """
        self._reset()

        project = self.project
        project.validate()
        # Tasks are only annotated once the graph is known to be acyclic
        graph = build_dependency_graph(project.tasks)
        allocated = calculate_resource_allocations(project)
        order = task_order(graph)

        start_dates = {}
        end_dates = {}
        for task_id in order:
            task = graph.nodes[task_id]["task"]
            start, end = self._resolve_task(task, allocated[task_id], end_dates)
            start_dates[task_id] = start
            end_dates[task_id] = end

        self.task_graph = graph
        self.task_order = order
        self.allocated_resources = allocated
        self.start_dates = start_dates
        self.end_dates = end_dates
        self._calculated = True

        logger.info(
            f"Scheduled {len(order)} tasks, "
            f"{self.project_start_date()} to {self.project_end_date()}"
        )
        return self

    def recalculate(self):
        """Discard the current schedule and compute it again."""
        return self.calculate()

    def _reset(self):
        self.task_graph = None
        self.task_order = []
        self.allocated_resources = {}
        self.start_dates = {}
        self.end_dates = {}
        self._calculated = False

    def _resolve_task(self, task, allocated, end_dates):
        output = self.project.generic_resource_output

        if not task.predecessors:
            return task.earliest_start_date, task.end_date(allocated, output)

        # Predecessors can push the start later, never earlier
        start = max(
            [task.earliest_start_date]
            + [end_dates[pred_id] for pred_id in task.predecessors]
        )
        span = task.calendar_days(allocated, output)
        try:
            end = start + timedelta(days=span)
        except OverflowError:
            raise DateOverflowError(
                f"Task {task.id}: end date {span} days after {start.isoformat()} "
                f"is out of range"
            )
        logger.debug(f"Task {task.id} resolved to {start} - {end}")
        return start, end

    def _ensure_calculated(self):
        if not self._calculated:
            self.calculate()

    def _task(self, task_id):
        self._ensure_calculated()
        # Fails with MissingReferenceError for unknown IDs
        task = self.project.get_task_by_id(task_id)
        if task_id not in self.start_dates:
            # Added to the project after the last pass
            self.calculate()
        return task

    def actual_start_date(self, task_id):
        """Return the start date of a task after its predecessors are resolved."""
        self._task(task_id)
        return self.start_dates[task_id]

    def actual_end_date(self, task_id):
        """Return the end date of a task after its predecessors are resolved."""
        self._task(task_id)
        return self.end_dates[task_id]

    def actual_remaining_work_days(self, task_id, reference_date):
        """
        Work days a task still needs at the reference date, counted from its
        actual start date.
        """
        task = self._task(task_id)
        return task.days_remaining_at(
            reference_date,
            self.start_dates[task_id],
            self.allocated_resources[task_id],
            self.project.generic_resource_output,
        )

    def actual_remaining_calendar_days(self, task_id, reference_date):
        """
        Calendar days left on a task at the reference date.

        Returns:
            int: 0 once the task is over, the days from the reference date to
            the end while it runs, and its full span before it starts
        """
        self._task(task_id)
        start = self.start_dates[task_id]
        end = self.end_dates[task_id]

        if reference_date > end:
            return 0
        if start < reference_date:
            return (end - reference_date).days
        return (end - start).days

    def calculate_resource_load(self, resource_id, day):
        """Return the summed load of a resource on a given day."""
        self._ensure_calculated()
        return calculate_resource_load(self.project, self, resource_id, day)

    def get_resource_by_id(self, resource_id):
        return self.project.get_resource_by_id(resource_id)

    def get_resource_allocations_for_task(self, task_id):
        return self.project.get_resource_allocations_for_task(task_id)

    def project_start_date(self):
        """Return the earliest actual start date of all tasks."""
        self._ensure_calculated()
        return min(self.start_dates.values()) if self.start_dates else None

    def project_end_date(self):
        """Return the latest actual end date of all tasks."""
        self._ensure_calculated()
        return max(self.end_dates.values()) if self.end_dates else None
