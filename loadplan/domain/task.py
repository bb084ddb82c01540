import math
from datetime import date
from typing import List, Dict, Optional, Any

from loadplan.config import GENERIC_RESOURCE_OUTPUT
from loadplan.domain.errors import MalformedInputError
from loadplan.utils.calendar import add_work_days, work_days_remaining_at


class TaskError(MalformedInputError):
    """Exception raised for errors in the Task class."""

    pass


def _is_number(value):
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return False


class Task:
    """
    Represents a unit of work in a project.

    The duration of a task is expressed in effort units, not in days. How many
    working days the task occupies depends on its work force: the allocated
    resources when there are any, the planned resources otherwise.
    """

    def __init__(
        self,
        id: int,
        label: str,
        duration: float,
        earliest_start_date: date,
        planned_resources: float = 1.0,
        predecessors: Optional[List[int]] = None,
    ):
        """
        Initialize a new Task.

        Args:
            id: Unique identifier for the task
            label: Display name of the task
            duration: Total effort in effort units
            earliest_start_date: The task never starts before this date
            planned_resources: Nominal full-time equivalents working on the task
            predecessors: IDs of tasks that must finish before this one starts

        Raises:
            TaskError: If any input validation fails
        """
        if not isinstance(id, int) or isinstance(id, bool):
            raise TaskError(f"Task ID must be an integer, got {id!r}")
        self.id = id

        if not isinstance(label, str):
            raise TaskError(f"Task {id}: label must be a string")
        self.label = label

        if not _is_number(duration) or duration < 0:
            raise TaskError(f"Task {id}: duration must be a non-negative number")
        self.duration = duration

        if not isinstance(earliest_start_date, date):
            raise TaskError(f"Task {id}: earliest start date must be a date object")
        self.earliest_start_date = earliest_start_date

        if not _is_number(planned_resources) or planned_resources <= 0:
            raise TaskError(f"Task {id}: planned resources must be a positive number")
        self.planned_resources = float(planned_resources)

        # Sum of allocation loads, written by the allocation pass
        self.allocated_resources = 0.0

        self.predecessors = []
        if predecessors:
            if not isinstance(predecessors, (list, tuple, set)):
                raise TaskError(f"Task {id}: predecessors must be a list")
            for pred_id in predecessors:
                if not isinstance(pred_id, int) or isinstance(pred_id, bool):
                    raise TaskError(
                        f"Task {id}: predecessor IDs must be integers, got {pred_id!r}"
                    )
                if pred_id not in self.predecessors:
                    self.predecessors.append(pred_id)

    def set_allocated_resources(self, allocated_resources: float) -> "Task":
        """Record the resources actually allocated to this task."""
        if not _is_number(allocated_resources) or allocated_resources < 0:
            raise TaskError(
                f"Task {self.id}: allocated resources must be a non-negative number"
            )
        self.allocated_resources = float(allocated_resources)
        return self

    def work_force(
        self,
        allocated_resources: Optional[float] = None,
        resource_output: float = GENERIC_RESOURCE_OUTPUT,
    ) -> float:
        """
        Effort units delivered per working day.

        Args:
            allocated_resources: Overrides the stored allocation sum when given
            resource_output: Daily output of one full-time resource

        Returns:
            float: Daily capacity of the task
        """
        if allocated_resources is None:
            allocated_resources = self.allocated_resources
        if allocated_resources == 0:
            return self.planned_resources * resource_output
        return allocated_resources * resource_output

    def work_days(
        self,
        allocated_resources: Optional[float] = None,
        resource_output: float = GENERIC_RESOURCE_OUTPUT,
    ) -> float:
        """Return the number of working days this task needs."""
        return self.duration / self.work_force(allocated_resources, resource_output)

    def end_date(
        self,
        allocated_resources: Optional[float] = None,
        resource_output: float = GENERIC_RESOURCE_OUTPUT,
    ) -> date:
        """Return the end date when the task starts at its earliest start date."""
        return add_work_days(
            self.earliest_start_date,
            self.work_days(allocated_resources, resource_output),
        )

    def calendar_days(
        self,
        allocated_resources: Optional[float] = None,
        resource_output: float = GENERIC_RESOURCE_OUTPUT,
    ) -> int:
        """Return the number of calendar days between start and end."""
        end = self.end_date(allocated_resources, resource_output)
        return (end - self.earliest_start_date).days

    def days_remaining_at(
        self,
        reference_date: date,
        start_date: date,
        allocated_resources: Optional[float] = None,
        resource_output: float = GENERIC_RESOURCE_OUTPUT,
    ) -> int:
        """
        Return the work days still outstanding at ``reference_date`` when the
        task is started on ``start_date``.
        """
        return work_days_remaining_at(
            start_date,
            self.work_days(allocated_resources, resource_output),
            reference_date,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """
        Create a task from a dataset record.

        Args:
            data: Dictionary with id, label, duration, earliest_start_date
                (ISO string or date), planned_resources and predecessors

        Returns:
            Task: New task instance

        Raises:
            TaskError: If a field is missing or invalid
        """
        if not isinstance(data, dict):
            raise TaskError(f"Task record must be an object, got {type(data).__name__}")

        missing = [
            key
            for key in ("id", "duration", "earliest_start_date")
            if key not in data
        ]
        if missing:
            raise TaskError(
                f"Task {data.get('id', '?')}: missing field(s) {', '.join(missing)}"
            )

        start = data["earliest_start_date"]
        if isinstance(start, str):
            try:
                start = date.fromisoformat(start)
            except ValueError:
                raise TaskError(
                    f"Task {data['id']}: invalid earliest start date {start!r}"
                )

        return cls(
            id=data["id"],
            label=data.get("label", ""),
            duration=data["duration"],
            earliest_start_date=start,
            planned_resources=data.get("planned_resources", 1.0),
            predecessors=data.get("predecessors", []),
        )

    def __repr__(self) -> str:
        return (
            f"Task(id={self.id}, label={self.label!r}, duration={self.duration}, "
            f"start={self.earliest_start_date.isoformat()}, "
            f"predecessors={self.predecessors})"
        )
