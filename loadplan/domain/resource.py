import math
from typing import Dict, Any

from loadplan.domain.errors import MalformedInputError


class ResourceError(MalformedInputError):
    """Exception raised for invalid resources or allocations."""

    pass


def _is_id(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value):
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return False


class Resource:
    """
    Represents a person or team that can be allocated to tasks.

    ``output`` is the nominal daily productivity of the resource. Scheduling
    uses the project-wide generic resource output instead.
    """

    def __init__(self, id, label, output=0.0):
        if not _is_id(id):
            raise ResourceError(f"Resource ID must be an integer, got {id!r}")
        self.id = id

        if not isinstance(label, str):
            raise ResourceError(f"Resource {id}: label must be a string")
        self.label = label

        if not _is_number(output) or output < 0:
            raise ResourceError(f"Resource {id}: output must be a non-negative number")
        self.output = float(output)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Resource":
        if not isinstance(data, dict):
            raise ResourceError(
                f"Resource record must be an object, got {type(data).__name__}"
            )
        if "id" not in data:
            raise ResourceError("Resource record is missing field id")
        return cls(
            id=data["id"],
            label=data.get("label", ""),
            output=data.get("output", 0.0),
        )

    def __repr__(self):
        return f"Resource(id={self.id}, label={self.label!r}, output={self.output})"


class Allocation:
    """
    Fractional commitment of one resource to one task.

    A load of 0.5 means the resource works half-time on the task for the
    task's entire active span.
    """

    def __init__(self, task_id, resource_id, load):
        if not _is_id(task_id):
            raise ResourceError(f"Allocation task ID must be an integer, got {task_id!r}")
        if not _is_id(resource_id):
            raise ResourceError(
                f"Allocation resource ID must be an integer, got {resource_id!r}"
            )
        if not _is_number(load) or load < 0:
            raise ResourceError(
                f"Allocation of resource {resource_id} to task {task_id}: "
                f"load must be a non-negative number"
            )
        self.task_id = task_id
        self.resource_id = resource_id
        self.load = float(load)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Allocation":
        """
        Create an allocation from a dataset record.

        Accepts both ``taskid``/``resourceid`` and ``task_id``/``resource_id``.
        """
        if not isinstance(data, dict):
            raise ResourceError(
                f"Allocation record must be an object, got {type(data).__name__}"
            )
        task_id = data.get("taskid", data.get("task_id"))
        resource_id = data.get("resourceid", data.get("resource_id"))
        if task_id is None or resource_id is None or "load" not in data:
            raise ResourceError(
                f"Allocation record {data!r} needs a task id, a resource id and a load"
            )
        return cls(task_id=task_id, resource_id=resource_id, load=data["load"])

    def __repr__(self):
        return (
            f"Allocation(task_id={self.task_id}, resource_id={self.resource_id}, "
            f"load={self.load})"
        )
