import math
from typing import Dict, Any, List

from loadplan.config import GENERIC_RESOURCE_OUTPUT
from loadplan.domain.errors import MalformedInputError, MissingReferenceError
from loadplan.domain.resource import Allocation, Resource
from loadplan.domain.task import Task


class Project:
    """
    Owns the tasks, resources and allocations of a project.

    The project is the only place where IDs are resolved: every lookup of a
    task or resource by ID goes through it and fails loudly when the ID is
    unknown.
    """

    def __init__(
        self,
        tasks=None,
        resources=None,
        allocations=None,
        generic_resource_output=GENERIC_RESOURCE_OUTPUT,
    ):
        """
        Initialize a project.

        Args:
            tasks: Tasks in declaration order
            resources: Resources in declaration order
            allocations: Allocations of resources to tasks
            generic_resource_output: Effort units one full-time resource
                delivers per working day
        """
        if (
            not isinstance(generic_resource_output, (int, float))
            or isinstance(generic_resource_output, bool)
            or not math.isfinite(generic_resource_output)
            or generic_resource_output <= 0
        ):
            raise MalformedInputError(
                "Generic resource output must be a positive finite number"
            )
        self.generic_resource_output = float(generic_resource_output)

        self.tasks: List[Task] = []
        self.resources: List[Resource] = []
        self.allocations: List[Allocation] = []

        for task in tasks or []:
            self.add_task(task)
        for resource in resources or []:
            self.add_resource(resource)
        for allocation in allocations or []:
            self.add_allocation(allocation)

    def add_task(self, task):
        """Add a task to the project"""
        if any(existing.id == task.id for existing in self.tasks):
            raise MalformedInputError(f"Duplicate task ID {task.id}")
        self.tasks.append(task)
        return self

    def add_resource(self, resource):
        """Add a resource to the project"""
        if any(existing.id == resource.id for existing in self.resources):
            raise MalformedInputError(f"Duplicate resource ID {resource.id}")
        self.resources.append(resource)
        return self

    def add_allocation(self, allocation):
        """Add an allocation to the project"""
        self.allocations.append(allocation)
        return self

    def get_task_by_id(self, task_id) -> Task:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise MissingReferenceError(f"No task with ID {task_id}")

    def get_resource_by_id(self, resource_id) -> Resource:
        for resource in self.resources:
            if resource.id == resource_id:
                return resource
        raise MissingReferenceError(f"No resource with ID {resource_id}")

    def get_allocations_for_task(self, task_id) -> List[Allocation]:
        return [a for a in self.allocations if a.task_id == task_id]

    def get_allocations_for_resource(self, resource_id) -> List[Allocation]:
        return [a for a in self.allocations if a.resource_id == resource_id]

    def get_resource_allocations_for_task(self, task_id) -> float:
        """Return the sum of allocation loads for a task (0.0 if it has none)."""
        return sum(a.load for a in self.get_allocations_for_task(task_id))

    def validate(self):
        """
        Check that every cross reference in the project resolves.

        Raises:
            MissingReferenceError: If a predecessor or an allocation points to
                an unknown task or resource
        """
        task_ids = {task.id for task in self.tasks}
        resource_ids = {resource.id for resource in self.resources}

        for task in self.tasks:
            for pred_id in task.predecessors:
                if pred_id not in task_ids:
                    raise MissingReferenceError(
                        f"Task {task.id} depends on unknown task {pred_id}"
                    )

        for allocation in self.allocations:
            if allocation.task_id not in task_ids:
                raise MissingReferenceError(
                    f"Allocation of resource {allocation.resource_id} refers to "
                    f"unknown task {allocation.task_id}"
                )
            if allocation.resource_id not in resource_ids:
                raise MissingReferenceError(
                    f"Allocation to task {allocation.task_id} refers to "
                    f"unknown resource {allocation.resource_id}"
                )
        return self

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], generic_resource_output=GENERIC_RESOURCE_OUTPUT
    ) -> "Project":
        """
        Create a project from the dataset structure.

        Args:
            data: Dictionary with ``tasks``, ``resources`` and ``allocations`` lists
            generic_resource_output: Effort units per full-time resource and day

        Returns:
            Project: New project instance (not yet validated)

        Raises:
            MalformedInputError: If the structure or a record is invalid
        """
        if not isinstance(data, dict):
            raise MalformedInputError("Project data must be an object")

        for key in ("tasks", "resources", "allocations"):
            if key not in data:
                raise MalformedInputError(f"Project data is missing field {key!r}")
            if not isinstance(data[key], list):
                raise MalformedInputError(f"Project field {key!r} must be a list")

        return cls(
            tasks=[Task.from_dict(record) for record in data["tasks"]],
            resources=[Resource.from_dict(record) for record in data["resources"]],
            allocations=[
                Allocation.from_dict(record) for record in data["allocations"]
            ],
            generic_resource_output=generic_resource_output,
        )

    def __repr__(self):
        return (
            f"Project(tasks={len(self.tasks)}, resources={len(self.resources)}, "
            f"allocations={len(self.allocations)})"
        )
