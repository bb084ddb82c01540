from datetime import date

from loadplan.config import GENERIC_RESOURCE_OUTPUT
from loadplan.domain.project import Project
from loadplan.domain.resource import Allocation, Resource
from loadplan.domain.task import Task


def create_sample_project(generic_resource_output=GENERIC_RESOURCE_OUTPUT):
    """
    Build a small software project with five tasks and three people.

    The two development tasks overlap and both need Carol, who is
    overallocated while they run in parallel.
    """
    tasks = [
        Task(1, "Requirements", duration=40, earliest_start_date=date(2023, 6, 1)),
        Task(
            2,
            "Design",
            duration=80,
            earliest_start_date=date(2023, 6, 1),
            planned_resources=2.0,
            predecessors=[1],
        ),
        Task(
            3,
            "Backend",
            duration=160,
            earliest_start_date=date(2023, 6, 1),
            planned_resources=2.0,
            predecessors=[2],
        ),
        Task(
            4,
            "Frontend",
            duration=120,
            earliest_start_date=date(2023, 7, 3),
            planned_resources=1.5,
            predecessors=[2],
        ),
        Task(
            5,
            "Integration",
            duration=40,
            earliest_start_date=date(2023, 6, 1),
            predecessors=[3, 4],
        ),
    ]

    resources = [
        Resource(1, "Alice", output=8.0),
        Resource(2, "Bob", output=8.0),
        Resource(3, "Carol", output=6.0),
    ]

    allocations = [
        Allocation(task_id=1, resource_id=1, load=1.0),
        Allocation(task_id=2, resource_id=1, load=1.0),
        Allocation(task_id=2, resource_id=2, load=0.5),
        Allocation(task_id=3, resource_id=2, load=1.0),
        Allocation(task_id=3, resource_id=3, load=0.8),
        Allocation(task_id=4, resource_id=3, load=0.5),
        Allocation(task_id=5, resource_id=1, load=0.5),
        Allocation(task_id=5, resource_id=2, load=0.5),
    ]

    return Project(
        tasks=tasks,
        resources=resources,
        allocations=allocations,
        generic_resource_output=generic_resource_output,
    )
