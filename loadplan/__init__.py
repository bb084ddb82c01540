"""
loadplan
========

Dependency-resolved project scheduling and resource load charts.

Available modules:
- domain: tasks, resources, allocations and the project that owns them
- services: the scheduler and the resource allocation aggregator
- utils: working-day arithmetic and the dependency graph
- visualization: Gantt and resource load charts
"""

from loadplan.domain.errors import (
    PlanError,
    MalformedInputError,
    MissingReferenceError,
    CyclicDependencyError,
    DateOverflowError,
)
from loadplan.domain.project import Project
from loadplan.domain.resource import Allocation, Resource
from loadplan.domain.task import Task
from loadplan.loader import load_project
from loadplan.services.scheduler import ProjectScheduler

__all__ = [
    "PlanError",
    "MalformedInputError",
    "MissingReferenceError",
    "CyclicDependencyError",
    "DateOverflowError",
    "Project",
    "Task",
    "Resource",
    "Allocation",
    "load_project",
    "ProjectScheduler",
]
