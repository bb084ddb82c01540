import unittest
from datetime import date

from loadplan.domain.errors import MissingReferenceError
from loadplan.domain.project import Project
from loadplan.domain.resource import Allocation, Resource
from loadplan.domain.task import Task
from loadplan.services.allocation import (
    OVERLOAD_COLOR,
    calculate_resource_allocations,
    calculate_resource_load,
    find_overallocated_days,
    load_color,
    resource_load_profile,
)
from loadplan.services.scheduler import ProjectScheduler


def make_project():
    t0 = Task(
        id=0,
        label="First",
        duration=40,
        earliest_start_date=date(2023, 6, 1),
        planned_resources=1.0,
    )
    t1 = Task(
        id=1,
        label="Second",
        duration=40,
        earliest_start_date=date(2023, 6, 3),
        planned_resources=1.0,
    )
    return Project(
        tasks=[t0, t1],
        resources=[Resource(0, "r1", output=40.0)],
        allocations=[Allocation(0, 0, 0.8), Allocation(1, 0, 0.5)],
    )


class ResourceAllocationsTestCase(unittest.TestCase):
    """Test cases for the per-task allocation pass."""

    def test_allocated_resources(self):
        project = make_project()
        allocated = calculate_resource_allocations(project)
        self.assertEqual(allocated, {0: 0.8, 1: 0.5})
        self.assertEqual(project.get_task_by_id(0).allocated_resources, 0.8)
        self.assertEqual(project.get_task_by_id(1).allocated_resources, 0.5)

    def test_idempotent(self):
        project = make_project()
        calculate_resource_allocations(project)
        first = [task.allocated_resources for task in project.tasks]
        calculate_resource_allocations(project)
        second = [task.allocated_resources for task in project.tasks]
        self.assertEqual(first, second)

    def test_task_without_allocations(self):
        project = make_project()
        project.add_task(Task(2, "Unstaffed", 8, date(2023, 6, 1)))
        calculate_resource_allocations(project)
        self.assertEqual(project.get_task_by_id(2).allocated_resources, 0.0)


class ResourceLoadTestCase(unittest.TestCase):
    """Test cases for daily resource load."""

    def setUp(self):
        # Task 0 runs 2023-06-01..2023-06-12, task 1 2023-06-03..2023-06-16
        self.project = make_project()
        self.scheduler = ProjectScheduler(self.project).calculate()

    def test_schedule_uses_allocations(self):
        self.assertEqual(self.scheduler.actual_end_date(0), date(2023, 6, 12))
        self.assertEqual(self.scheduler.actual_end_date(1), date(2023, 6, 16))

    def test_calculate_resource_load_simple(self):
        self.assertAlmostEqual(
            self.scheduler.calculate_resource_load(0, date(2023, 6, 1)), 0.8
        )
        self.assertAlmostEqual(
            self.scheduler.calculate_resource_load(0, date(2023, 6, 3)), 1.3
        )

    def test_active_span_is_inclusive(self):
        self.assertAlmostEqual(
            self.scheduler.calculate_resource_load(0, date(2023, 6, 12)), 1.3
        )
        self.assertAlmostEqual(
            self.scheduler.calculate_resource_load(0, date(2023, 6, 13)), 0.5
        )
        self.assertAlmostEqual(
            self.scheduler.calculate_resource_load(0, date(2023, 6, 16)), 0.5
        )
        self.assertEqual(self.scheduler.calculate_resource_load(0, date(2023, 6, 17)), 0)

    def test_idle_resource(self):
        self.project.add_resource(Resource(1, "idle"))
        self.assertEqual(self.scheduler.calculate_resource_load(1, date(2023, 6, 5)), 0)

    def test_allocation_to_unknown_task(self):
        self.project.add_allocation(Allocation(9, 0, 0.5))
        with self.assertRaises(MissingReferenceError):
            calculate_resource_load(self.project, self.scheduler, 0, date(2023, 6, 5))
        with self.assertRaises(MissingReferenceError):
            self.scheduler.recalculate()

    def test_load_profile(self):
        profile = resource_load_profile(
            self.project, self.scheduler, 0, date(2023, 5, 31), 3
        )
        self.assertEqual([day for day, _ in profile], [
            date(2023, 5, 31),
            date(2023, 6, 1),
            date(2023, 6, 2),
        ])
        self.assertEqual(profile[0][1], 0)
        self.assertAlmostEqual(profile[1][1], 0.8)

    def test_find_overallocated_days(self):
        overallocated = find_overallocated_days(
            self.project, self.scheduler, date(2023, 6, 1), 30
        )
        self.assertEqual(list(overallocated), [0])
        days = [day for day, _ in overallocated[0]]
        self.assertEqual(days[0], date(2023, 6, 3))
        self.assertEqual(days[-1], date(2023, 6, 12))
        self.assertEqual(len(days), 10)

    def test_no_overallocation(self):
        project = Project(
            tasks=[Task(0, "A", 8, date(2023, 6, 1)), Task(1, "B", 8, date(2023, 6, 1))],
            resources=[Resource(0, "r1")],
            allocations=[Allocation(0, 0, 0.3), Allocation(1, 0, 0.7)],
        )
        scheduler = ProjectScheduler(project).calculate()
        self.assertEqual(
            find_overallocated_days(project, scheduler, date(2023, 6, 1), 10), {}
        )


class LoadColorTestCase(unittest.TestCase):
    def test_bands(self):
        self.assertEqual(load_color(0.0), "#00C000")
        self.assertEqual(load_color(0.25), "#00C000")
        self.assertEqual(load_color(0.3), "#00FF00")
        self.assertEqual(load_color(0.6), "#FFFF00")
        self.assertEqual(load_color(1.0), "#FF0000")
        self.assertEqual(load_color(1.3), OVERLOAD_COLOR)


if __name__ == "__main__":
    unittest.main()
