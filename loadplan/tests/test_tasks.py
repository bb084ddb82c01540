import unittest
from datetime import date

from loadplan.domain.errors import MalformedInputError
from loadplan.domain.task import Task, TaskError


def make_simple_task(duration, planned_resources, start=date(2023, 2, 1)):
    return Task(
        id=0,
        label="",
        duration=duration,
        earliest_start_date=start,
        planned_resources=planned_resources,
    )


class TaskTestCase(unittest.TestCase):
    """Test cases for the Task class."""

    def test_work_days(self):
        task = make_simple_task(80, 1.0)
        self.assertEqual(task.work_force(), 8.0)
        self.assertEqual(task.work_days(), 10.0)

    def test_work_days_is_duration_over_work_force(self):
        task = make_simple_task(100, 1.5)
        self.assertAlmostEqual(task.work_days(), 100 / (1.5 * 8.0))

    def test_allocated_resources_take_precedence(self):
        task = make_simple_task(80, 1.0)
        task.set_allocated_resources(2.0)
        self.assertEqual(task.work_force(), 16.0)
        self.assertEqual(task.work_days(), 5.0)

        # An explicit allocation overrides the stored one
        self.assertEqual(task.work_days(allocated_resources=4.0), 2.5)

        # Zero allocation falls back to the planned resources
        self.assertEqual(task.work_days(allocated_resources=0.0), 10.0)

    def test_resource_output_is_configurable(self):
        task = make_simple_task(80, 1.0)
        self.assertEqual(task.work_days(resource_output=4.0), 20.0)

    def test_end_date_skips_weekend(self):
        """Starting on a Thursday, 5 work days end on the next Thursday."""
        task = make_simple_task(80, 2.0, start=date(2023, 6, 8))
        self.assertEqual(task.end_date(), date(2023, 6, 15))
        self.assertEqual(task.calendar_days(), 7)

    def test_partial_day_needs_a_whole_day(self):
        task = make_simple_task(1, 1.0, start=date(2023, 6, 12))
        self.assertAlmostEqual(task.work_days(), 0.125)
        self.assertEqual(task.end_date(), date(2023, 6, 13))

    def test_zero_duration(self):
        task = make_simple_task(0, 1.0, start=date(2023, 6, 12))
        self.assertEqual(task.end_date(), date(2023, 6, 12))
        self.assertEqual(task.calendar_days(), 0)

    def test_days_remaining_at(self):
        task = make_simple_task(40, 1.0, start=date(2023, 6, 1))
        self.assertEqual(task.days_remaining_at(date(2023, 6, 5), date(2023, 6, 1)), 3)
        # Anchored at a later start nothing is done yet
        self.assertEqual(task.days_remaining_at(date(2023, 6, 5), date(2023, 6, 5)), 5)

    def test_predecessors_are_deduplicated(self):
        task = Task(
            1, "Task", 8, date(2023, 6, 1), predecessors=[3, 2, 3]
        )
        self.assertEqual(task.predecessors, [3, 2])

    def test_initialization_validation(self):
        """Test validation during task initialization."""
        start = date(2023, 6, 1)

        with self.assertRaises(TaskError):
            Task(id="T1", label="Bad id", duration=8, earliest_start_date=start)

        with self.assertRaises(TaskError):
            Task(id=True, label="Bad id", duration=8, earliest_start_date=start)

        with self.assertRaises(TaskError):
            Task(id=1, label=None, duration=8, earliest_start_date=start)

        with self.assertRaises(TaskError):
            Task(id=1, label="Negative", duration=-1, earliest_start_date=start)

        with self.assertRaises(TaskError):
            Task(id=1, label="No date", duration=8, earliest_start_date="2023-06-01")

        with self.assertRaises(TaskError):
            Task(
                id=1,
                label="No resources",
                duration=8,
                earliest_start_date=start,
                planned_resources=0,
            )

        with self.assertRaises(TaskError):
            Task(1, "Bad predecessor", 8, start, predecessors=["a"])

        with self.assertRaises(TaskError):
            make_simple_task(8, 1.0).set_allocated_resources(-0.5)

    def test_non_finite_numbers(self):
        start = date(2023, 6, 1)
        for value in (float("nan"), float("inf"), float("-inf"), 10**400):
            with self.subTest(value=value):
                with self.assertRaises(TaskError):
                    Task(1, "Duration", value, start)
                with self.assertRaises(TaskError):
                    Task(1, "Resources", 8, start, planned_resources=value)
                with self.assertRaises(TaskError):
                    make_simple_task(8, 1.0).set_allocated_resources(value)

    def test_task_error_is_malformed_input(self):
        with self.assertRaises(MalformedInputError):
            make_simple_task(8, -1.0)


class TaskFromDictTestCase(unittest.TestCase):
    """Test cases for building tasks from dataset records."""

    def test_from_dict(self):
        task = Task.from_dict(
            {
                "id": 4,
                "duration": 40,
                "label": "Design",
                "earliest_start_date": "2023-06-01",
                "planned_resources": 2,
                "predecessors": [1, 2],
            }
        )
        self.assertEqual(task.id, 4)
        self.assertEqual(task.label, "Design")
        self.assertEqual(task.earliest_start_date, date(2023, 6, 1))
        self.assertEqual(task.planned_resources, 2.0)
        self.assertEqual(task.predecessors, [1, 2])
        self.assertEqual(task.allocated_resources, 0.0)

    def test_defaults(self):
        task = Task.from_dict(
            {"id": 1, "duration": 8, "earliest_start_date": "2023-06-01"}
        )
        self.assertEqual(task.label, "")
        self.assertEqual(task.planned_resources, 1.0)
        self.assertEqual(task.predecessors, [])

    def test_missing_fields(self):
        with self.assertRaises(TaskError) as ctx:
            Task.from_dict({"id": 7, "label": "Incomplete"})
        self.assertIn("7", str(ctx.exception))
        self.assertIn("duration", str(ctx.exception))

    def test_invalid_date(self):
        with self.assertRaises(TaskError):
            Task.from_dict(
                {"id": 1, "duration": 8, "earliest_start_date": "01/06/2023"}
            )

    def test_not_a_record(self):
        with self.assertRaises(TaskError):
            Task.from_dict(["id", 1])


if __name__ == "__main__":
    unittest.main()
