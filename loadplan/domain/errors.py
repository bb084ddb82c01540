class PlanError(Exception):
    """Base class for every error raised while building or scheduling a project."""

    pass


class MalformedInputError(PlanError, ValueError):
    """Raised when the project dataset fails structural validation."""

    pass


class MissingReferenceError(PlanError, LookupError):
    """Raised when a predecessor or allocation points to an unknown task or resource."""

    pass


class CyclicDependencyError(PlanError, ValueError):
    """Raised when task predecessors form a cycle."""

    def __init__(self, cycle):
        self.cycle = list(cycle)
        path = " -> ".join(str(task_id) for task_id in self.cycle + self.cycle[:1])
        super().__init__(f"Task dependencies contain a cycle: {path}")


class DateOverflowError(PlanError, OverflowError):
    """Raised when calendar arithmetic leaves the representable date range."""

    pass
