"""
Exceptions raised by the scheduling core and the workload loader.
"""


class SchedulerError(Exception):
    """Base class for every error raised by cpusched."""


class InvalidInputError(SchedulerError, ValueError):
    """A process record (or a policy parameter) is malformed."""

    def __init__(self, message: str, record=None):
        super().__init__(message)
        self.record = record


class EmptyQueueError(SchedulerError, IndexError):
    """Dequeue was called on an empty ready queue."""


class DegenerateInputError(SchedulerError):
    """Metrics were requested for a run with no processes."""
