"""Job contracts and the synchronous dispatch core."""

from .contracts import JobSink, RoleHandler
from .dispatch import NOOP_ROLES, JobDispatcher, TrackedJob
from .types import JobArgs, JobState

__all__ = [
    "JobArgs",
    "JobDispatcher",
    "JobSink",
    "JobState",
    "NOOP_ROLES",
    "RoleHandler",
    "TrackedJob",
]
