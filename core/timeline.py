from typing import List

from .models import Job, ServerActivity, TimelineEntry


class ServerTimeline:
    """Per-server record of dispatched jobs, in dispatch order (feeds the Gantt chart)."""

    def __init__(self, servers: int):
        self._activity = [ServerActivity(server=k) for k in range(servers)]

    def record(self, server: int, job: Job) -> None:
        self._activity[server].jobs.append(TimelineEntry(
            job_id=job.id,
            start_time=job.start_time,
            end_time=job.completion_time,
            priority=job.priority
        ))

    def activity(self) -> List[ServerActivity]:
        return self._activity
