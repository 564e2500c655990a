"""
Event-driven multi-server queue.

The clock jumps from event to event. There are two kinds of event:
  arrival     the next job of the (arrival-sorted) stream shows up
  completion  a server finishes its current job
When both fall on the same instant the arrival is handled first.

Between events every server is either busy or idle for the whole interval,
so busy/idle time is accumulated on each clock advance.
"""
import heapq
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional

from .models import Job, JobState, ServerActivity, SimulationConfig
from .timeline import ServerTimeline

logger = logging.getLogger(__name__)

ARRIVAL = "arrival"
COMPLETION = "completion"


class WaitingLine:
    """
    FIFO line, or priority line (lowest value first, FIFO within a class).
    """

    def __init__(self, priority_enabled: bool):
        self.priority_enabled = priority_enabled
        self._fifo = deque()
        self._heap = []
        self._seq = 0

    def push(self, job: Job) -> None:
        if self.priority_enabled:
            # seq keeps equal priorities in arrival order
            heapq.heappush(self._heap, (job.priority, self._seq, job))
            self._seq += 1
        else:
            self._fifo.append(job)

    def pop(self) -> Job:
        if self.priority_enabled:
            return heapq.heappop(self._heap)[2]
        return self._fifo.popleft()

    def __len__(self) -> int:
        return len(self._heap) if self.priority_enabled else len(self._fifo)


@dataclass
class Event:
    kind: str
    time: float
    job: Job
    server: Optional[int] = None


@dataclass
class EngineState:
    pending: List[Job]                 # sorted by arrival time
    slots: List[Optional[Job]]         # None = idle server
    line: WaitingLine
    timeline: ServerTimeline
    busy_time: List[float]
    idle_time: List[float]
    clock: float = 0.0
    next_arrival: int = 0              # index into pending
    completed: List[Job] = field(default_factory=list)


@dataclass
class EngineOutcome:
    completed: List[Job]
    server_activity: List[ServerActivity]
    busy_time: List[float]
    idle_time: List[float]
    clock: float
    truncated: bool
    unfinished: int


def next_event(state: EngineState) -> Optional[Event]:
    arrival = None
    if state.next_arrival < len(state.pending):
        arrival = state.pending[state.next_arrival]

    server, completion = None, None
    for k, job in enumerate(state.slots):
        if job is not None and (completion is None or job.completion_time < completion.completion_time):
            server, completion = k, job

    if arrival is None and completion is None:
        return None
    if completion is None or (arrival is not None and arrival.arrival_time <= completion.completion_time):
        return Event(ARRIVAL, arrival.arrival_time, arrival)
    return Event(COMPLETION, completion.completion_time, completion, server)


def _advance(state: EngineState, t: float) -> None:
    dt = t - state.clock
    for k, job in enumerate(state.slots):
        if job is None:
            state.idle_time[k] += dt
        else:
            state.busy_time[k] += dt
    state.clock = t


def _dispatch(state: EngineState, job: Job, server: int) -> None:
    job.start_time = state.clock
    job.server = server
    job.state = JobState.IN_SERVICE
    state.slots[server] = job
    state.timeline.record(server, job)


def handle_arrival(state: EngineState, event: Event) -> None:
    _advance(state, event.time)
    state.next_arrival += 1
    job = event.job

    free = next((k for k, slot in enumerate(state.slots) if slot is None), None)
    if free is not None:
        _dispatch(state, job, free)
    else:
        job.state = JobState.WAITING
        state.line.push(job)


def handle_completion(state: EngineState, event: Event) -> None:
    _advance(state, event.time)
    job = event.job
    job.end_time = state.clock
    job.state = JobState.COMPLETED
    state.completed.append(job)
    state.slots[event.server] = None

    if len(state.line):
        _dispatch(state, state.line.pop(), event.server)


def run_engine(config: SimulationConfig, jobs: List[Job]) -> EngineOutcome:
    """
    Run the event loop over `jobs` until nothing is left to do, or until the
    clock passes config.time_horizon (when > 0). Jobs still waiting or in
    service at that point are left out of `completed`.
    """
    c = config.servers
    state = EngineState(
        pending=sorted(jobs, key=lambda j: j.arrival_time),
        slots=[None] * c,
        line=WaitingLine(config.priority_enabled),
        timeline=ServerTimeline(c),
        busy_time=[0.0] * c,
        idle_time=[0.0] * c,
    )
    horizon = config.time_horizon
    truncated = False

    while True:
        event = next_event(state)
        if event is None:
            break

        if event.kind == ARRIVAL:
            handle_arrival(state, event)
        else:
            handle_completion(state, event)
        logger.debug("t=%.4f %s job=%d queue=%d", state.clock, event.kind, event.job.id, len(state.line))

        if horizon > 0 and state.clock > horizon:
            truncated = True
            break

    unfinished = len(state.pending) - len(state.completed)
    if truncated:
        logger.warning("time horizon %.4f exceeded at t=%.4f; %d unfinished job(s) dropped",
                       horizon, state.clock, unfinished)

    return EngineOutcome(
        completed=state.completed,
        server_activity=state.timeline.activity(),
        busy_time=state.busy_time,
        idle_time=state.idle_time,
        clock=state.clock,
        truncated=truncated,
        unfinished=unfinished
    )
