import unittest

from core.engine import (
    ARRIVAL, COMPLETION, EngineState, WaitingLine, next_event, run_engine
)
from core.jobs import jobs_from_times
from core.models import Job, JobState, SimulationConfig
from core.timeline import ServerTimeline


def _config(servers=1, priority=False, horizon=0.0, n_jobs=3):
    return SimulationConfig(
        arrival_mean=1.0,
        service_mean=1.0,
        servers=servers,
        priority_enabled=priority,
        n_jobs=n_jobs,
        time_horizon=horizon
    )


class TestSingleServer(unittest.TestCase):
    """Hand-checked single server traces."""

    def test_fixed_trace(self):
        out = run_engine(_config(), jobs_from_times([0, 1, 5], [2, 2, 1]))

        self.assertEqual([j.id for j in out.completed], [0, 1, 2])
        self.assertEqual([j.start_time for j in out.completed], [0, 2, 5])
        self.assertEqual([j.end_time for j in out.completed], [2, 4, 6])
        self.assertEqual([j.server for j in out.completed], [0, 0, 0])
        self.assertTrue(all(j.state == JobState.COMPLETED for j in out.completed))
        self.assertEqual(out.clock, 6)
        self.assertFalse(out.truncated)
        self.assertEqual(out.unfinished, 0)

    def test_busy_idle_accounting(self):
        out = run_engine(_config(), jobs_from_times([0, 1, 5], [2, 2, 1]))
        self.assertEqual(out.busy_time, [5.0])
        self.assertEqual(out.idle_time, [1.0])

    def test_idle_before_first_arrival(self):
        out = run_engine(_config(n_jobs=1), jobs_from_times([3], [1]))
        self.assertEqual(out.idle_time, [3.0])
        self.assertEqual(out.busy_time, [1.0])
        self.assertEqual(out.clock, 4.0)

    def test_timeline(self):
        out = run_engine(_config(), jobs_from_times([0, 1, 5], [2, 2, 1]))
        entries = out.server_activity[0].jobs
        self.assertEqual([(e.job_id, e.start_time, e.end_time) for e in entries],
                         [(0, 0, 2), (1, 2, 4), (2, 5, 6)])


class TestMultiServer(unittest.TestCase):

    def test_lowest_free_server_is_used(self):
        out = run_engine(_config(servers=2), jobs_from_times([0, 1, 5], [2, 10, 1]))
        servers = {j.id: j.server for j in out.completed}
        self.assertEqual(servers, {0: 0, 1: 1, 2: 0})

    def test_queue_when_all_busy(self):
        out = run_engine(_config(servers=2), jobs_from_times([0, 0.5, 1], [3, 3, 1]))
        by_id = {j.id: j for j in out.completed}

        self.assertEqual(by_id[2].start_time, 3)
        self.assertEqual(by_id[2].server, 0)
        self.assertEqual(out.clock, 4)
        self.assertEqual(out.busy_time, [4.0, 3.0])
        self.assertEqual(out.idle_time, [0.0, 1.0])
        self.assertEqual([j.id for j in out.completed], [0, 1, 2])

    def test_timelines_per_server(self):
        out = run_engine(_config(servers=2), jobs_from_times([0, 0.5, 1], [3, 3, 1]))
        self.assertEqual([e.job_id for e in out.server_activity[0].jobs], [0, 2])
        self.assertEqual([e.job_id for e in out.server_activity[1].jobs], [1])


class TestDispatchOrder(unittest.TestCase):

    def test_fifo_when_priority_disabled(self):
        jobs = jobs_from_times([0, 1, 2, 3], [10, 1, 1, 1], priorities=[1, 3, 2, 1])
        out = run_engine(_config(n_jobs=4), jobs)
        self.assertEqual([j.id for j in out.completed], [0, 1, 2, 3])

    def test_lowest_priority_value_first(self):
        jobs = jobs_from_times([0, 1, 2, 3], [10, 1, 1, 1], priorities=[1, 3, 2, 1])
        out = run_engine(_config(priority=True, n_jobs=4), jobs)
        self.assertEqual([j.id for j in out.completed], [0, 3, 2, 1])

    def test_equal_priorities_keep_arrival_order(self):
        jobs = jobs_from_times([0, 1, 2, 3], [10, 1, 1, 1], priorities=[1, 2, 1, 1])
        out = run_engine(_config(priority=True, n_jobs=4), jobs)
        self.assertEqual([j.id for j in out.completed], [0, 2, 3, 1])

    def test_arrival_before_completion_on_tie(self):
        # job 2 arrives exactly when job 0 finishes; it must be queued before
        # the server is handed to the next waiting job
        jobs = jobs_from_times([0, 1, 3], [3, 1, 1], priorities=[3, 3, 1])
        out = run_engine(_config(priority=True), jobs)
        by_id = {j.id: j for j in out.completed}

        self.assertEqual(by_id[2].start_time, 3)
        self.assertEqual(by_id[1].start_time, 4)
        self.assertEqual([j.id for j in out.completed], [0, 2, 1])


class TestHorizon(unittest.TestCase):

    def test_truncation_drops_in_flight_jobs(self):
        jobs = jobs_from_times([0, 1, 2, 3], [2, 2, 2, 2])
        out = run_engine(_config(horizon=3.0, n_jobs=4), jobs)

        self.assertTrue(out.truncated)
        self.assertEqual([j.id for j in out.completed], [0, 1])
        self.assertEqual(out.unfinished, 2)
        self.assertEqual(out.clock, 4.0)
        self.assertAlmostEqual(sum(out.busy_time) + sum(out.idle_time), out.clock)

    def test_horizon_not_reached(self):
        out = run_engine(_config(horizon=100.0), jobs_from_times([0, 1, 5], [2, 2, 1]))
        self.assertFalse(out.truncated)
        self.assertEqual(len(out.completed), 3)


class TestNextEvent(unittest.TestCase):

    def _state(self, jobs, servers=1):
        return EngineState(
            pending=jobs,
            slots=[None] * servers,
            line=WaitingLine(False),
            timeline=ServerTimeline(servers),
            busy_time=[0.0] * servers,
            idle_time=[0.0] * servers,
        )

    def test_no_events(self):
        self.assertIsNone(next_event(self._state([])))

    def test_earliest_completion(self):
        state = self._state([], servers=2)
        state.slots[0] = Job(id=0, arrival_time=0.0, service_time=5.0, start_time=0.0)
        state.slots[1] = Job(id=1, arrival_time=0.0, service_time=2.0, start_time=1.0)

        event = next_event(state)
        self.assertEqual(event.kind, COMPLETION)
        self.assertEqual(event.time, 3.0)
        self.assertEqual(event.server, 1)

    def test_tie_prefers_arrival(self):
        state = self._state([Job(id=1, arrival_time=2.0, service_time=1.0)])
        state.slots[0] = Job(id=0, arrival_time=0.0, service_time=2.0, start_time=0.0)

        event = next_event(state)
        self.assertEqual(event.kind, ARRIVAL)
        self.assertEqual(event.job.id, 1)


class TestWaitingLine(unittest.TestCase):

    def test_fifo(self):
        line = WaitingLine(False)
        for i, p in enumerate([3, 1, 2]):
            line.push(Job(id=i, arrival_time=float(i), service_time=1.0, priority=p))
        self.assertEqual([line.pop().id for _ in range(3)], [0, 1, 2])
        self.assertEqual(len(line), 0)

    def test_priority(self):
        line = WaitingLine(True)
        for i, p in enumerate([3, 1, 2, 1]):
            line.push(Job(id=i, arrival_time=float(i), service_time=1.0, priority=p))
        self.assertEqual(len(line), 4)
        self.assertEqual([line.pop().id for _ in range(4)], [1, 3, 2, 0])


if __name__ == "__main__":
    unittest.main()
