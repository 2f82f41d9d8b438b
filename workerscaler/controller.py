import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, NamedTuple, Optional, Set, Union

from workerscaler.config import ScalingConfig
from workerscaler.scaler import calculate_ideal_worker_target


class JobStats(NamedTuple):
    """Job counts reported by the job-stats hook."""
    total: int = 0
    active: int = 0
    inactive: int = 0


FetchJobStats = Callable[[], Union[JobStats, Awaitable[JobStats]]]
ApplyScale = Callable[[int, JobStats], Any]


def default_fetch_job_stats():
    logging.warning("No fetch_job_stats hook configured, reporting 0 jobs")
    return JobStats(total=0, active=0, inactive=0)


def default_apply_scale(scale_to, stats):
    logging.warning(f"No apply_scale hook configured, not scaling to {scale_to}")


async def _resolve(value):
    if inspect.isawaitable(value):
        return await value
    return value


class WorkerScaler:
    """
    Periodically scales workers to the ideal target for the current job count.

    Job counts come from the fetch_job_stats hook and the target is handed to
    the apply_scale hook; both may be plain functions or coroutine functions.
    """

    def __init__(
            self,
            config: Optional[ScalingConfig] = None,
            fetch_job_stats: Optional[FetchJobStats] = None,
            apply_scale: Optional[ApplyScale] = None
    ):
        self.config = config or ScalingConfig()
        self.fetch_job_stats = fetch_job_stats or default_fetch_job_stats
        self.apply_scale = apply_scale or default_apply_scale
        self.current_worker = 0

        self._timer: Optional[asyncio.Task] = None
        self._ticks: Set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._timer is not None

    async def get_current_number_of_jobs(self) -> JobStats:
        return await _resolve(self.fetch_job_stats())

    async def scale(self) -> Any:
        """
        Run one scaling tick.

        Hook failures are not caught here; they propagate to the caller.

        Returns:
            Whatever the apply_scale hook returns
        """
        stats = await self.get_current_number_of_jobs()
        self.current_worker = calculate_ideal_worker_target(stats.total, self.config)

        logging.info(f"Total: {stats.total}, active/queue: {stats.active}/{stats.inactive} "
                     f"=> scale to {self.current_worker}",
                     extra={
                         'scale_to': self.current_worker,
                         'total': stats.total,
                         'active': stats.active,
                         'inactive': stats.inactive
                     })
        return await _resolve(self.apply_scale(self.current_worker, stats))

    def start(self) -> None:
        """
        Start scaling every scale_interval milliseconds.

        Must be called from a running event loop. Ticks are started on a fixed
        schedule without waiting for the previous tick to finish.
        """
        if self._timer is not None:
            logging.warning("Worker scaler already started, ignoring start()")
            return

        self._timer = asyncio.get_running_loop().create_task(self._run_timer())
        logging.info(f"Worker scaler started, scaling every {self.config.scale_interval}ms")

    def stop(self) -> None:
        """Stop the timer. Ticks already in flight run to completion."""
        if self._timer is None:
            return

        self._timer.cancel()
        self._timer = None
        logging.info(f"Worker scaler stopped, {len(self._ticks)} tick(s) still in flight")

    async def _run_timer(self) -> None:
        loop = asyncio.get_running_loop()
        interval = self.config.scale_interval / 1000
        next_fire = loop.time() + interval

        while True:
            await asyncio.sleep(max(0.0, next_fire - loop.time()))

            # Slots missed while the loop was blocked are skipped, not replayed
            missed = max(0, int((loop.time() - next_fire) // interval))
            next_fire += interval * (1 + missed)

            tick = loop.create_task(self.scale())
            self._ticks.add(tick)
            tick.add_done_callback(self._tick_done)

    def _tick_done(self, tick: asyncio.Task) -> None:
        self._ticks.discard(tick)
        if tick.cancelled():
            return

        error = tick.exception()
        if error is not None:
            logging.error(f"Scaling tick failed: {error}", exc_info=error)
