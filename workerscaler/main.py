import asyncio
import logging
import signal
from typing import Optional

from workerscaler.config import load_config, ScalingConfig
from workerscaler.controller import WorkerScaler, FetchJobStats, ApplyScale


async def run_scaler(
        config: Optional[ScalingConfig] = None,
        fetch_job_stats: Optional[FetchJobStats] = None,
        apply_scale: Optional[ApplyScale] = None,
        duration: Optional[float] = None
) -> WorkerScaler:
    """
    Run a worker scaler until a termination signal arrives or duration elapses.

    Args:
        config: Scaling configuration (default: loaded from the environment)
        fetch_job_stats: Hook returning the current JobStats
        apply_scale: Hook called with the worker target and the stats behind it
        duration: Optional number of seconds to run for

    Returns:
        WorkerScaler: The stopped scaler, for inspecting current_worker
    """
    config = config or load_config()
    scaler = WorkerScaler(config, fetch_job_stats=fetch_job_stats, apply_scale=apply_scale)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    handled_signals = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
            handled_signals.append(sig)
        except (NotImplementedError, RuntimeError):
            # Not supported on this platform or outside the main thread
            logging.debug(f"Cannot handle {sig.name} in this event loop")

    logging.info(f"Running worker scaler with {config}")
    scaler.start()
    try:
        await asyncio.wait_for(stop_event.wait(), timeout=duration)
    except asyncio.TimeoutError:
        logging.info(f"Worker scaler ran for {duration}s, stopping")
    finally:
        scaler.stop()
        for sig in handled_signals:
            loop.remove_signal_handler(sig)

    return scaler


def main() -> None:
    """Run the worker scaler with configuration from the environment."""
    try:
        config = load_config()
    except ValueError as e:
        logging.error(f"Invalid worker scaler configuration: {e}", exc_info=True)
        raise

    asyncio.run(run_scaler(config))
