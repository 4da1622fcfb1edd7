"""Fixed-delay scheduling of blocking jobs on the event loop."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


async def run_with_fixed_delay(
    name: str,
    job: Callable[[], Any],
    initial_delay_s: float,
    delay_s: float,
) -> None:
    """Run *job* in a worker thread forever, waiting *delay_s* between runs.

    A failing run is logged and does not stop the schedule. Cancel the task
    to stop it.
    """
    await asyncio.sleep(initial_delay_s)
    while True:
        try:
            await asyncio.to_thread(job)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.error("Scheduled job %s failed: %s", name, exc, exc_info=exc)
        await asyncio.sleep(delay_s)


def schedule(
    name: str,
    job: Callable[[], Any],
    initial_delay_s: float,
    delay_s: float,
) -> asyncio.Task:
    """Start *job* on a fixed-delay schedule and return its task."""
    logger.info(
        "Scheduling job %s: initial_delay=%ss delay=%ss",
        name, initial_delay_s, delay_s,
    )
    return asyncio.create_task(
        run_with_fixed_delay(name, job, initial_delay_s, delay_s),
        name=name,
    )


async def cancel_all(tasks: list[asyncio.Task]) -> None:
    """Cancel scheduled tasks and wait for them to finish."""
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
