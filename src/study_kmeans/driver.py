"""Fixed-cadence scheduling of engine steps."""
from __future__ import annotations

import time
from typing import Callable, Iterator, Optional

from .constants import STEP_INTERVAL_SECONDS
from .engine import ClusteringEngine
from .models import Snapshot


def iter_steps(
    engine: ClusteringEngine,
    interval: float = STEP_INTERVAL_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
    max_steps: Optional[int] = None,
) -> Iterator[Snapshot]:
    """Yield one committed snapshot per tick until the run ends.

    The next tick is only scheduled after the previous step has returned,
    so the delay affects pacing and never the result. Calling
    ``engine.stop()`` between ticks ends the iteration.
    """
    steps = 0
    while engine.is_running:
        if max_steps is not None and steps >= max_steps:
            return
        if interval > 0:
            sleep(interval)
        if not engine.is_running:
            return
        yield engine.step()
        steps += 1
