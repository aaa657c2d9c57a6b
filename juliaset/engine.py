"""Parallel fill of Julia set color buffers."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional

import numpy as np

from .colors import DEFAULT_POLICY, ColorPolicy
from .coordinates import PlaneWindow, RasterDimensions, map_x, map_y
from .errors import BufferAllocationError, FillError, WorkerStartError
from .escape import DEFAULT_ITERATIONS, escape_stages

logger = logging.getLogger(__name__)

CHANNELS = 4


@dataclass(frozen=True)
class RenderParameters:
    """Everything needed for one fill of the color buffer."""

    raster: RasterDimensions
    window: PlaneWindow
    c: complex
    max_iterations: int = DEFAULT_ITERATIONS
    num_workers: int = 1


@dataclass(frozen=True)
class WorkUnit:
    """The columns owned by one worker: every ``x`` with ``x % total_workers == worker_index``."""

    worker_index: int
    total_workers: int

    def columns(self, width: int) -> np.ndarray:
        return np.arange(self.worker_index, width, self.total_workers, dtype=np.int64)

    def view(self, buffer: np.ndarray) -> np.ndarray:
        """Strided view of ``buffer`` restricted to this unit's columns."""

        return buffer[:, self.worker_index::self.total_workers]


def partition_columns(num_workers: int) -> list[WorkUnit]:
    """Stripe the raster columns across ``num_workers`` workers."""

    return [WorkUnit(worker_index=i, total_workers=num_workers) for i in range(num_workers)]


def _fill_stripe(
    unit: WorkUnit,
    stripe: np.ndarray,
    *,
    window: PlaneWindow,
    raster: RasterDimensions,
    c: complex,
    max_iterations: int,
    policy: ColorPolicy,
) -> None:
    columns = unit.columns(raster.width)
    if columns.size == 0:
        return

    rows = np.arange(raster.height, dtype=np.int64)
    real = map_x(columns, window.center_x, window.plane_width, raster.width)
    imag = map_y(rows, window.center_y, window.plane_height, raster.height)
    real_grid, imag_grid = np.meshgrid(real, imag)

    stages = escape_stages(real_grid, imag_grid, c, max_iterations)
    stripe[...] = policy.colorize(stages)


class _StripeWorker(threading.Thread):
    """Thread that fills one stripe and keeps any failure for the caller."""

    def __init__(self, unit: WorkUnit, stripe: np.ndarray, job: Callable[[WorkUnit, np.ndarray], None]) -> None:
        super().__init__(name=f"julia-worker-{unit.worker_index}")
        self.unit = unit
        self.error: Optional[BaseException] = None
        self._stripe = stripe
        self._job = job

    def run(self) -> None:
        start = time.perf_counter()
        try:
            self._job(self.unit, self._stripe)
        except Exception as exc:
            self.error = exc
            return
        logger.debug(
            "worker %d filled %d columns in %.1fms",
            self.unit.worker_index,
            self._stripe.shape[1],
            (time.perf_counter() - start) * 1000.0,
        )


def _join_all(workers: list[_StripeWorker]) -> None:
    for worker in workers:
        worker.join()


def fill_region(
    window: PlaneWindow,
    raster: RasterDimensions,
    c: complex,
    max_iterations: int = DEFAULT_ITERATIONS,
    num_workers: int = 1,
    *,
    policy: ColorPolicy = DEFAULT_POLICY,
) -> np.ndarray:
    """Fill a ``(height, width, 4)`` RGBA buffer for the Julia set of ``c``.

    Columns are striped over ``num_workers`` threads. Each thread only sees
    its own strided view of the buffer. The call returns once every thread
    has finished, and the buffer comes back read-only. If the buffer cannot
    be allocated, a worker cannot be started or a worker fails, a
    :class:`FillError` is raised and no buffer is returned.
    """

    try:
        buffer = np.empty((raster.height, raster.width, CHANNELS), dtype=np.uint8)
    except MemoryError as exc:
        raise BufferAllocationError(
            f"could not allocate a {raster.width}x{raster.height} color buffer"
        ) from exc

    job = partial(
        _fill_stripe,
        window=window,
        raster=raster,
        c=c,
        max_iterations=max_iterations,
        policy=policy,
    )
    workers = [_StripeWorker(unit, unit.view(buffer), job) for unit in partition_columns(num_workers)]

    logger.debug(
        "filling %dx%d raster for c=%s with %d workers",
        raster.width,
        raster.height,
        c,
        num_workers,
    )

    started: list[_StripeWorker] = []
    try:
        for worker in workers:
            worker.start()
            started.append(worker)
    except RuntimeError as exc:
        _join_all(started)
        raise WorkerStartError(
            f"could not start worker {len(started)} of {num_workers}"
        ) from exc

    _join_all(started)

    failed = [worker for worker in workers if worker.error is not None]
    if failed:
        first = failed[0]
        raise FillError(
            f"worker {first.unit.worker_index} failed: {first.error}"
        ) from first.error

    buffer.flags.writeable = False
    return buffer


def render(params: RenderParameters, *, policy: ColorPolicy = DEFAULT_POLICY) -> np.ndarray:
    """Fill the buffer described by ``params``."""

    return fill_region(
        params.window,
        params.raster,
        params.c,
        params.max_iterations,
        params.num_workers,
        policy=policy,
    )
