"""Upload progress sampling.

The sampler runs as its own task next to the upload. It only reads the
stream position; the request body advances it. Once the upload finishes and
the stream is closed, reading the position fails and the sampler stops.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import AsyncIterator
from typing import IO, Any

from .types import OnUploadProgressCallback, SpeedUnit, UploadProgress
from .utils import await_if_necessary, debug

DEFAULT_PROGRESS_INTERVAL = 0.5
DEFAULT_CHUNK_SIZE = 64 * 1024

# (lower bound in bits/s, divisor, unit), highest first
_RATE_SCALES: tuple[tuple[float, float, SpeedUnit], ...] = (
    (1e11, 1e12, "tb"),
    (1e8, 1e9, "gb"),
    (1e5, 1e6, "mb"),
    (1e2, 1e3, "kb"),
)


def scale_rate(bits_per_second: float) -> tuple[float, SpeedUnit]:
    """Rescale a bit rate into the largest fitting unit, rounded."""
    for lower, divisor, unit in _RATE_SCALES:
        if bits_per_second >= lower:
            return float(round(bits_per_second / divisor)), unit
    return bits_per_second, "b"


def compute_rate(position: int, sample_index: int, interval: float) -> float:
    """Average bit rate since the upload started."""
    return position * 8 / (sample_index * interval)


def stream_length(stream: IO[bytes]) -> int:
    """Total length of a seekable stream, leaving its position untouched."""
    pos = stream.tell()
    end = stream.seek(0, os.SEEK_END)
    stream.seek(pos)
    return int(end)


async def iter_stream(stream: IO[bytes], chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        yield bytes(chunk)
        await asyncio.sleep(0)


async def emit_progress(callback: OnUploadProgressCallback | None, event: UploadProgress) -> None:
    if callback is None:
        return
    await await_if_necessary(callback(event))


async def report_progress_loop(
    stream: IO[bytes],
    callback: OnUploadProgressCallback,
    *,
    total: int,
    interval: float = DEFAULT_PROGRESS_INTERVAL,
    report_speed: bool = True,
) -> None:
    sample_index = 0
    while True:
        await asyncio.sleep(interval)
        sample_index += 1
        try:
            position = stream.tell()
        except ValueError:
            # stream released once the upload completed
            debug("progress sampler stopped, stream is closed")
            return

        speed: float | None = None
        unit: SpeedUnit | None = None
        if report_speed:
            speed, unit = scale_rate(compute_rate(position, sample_index, interval))

        await emit_progress(
            callback,
            UploadProgress.from_position(position, total, speed=speed, unit=unit),
        )


async def stop_task(task: asyncio.Task[Any]) -> None:
    """Cancel a helper task and wait until it has finished."""
    task.cancel()
    await asyncio.gather(task, return_exceptions=True)


__all__ = [
    "DEFAULT_PROGRESS_INTERVAL",
    "DEFAULT_CHUNK_SIZE",
    "scale_rate",
    "compute_rate",
    "stream_length",
    "iter_stream",
    "emit_progress",
    "report_progress_loop",
    "stop_task",
]
