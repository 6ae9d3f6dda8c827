from __future__ import annotations

import inspect
import os
from collections.abc import Awaitable
from datetime import datetime
from typing import Any, cast


def debug(message: str, *args: Any) -> None:
    debug_env = os.getenv("DEBUG", "")
    if "storage" in debug_env:
        print(f"fbstorage: {message}", *args)


async def await_if_necessary(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await cast(Awaitable[Any], value)
    return value


def parse_datetime(value: str) -> datetime:
    # API returns RFC 3339 timestamps with a trailing Z
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return datetime.strptime(value, "%Y-%m-%dT%H:%M:%S.%fZ")


def parse_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)
