"""Framing of the signals a pytest worker process sends back to its parent."""

import asyncio
import pickle
from collections.abc import AsyncGenerator, Mapping
from dataclasses import replace
from typing import Any, BinaryIO

from unit_issues.formatter import to_str
from unit_issues.models.outcome import Error
from unit_issues.models.result import FailureDetail
from unit_issues.models.signals import TestFinished

HEADER_SIZE = 4


class Rendered(str):
    """Value already rendered by the worker, printed as is."""

    __slots__ = ()

    def __repr__(self) -> str:
        return str(self)


def write_frame(channel: BinaryIO, obj: object) -> None:
    """Write ``obj`` as a length prefixed pickle and flush it."""
    data = pickle.dumps(obj)
    channel.write(len(data).to_bytes(HEADER_SIZE, "big") + data)
    channel.flush()


async def read_frames(stream: asyncio.StreamReader) -> AsyncGenerator[Any, None]:
    """Yield the objects written with ``write_frame`` until end of stream."""
    while True:
        try:
            header = await stream.readexactly(HEADER_SIZE)
        except asyncio.IncompleteReadError as e:
            if e.partial:
                raise
            return
        yield pickle.loads(await stream.readexactly(int.from_bytes(header, "big")))


def detach(signal: TestFinished) -> TestFinished:
    """Render the failure values of ``signal`` so it can leave the process.

    Operands of failed comparisons and raised exceptions may not survive
    pickling, so they travel as their rendered text.
    """
    status = signal.result.get("status")
    if not isinstance(status, Error) or not isinstance(status.reason, FailureDetail):
        return signal

    detail = status.reason
    rendered = replace(
        detail,
        info=render_info(detail.info),
        stack_trace=None if detail.stack_trace is None else str(detail.stack_trace),
    )
    return replace(signal, result={**signal.result, "status": Error(rendered)})


def render_info(info: Mapping[str, Any]) -> dict[str, Rendered]:
    return {key: Rendered(to_str(value)) for key, value in info.items()}
