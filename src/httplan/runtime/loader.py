"""Loading endpoints and combined endpoints through a transport port."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from httplan.combinators.ops import CombinedEndpoint
from httplan.combinators.types import Node, ParallelNode, SequenceNode, SingleNode
from httplan.config.logging import get_logger
from httplan.kernel.endpoint import Endpoint
from httplan.kernel.env import Env
from httplan.kernel.errors import AggregatedError, UnknownError, WrongStatusCodeError
from httplan.kernel.result import Result

A = TypeVar("A")

logger = get_logger(__name__)

# Tasks started by execute(); the event loop only keeps weak references.
_pending: set[asyncio.Task[Any]] = set()


async def load_endpoint(endpoint: Endpoint[A], env: Env) -> Result[A]:
    """Load a single endpoint.

    Sends the request, checks the status code, then parses the body.
    Never raises for transport, status or parse failures; they are
    returned as Result.Failure.
    """
    return await _load_single(endpoint, env, None)


async def load(target: Endpoint[A] | CombinedEndpoint[A], env: Env) -> Result[A]:
    """Load an endpoint or a combined endpoint and return its single outcome.

    Semantics:
        - single: load the endpoint
        - sequence: load the first tree; on success build and load the next
          tree from its value, on failure stop
        - parallel: load both trees concurrently and wait for both; if both
          fail the errors are returned as one AggregatedError
    """
    if isinstance(target, Endpoint):
        return await _load_single(target, env, None)
    return await _load_node(target.node, env, None)


def execute(
    target: Endpoint[A] | CombinedEndpoint[A],
    env: Env,
    on_complete: Callable[[Result[A]], None],
) -> asyncio.Task[Result[A]]:
    """Start loading `target` on the running event loop.

    `on_complete` is invoked exactly once, from the event loop, when the
    returned task is done: with the outcome, or with a failure carrying
    CancelledError if the task was cancelled first. It runs before any
    coroutine awaiting the task resumes.

    Raises:
        RuntimeError: If called without a running event loop
    """

    def _done(task: asyncio.Task[Result[A]]) -> None:
        _pending.discard(task)
        if task.cancelled():
            outcome: Result[A] = Result.Failure(asyncio.CancelledError())
        elif task.exception() is not None:
            outcome = Result.Failure(task.exception())  # type: ignore[arg-type]
        else:
            outcome = task.result()
        on_complete(outcome)

    task = asyncio.get_running_loop().create_task(load(target, env))
    _pending.add(task)
    task.add_done_callback(_done)
    return task


async def _load_node(node: Node[Any], env: Env, parent_id: int | None) -> Result[Any]:
    """Interpret `node` and return its single outcome.

    Sequence chains are walked with an explicit stack of pending
    continuations, so nesting depth on either side of a sequence does not
    grow the call stack. Parallel branches run as tasks of their own.
    """
    trace = env.trace
    # (continuation, sequence event id); a None continuation marks a
    # sequence whose second half is running and only needs its end event
    pending: list[tuple[Callable[[Any], Node[Any]] | None, int | None]] = []
    current: Node[Any] = node
    current_parent = parent_id

    while True:
        while isinstance(current, SequenceNode):
            sequence_id = trace.record("sequence_begin", parent_id=current_parent) if trace is not None else None
            pending.append((current.then, sequence_id))
            current = current.first
            current_parent = sequence_id

        if isinstance(current, SingleNode):
            outcome = await _load_single(current.endpoint, env, current_parent)
        elif isinstance(current, ParallelNode):
            outcome = await _load_parallel(current, env, current_parent)
        else:
            outcome = Result.Failure(TypeError(f"Unknown node kind: {type(current).__name__}"))

        resumed = False
        while pending and not resumed:
            then, sequence_id = pending.pop()
            if then is not None and outcome.is_success:
                try:
                    current = then(outcome.value)
                except Exception as exc:
                    outcome = Result.Failure(exc)
                else:
                    pending.append((None, sequence_id))
                    current_parent = sequence_id
                    resumed = True
                    continue
            if trace is not None:
                trace.record("sequence_end", info={"outcome": outcome.kind}, parent_id=sequence_id)

        if not resumed:
            return outcome


async def _load_single(endpoint: Endpoint[A], env: Env, parent_id: int | None) -> Result[A]:
    trace = env.trace
    request = endpoint.request
    debug = logger.isEnabledFor(logging.DEBUG)
    log = logger.bind(method=str(request.method), url=request.url) if debug else None

    event_id: int | None = None
    if trace is not None:
        event_id = trace.record(
            "request_begin",
            info={"method": str(request.method), "url": request.url},
            parent_id=parent_id,
        )
    if log is not None:
        log.debug("request_begin")

    start_time = time.perf_counter()
    result, status = await _fetch(endpoint, env)
    duration_ms = (time.perf_counter() - start_time) * 1000

    if trace is not None:
        trace.record(
            "request_end",
            info={"status": status, "outcome": result.kind},
            parent_id=event_id,
            duration_ms=duration_ms,
        )
    if log is not None and result.is_failure:
        log.debug("request_failed", status=status, error=repr(result.error), duration_ms=duration_ms)
    elif log is not None:
        log.debug("request_end", status=status, duration_ms=duration_ms)
    return result


async def _fetch(endpoint: Endpoint[A], env: Env) -> tuple[Result[A], int | None]:
    try:
        response = await env.transport.send(endpoint.request)
    except Exception as exc:
        return Result.Failure(exc), None

    status = response.status_code
    if status is None:
        return Result.Failure(UnknownError()), None

    try:
        if not endpoint.expected_status(status):
            return Result.Failure(WrongStatusCodeError(status, response)), status
        return endpoint.parse(response.body, response), status
    except Exception as exc:
        return Result.Failure(exc), status


async def _load_parallel(node: ParallelNode[A], env: Env, parent_id: int | None) -> Result[A]:
    trace = env.trace
    parallel_id = trace.record("parallel_begin", parent_id=parent_id) if trace is not None else None

    # Both branches always run to completion, each as its own task, so both
    # errors can be reported
    left, right = await asyncio.gather(
        _load_node(node.left, env, parallel_id),
        _load_node(node.right, env, parallel_id),
    )

    if trace is not None:
        trace.record(
            "parallel_end",
            info={"left": left.kind, "right": right.kind},
            parent_id=parallel_id,
        )

    if left.is_failure and right.is_failure:
        error = AggregatedError([left.error, right.error])  # type: ignore[list-item]
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("parallel_failed", errors=len(error))
        return Result.Failure(error)
    if left.is_failure:
        return left  # type: ignore[return-value]
    if right.is_failure:
        return right  # type: ignore[return-value]
    try:
        return Result.Success(node.combine(left.value, right.value))
    except Exception as exc:
        return Result.Failure(exc)
