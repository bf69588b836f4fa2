"""HTTP server lifecycle: serve until SIGINT/SIGTERM, then drain and exit."""

from __future__ import annotations

import asyncio
import contextlib
import signal
from typing import Iterable, Iterator

import uvicorn
from loguru import logger


class SupervisedServer(uvicorn.Server):
    """uvicorn server that leaves signal handling to :func:`serve_until_signalled`."""

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield


async def serve_until_signalled(
    server: uvicorn.Server,
    *,
    grace_period: float = 5.0,
    stop: asyncio.Event | None = None,
    signals: Iterable[signal.Signals] = (signal.SIGINT, signal.SIGTERM),
) -> None:
    """Run ``server`` until a termination signal arrives or it exits on its own.

    On a signal the server stops accepting connections and gets
    ``grace_period`` seconds to finish in-flight requests. After that it is
    forced down. The server task is always awaited before returning.
    """
    stop = stop or asyncio.Event()
    loop = asyncio.get_running_loop()

    installed: list[signal.Signals] = []
    for sig in signals:
        try:
            loop.add_signal_handler(sig, stop.set)
        except (NotImplementedError, RuntimeError):
            # no signal support outside the main thread or on Windows
            logger.debug("Cannot install handler for {sig}", sig=sig)
            continue
        installed.append(sig)

    serve_task = asyncio.create_task(server.serve(), name="http-server")
    stop_task = asyncio.create_task(stop.wait(), name="shutdown-signal")
    try:
        done, _ = await asyncio.wait({serve_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        if stop_task in done:
            logger.info("Shutdown requested; draining for up to {seconds}s", seconds=grace_period)
            server.should_exit = True
            try:
                await asyncio.wait_for(asyncio.shield(serve_task), timeout=grace_period)
            except asyncio.TimeoutError:
                logger.warning("Grace period elapsed; forcing shutdown")
                server.force_exit = True
        await serve_task
    finally:
        stop_task.cancel()
        for sig in installed:
            loop.remove_signal_handler(sig)
    logger.info("Server stopped")


__all__ = ["SupervisedServer", "serve_until_signalled"]
