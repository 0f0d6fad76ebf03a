"""
Default network listener root.

``RootApp`` is the FastAPI application handed to startup actions as
``root``. Extensions mount routers on it; ``Ignis.listen`` binds it through
its ``listen(port, callback)`` method, which serves the application with
uvicorn on the running event loop.
"""

import asyncio
import logging
import socket
from typing import Any, Optional

import uvicorn
from fastapi import FastAPI

from ...core.interfaces.network import IListener, ListenCallback

logger = logging.getLogger(__name__)


class RootApp(FastAPI, IListener):
    """
    FastAPI application that can serve itself.

    Args:
        host: Interface to bind when listening
        **kwargs: Passed to ``FastAPI``
    """

    def __init__(self, host: str = "0.0.0.0", **kwargs: Any) -> None:
        kwargs.setdefault("title", "Ignis")
        super().__init__(**kwargs)
        self.listen_host = host
        self._server: Optional[uvicorn.Server] = None
        self._serve_task: Optional['asyncio.Task[None]'] = None
        self._socket: Optional[socket.socket] = None

    @property
    def bound_port(self) -> Optional[int]:
        """Port actually bound, useful when listening on port 0."""
        if self._socket is None:
            return None
        return int(self._socket.getsockname()[1])

    @property
    def serving(self) -> bool:
        """Whether the server has started and not been closed."""
        return self._server is not None and self._server.started

    def listen(self, port: int, callback: ListenCallback) -> None:
        """
        Bind the port and serve on the running event loop.

        Args:
            port: Port to bind
            callback: Called with None once serving, or with the error
        """
        loop = asyncio.get_running_loop()

        try:
            self._socket = self._bind_socket(port)
        except OSError as e:
            logger.error(f"Failed to bind {self.listen_host}:{port}: {e}")
            callback(e)
            return

        config = uvicorn.Config(self, log_config=None, access_log=False)
        self._server = uvicorn.Server(config)
        self._serve_task = loop.create_task(self._serve(self._server, self._socket, callback))

    async def close(self) -> None:
        """Stop serving and wait for the server to shut down."""
        if self._server is None or self._serve_task is None:
            return

        logger.info("Stopping HTTP server")
        self._server.should_exit = True
        await self._serve_task

        self._server = None
        self._serve_task = None
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    async def wait_closed(self) -> None:
        """Wait until the server stops serving."""
        if self._serve_task is not None:
            await self._serve_task

    async def _serve(self, server: uvicorn.Server, sock: socket.socket,
                     callback: ListenCallback) -> None:
        serving = asyncio.ensure_future(server.serve(sockets=[sock]))

        while not server.started and not serving.done():
            await asyncio.sleep(0.01)

        if not server.started:
            error = serving.exception() if not serving.cancelled() else None
            callback(error or RuntimeError("HTTP server stopped before it started"))
            return

        logger.info(f"Serving on {self.listen_host}:{self.bound_port}")
        callback(None)
        await serving

    def _bind_socket(self, port: int) -> socket.socket:
        family = socket.AF_INET6 if ':' in self.listen_host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.listen_host, port))
        except OSError:
            sock.close()
            raise
        sock.set_inheritable(True)
        return sock
