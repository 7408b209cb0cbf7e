"""Client lifecycle management.

The manager owns the one live client handle for an extension context and
moves it through its lifecycle:

    UNINITIALIZED -> STARTING -> RUNNING -> STOPPING -> STOPPED

A stopped manager may be activated again; that builds a fresh handle.
"""

import asyncio
from enum import Enum
from typing import Callable, Optional

from nml_client.lsp.client import NmlLanguageClient
from nml_client.lsp.launch import (
    ClientOptions,
    LaunchSpec,
    build_client_options,
    build_launch_spec,
)
from nml_client.lsp.locator import ServerLocator
from nml_client.lsp.settings import ClientConfig
from nml_client.utils.logging_utils import Logger


class ClientState(Enum):
    UNINITIALIZED = "uninitialized"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class ClientStateError(RuntimeError):
    """Lifecycle operation issued in a state that does not allow it."""


# (name, launch spec, options) -> object with async start() / stop()
ClientFactory = Callable[[str, LaunchSpec, ClientOptions], NmlLanguageClient]


class ClientLifecycleManager:
    """Owns the single client handle of one extension context.

    this manager ensures:
    1. at most one client handle exists at any time
    2. activating twice without deactivating is an error, never a second handle
    3. deactivate waits for a pending start before stopping
    4. deactivate without a live handle is a no-op
    """

    def __init__(
        self,
        config: ClientConfig,
        locator: Optional[ServerLocator] = None,
        client_factory: ClientFactory = NmlLanguageClient,
    ):
        self.config = config
        self.locator = locator or ServerLocator(config)
        self._client_factory = client_factory

        self._state = ClientState.UNINITIALIZED
        self._client = None
        self._launch_spec: Optional[LaunchSpec] = None
        self._options: Optional[ClientOptions] = None
        self._start_task: Optional[asyncio.Task] = None
        self._stop_task: Optional[asyncio.Task] = None
        self._last_error: Optional[BaseException] = None

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def client(self):
        """The live client handle, or None."""
        return self._client

    @property
    def launch_spec(self) -> Optional[LaunchSpec]:
        return self._launch_spec

    @property
    def options(self) -> Optional[ClientOptions]:
        return self._options

    @property
    def is_running(self) -> bool:
        return self._state is ClientState.RUNNING

    @property
    def last_error(self) -> Optional[BaseException]:
        """Error of the last failed start, if any."""
        return self._last_error

    async def activate(self):
        """Resolve the server, build the client and start it.

        Raises:
            ClientStateError: a client is already starting, running or stopping
            OSError: the server could not be spawned (propagated unchanged)
        """
        if self._state not in (ClientState.UNINITIALIZED, ClientState.STOPPED):
            raise ClientStateError(
                f"{self.config.name} client already {self._state.value}"
            )

        logger = Logger.instance()
        command = self.locator.resolve()
        logger.info(f"{self.config.name} server command: {command}")

        self._launch_spec = build_launch_spec(command, self.config.server_args)
        self._options = build_client_options(self.config)
        self._client = self._client_factory(
            self.config.name, self._launch_spec, self._options
        )
        self._last_error = None
        self._state = ClientState.STARTING

        self._start_task = asyncio.ensure_future(self._client.start())
        try:
            await self._start_task
        except Exception as e:
            logger.error(f"failed to start {self.config.name} server ({command}): {e}")
            self._last_error = e
            self._release()
            raise
        except asyncio.CancelledError:
            self._release()
            raise

        if self._state is ClientState.STARTING:
            self._state = ClientState.RUNNING
            logger.info(f"{self.config.name} client running")

    async def deactivate(self):
        """Stop the client, waiting for a pending start first.

        Completes immediately when no handle is live; a call made while
        another deactivate is stopping the client waits for that stop.
        """
        start_task = self._start_task
        if start_task is not None:
            if not start_task.done():
                await asyncio.wait([start_task])
            # a failed start is reported by activate(); nothing is left to stop
            if start_task.cancelled() or start_task.exception() is not None:
                return

        if self._stop_task is not None:
            await asyncio.wait([self._stop_task])
            return

        if self._client is None or self._state not in (
            ClientState.STARTING,
            ClientState.RUNNING,
        ):
            return

        client = self._client
        self._state = ClientState.STOPPING
        self._stop_task = asyncio.ensure_future(client.stop())
        try:
            await self._stop_task
        finally:
            self._stop_task = None
            self._release()
            Logger.instance().info(f"{self.config.name} client stopped")

    def _release(self):
        self._client = None
        self._start_task = None
        self._state = ClientState.STOPPED
