"""Language client for the nml server.

Thin adapter over pygls' ``LanguageClient``: pygls owns the JSON-RPC framing
and request bookkeeping, this class owns how the nml server is launched,
initialized and shut down.
"""

import os
from pathlib import Path
from typing import Optional, Set

from lsprotocol import types
from pygls.lsp.client import LanguageClient

from nml_client import __version__
from nml_client.lsp.launch import ClientOptions, LaunchSpec, TransportKind
from nml_client.utils.logging_utils import Logger


LANGUAGE_EXTENSIONS = {
    ".nml": "nml",
}


class NmlLanguageClient:
    """Manages the nml server process through a pygls client.

    this client:
    1. spawns the server with the resolved launch spec over stdio
    2. performs the initialize / initialized handshake
    3. forwards server log and trace notifications to the trace channel
    """

    def __init__(
        self,
        name: str,
        launch_spec: LaunchSpec,
        options: ClientOptions,
        root_dir: Optional[str] = None,
    ):
        """
        Args:
            name: client name, reported to the server as client info
            launch_spec: how to start the server
            options: document selector and optional trace channel
            root_dir: workspace root (defaults to the current directory)
        """
        self.name = name
        self.launch_spec = launch_spec
        self.options = options
        self.root_dir = Path(root_dir) if root_dir else Path.cwd()
        self.open_files: Set[str] = set()
        self.server_info = None
        self._running = False

        self._client = LanguageClient(name, __version__)
        if options.trace_channel is not None:
            self._register_trace_handlers()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def trace_channel(self):
        return self.options.trace_channel

    async def start(self):
        """Spawn the server and initialize the LSP connection.

        Raises:
            ValueError: the launch spec asks for a transport other than stdio
            OSError: the command cannot be executed
        """
        if self._running:
            return

        if self.launch_spec.transport is not TransportKind.STDIO:
            raise ValueError(f"unsupported transport: {self.launch_spec.transport.value}")

        await self._client.start_io(self.launch_spec.command, *self.launch_spec.args)

        trace = types.TraceValue.Off
        if self.trace_channel is not None:
            trace = types.TraceValue.Verbose

        try:
            result = await self._client.initialize_async(
                types.InitializeParams(
                    capabilities=types.ClientCapabilities(),
                    process_id=os.getpid(),
                    client_info=types.ClientInfo(name=self.name, version=__version__),
                    root_uri=self.root_dir.absolute().as_uri(),
                    trace=trace,
                )
            )
            self._client.initialized(types.InitializedParams())
        except BaseException:
            # the process is already spawned; do not leave it behind
            await self._client.stop()
            raise

        self.server_info = result.server_info
        self._running = True

    async def stop(self):
        """Shut the server down gracefully."""
        if not self._running:
            return

        try:
            await self._client.shutdown_async(None)
            self._client.exit(None)
        except Exception as e:
            # the server may already be gone; the process is reaped below
            Logger.instance().warning(f"{self.name} server shutdown failed: {e}")
        finally:
            await self._client.stop()
            self._running = False
            self.open_files.clear()

    def handles(self, uri: str, language_id: str) -> bool:
        """Whether documents with this uri and language are served."""
        return self.options.matches(uri, language_id)

    def ensure_file_open(self, file_path: str) -> bool:
        """Send didOpen for a local document the client serves.

        Returns:
            True if the file was newly opened, False if already open or not
            served by this client
        """
        uri = self._path_to_uri(file_path)
        language_id = self._get_language_id(file_path)

        if uri in self.open_files or not self.handles(uri, language_id):
            return False

        if not self._running:
            raise RuntimeError(f"{self.name} server not running")

        with open(file_path, "r", encoding="utf-8", errors="replace") as f:
            content = f.read()

        self._client.text_document_did_open(
            types.DidOpenTextDocumentParams(
                text_document=types.TextDocumentItem(
                    uri=uri,
                    language_id=language_id,
                    version=1,
                    text=content,
                )
            )
        )
        self.open_files.add(uri)
        return True

    def _register_trace_handlers(self):
        trace_channel = self.options.trace_channel

        @self._client.feature(types.WINDOW_LOG_MESSAGE)
        def on_log_message(params: types.LogMessageParams):
            trace_channel.append_line(f"{params.type.name}: {params.message}")

        @self._client.feature(types.LOG_TRACE)
        def on_log_trace(params: types.LogTraceParams):
            line = params.message
            if params.verbose:
                line = f"{line}\n{params.verbose}"
            trace_channel.append_line(line)

    def _path_to_uri(self, file_path: str) -> str:
        return Path(file_path).absolute().as_uri()

    def _get_language_id(self, file_path: str) -> str:
        """Determine language ID from file extension."""
        ext = Path(file_path).suffix.lower()
        return LANGUAGE_EXTENSIONS.get(ext, "plaintext")
