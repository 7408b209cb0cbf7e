"""shared fixtures and fakes for nml-client tests"""

import asyncio
import io
from types import SimpleNamespace

import pytest
from rich.console import Console

from nml_client.utils import config_utils
from nml_client.utils.logging_utils import Logger


# ═══════════════════════════════════════════════════════════════════════════
# fakes
# ═══════════════════════════════════════════════════════════════════════════

class FakeClient:
    """stand-in for NmlLanguageClient with controllable start/stop"""

    def __init__(self, name, launch_spec, options, events, start_gate=None, start_error=None, stop_gate=None):
        self.name = name
        self.launch_spec = launch_spec
        self.options = options
        self.events = events
        self.start_gate = start_gate
        self.start_error = start_error
        self.stop_gate = stop_gate
        self.start_calls = 0
        self.stop_calls = 0

    async def start(self):
        self.start_calls += 1
        self.events.append("start")
        if self.start_gate is not None:
            await self.start_gate.wait()
        if self.start_error is not None:
            raise self.start_error
        self.events.append("started")

    async def stop(self):
        self.stop_calls += 1
        self.events.append("stop")
        if self.stop_gate is not None:
            await self.stop_gate.wait()
        self.events.append("stopped")


class FakeClientFactory:
    """records every client the lifecycle manager builds"""

    def __init__(self):
        self.clients = []
        self.events = []
        self.start_gate = None
        self.start_error = None
        self.stop_gate = None

    def __call__(self, name, launch_spec, options):
        client = FakeClient(
            name,
            launch_spec,
            options,
            self.events,
            start_gate=self.start_gate,
            start_error=self.start_error,
            stop_gate=self.stop_gate,
        )
        self.clients.append(client)
        return client

    def hold_start(self) -> asyncio.Event:
        """make the next start wait until the returned event is set"""
        self.start_gate = asyncio.Event()
        return self.start_gate

    def hold_stop(self) -> asyncio.Event:
        """make the next stop wait until the returned event is set"""
        self.stop_gate = asyncio.Event()
        return self.stop_gate


class FakePyglsClient:
    """stand-in for pygls.lsp.client.LanguageClient"""

    def __init__(self, name, version):
        self.name = name
        self.version = version
        self.calls = []
        self.features = {}
        self.start_error = None
        self.initialize_error = None
        self.shutdown_error = None

    def feature(self, method):
        def decorator(handler):
            self.features[method] = handler
            return handler
        return decorator

    async def start_io(self, cmd, *args):
        self.calls.append(("start_io", cmd, args))
        if self.start_error is not None:
            raise self.start_error

    async def initialize_async(self, params):
        self.calls.append(("initialize", params))
        if self.initialize_error is not None:
            raise self.initialize_error
        return SimpleNamespace(server_info=SimpleNamespace(name="nmlc", version="0.0.1"))

    def initialized(self, params):
        self.calls.append(("initialized", params))

    async def shutdown_async(self, params):
        self.calls.append(("shutdown", params))
        if self.shutdown_error is not None:
            raise self.shutdown_error

    def exit(self, params):
        self.calls.append(("exit", params))

    async def stop(self):
        self.calls.append(("stop",))

    def text_document_did_open(self, params):
        self.calls.append(("didOpen", params))

    def call_names(self):
        return [call[0] for call in self.calls]


# ═══════════════════════════════════════════════════════════════════════════
# fixtures
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture(autouse=True)
def log_output():
    """route the singleton logger into a buffer"""
    Logger.reset_instance()
    buffer = io.StringIO()
    Logger.instance(console=Console(file=buffer, width=200))
    yield buffer
    Logger.reset_instance()


@pytest.fixture
def reset_config():
    """clear loaded config.ini sections before and after test"""
    config_utils.reset_config()
    yield config_utils.global_config
    config_utils.reset_config()


@pytest.fixture
def client_factory():
    return FakeClientFactory()


@pytest.fixture
def fake_pygls(monkeypatch):
    """patch the pygls client class; yields the list of created fakes"""
    created = []

    def factory(name, version):
        client = FakePyglsClient(name, version)
        created.append(client)
        return client

    monkeypatch.setattr("nml_client.lsp.client.LanguageClient", factory)
    return created


@pytest.fixture
def trace_buffer():
    return io.StringIO()
