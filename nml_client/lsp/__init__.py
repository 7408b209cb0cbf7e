"""LSP client module for the nml language server."""

from nml_client.lsp.client import NmlLanguageClient
from nml_client.lsp.launch import (
    ClientOptions,
    DocumentFilter,
    LaunchSpec,
    TransportKind,
)
from nml_client.lsp.locator import ServerLocator
from nml_client.lsp.manager import ClientLifecycleManager, ClientState, ClientStateError
from nml_client.lsp.settings import ClientConfig, load_client_config

__all__ = [
    "NmlLanguageClient",
    "ClientOptions",
    "DocumentFilter",
    "LaunchSpec",
    "TransportKind",
    "ServerLocator",
    "ClientLifecycleManager",
    "ClientState",
    "ClientStateError",
    "ClientConfig",
    "load_client_config",
]
