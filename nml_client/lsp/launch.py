"""Launch specification and client options for the nml server."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from nml_client.lsp.settings import ClientConfig
from nml_client.utils.logging_utils import TraceChannel


class TransportKind(Enum):
    """Channel between client and server process."""

    STDIO = "standard-io"


@dataclass(frozen=True)
class LaunchSpec:
    """Command, argument vector and transport used to start the server."""

    command: str
    args: Tuple[str, ...]
    transport: TransportKind = TransportKind.STDIO


@dataclass(frozen=True)
class DocumentFilter:
    scheme: str
    language: str

    def matches(self, uri: str, language_id: str) -> bool:
        return uri.startswith(f"{self.scheme}:") and language_id == self.language


@dataclass(frozen=True)
class ClientOptions:
    """Which documents the client serves, plus the optional trace sink."""

    document_selector: Tuple[DocumentFilter, ...]
    trace_channel: Optional[TraceChannel] = None

    def matches(self, uri: str, language_id: str) -> bool:
        return any(f.matches(uri, language_id) for f in self.document_selector)


def build_launch_spec(command: str, args: Sequence[str]) -> LaunchSpec:
    return LaunchSpec(command=command, args=tuple(args), transport=TransportKind.STDIO)


def build_client_options(config: ClientConfig) -> ClientOptions:
    """Local files of the configured language, traced when enabled."""
    trace_channel = None
    if config.enable_trace_channel:
        trace_channel = TraceChannel(config.trace_channel_name, config.language_id)

    return ClientOptions(
        document_selector=(DocumentFilter(scheme="file", language=config.language_id),),
        trace_channel=trace_channel,
    )
