"""Client configuration presets.

Two launch configurations exist for the nml server:

- ``stdio``: ``NML_DEBUG_DIR`` override, platform executable then bare name
  as debug candidates, ``nmlc lsp --channel=stdio``, no trace channel.
- ``traced``: ``NML_LSP_DEBUG_DIR`` override, platform executable only,
  ``nmlc lsp --log trace``, trace channel attached.

Both are expressed as one ``ClientConfig``; ``load_client_config`` picks a
preset from ``[client] preset`` in config.ini and applies per-key overrides.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from nml_client.utils.config_utils import (
    get_config_bool,
    get_config_list,
    get_config_value,
)


CONFIG_SECTION = "client"


@dataclass(frozen=True)
class ClientConfig:
    """Everything that varies between launch configurations."""

    name: str = "nml"
    executable: str = "nmlc"
    language_id: str = "nml"
    debug_dir_env_var: str = "NML_DEBUG_DIR"
    # templates expanded with {name} (executable) and {exe_suffix}
    fallback_candidates: Tuple[str, ...] = ("{name}{exe_suffix}", "{name}")
    server_args: Tuple[str, ...] = ("lsp", "--channel=stdio")
    enable_trace_channel: bool = False

    @classmethod
    def stdio(cls) -> "ClientConfig":
        return cls()

    @classmethod
    def traced(cls) -> "ClientConfig":
        return cls(
            debug_dir_env_var="NML_LSP_DEBUG_DIR",
            fallback_candidates=("{name}{exe_suffix}",),
            server_args=("lsp", "--log", "trace"),
            enable_trace_channel=True,
        )

    @property
    def trace_channel_name(self) -> str:
        return f"{self.name} trace"


PRESETS = {
    "stdio": ClientConfig.stdio,
    "traced": ClientConfig.traced,
}


def load_client_config() -> ClientConfig:
    """Build the client configuration from the loaded config.ini.

    Raises:
        ValueError: ``[client] preset`` names an unknown preset
    """
    preset = get_config_value(CONFIG_SECTION, "preset", default="stdio")
    if preset not in PRESETS:
        raise ValueError(
            f"unknown client preset {preset!r} (expected one of: "
            f"{', '.join(sorted(PRESETS))})"
        )
    config = PRESETS[preset]()

    overrides = {}
    for key in ("name", "executable", "language_id", "debug_dir_env_var"):
        value = get_config_value(CONFIG_SECTION, key)
        if value:
            overrides[key] = value

    for key in ("fallback_candidates", "server_args"):
        tokens = get_config_list(CONFIG_SECTION, key)
        if tokens is not None:
            overrides[key] = tuple(tokens)

    overrides["enable_trace_channel"] = get_config_bool(
        CONFIG_SECTION, "enable_trace_channel", default=config.enable_trace_channel
    )

    return replace(config, **overrides)
