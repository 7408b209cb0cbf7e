"""Server executable resolution.

With the debug-dir environment variable unset the bare executable name is
returned and left to PATH lookup at spawn time. When it is set, the
configured candidate filenames are tried inside that directory and the first
one that exists wins; otherwise resolution falls back to the bare name.
"""

import os
import sys
from typing import List, Mapping, Optional

from nml_client.lsp.settings import ClientConfig


def executable_suffix(platform: str) -> str:
    """Suffix appended to executables on this platform."""
    return ".exe" if platform.startswith(("win", "cygwin")) else ""


class ServerLocator:
    """Resolves the command used to launch the language server.

    Only reads the environment and checks file existence, so the same
    environment and filesystem always yield the same command.
    """

    def __init__(
        self,
        config: ClientConfig,
        environ: Optional[Mapping[str, str]] = None,
        platform: Optional[str] = None,
    ):
        """
        Args:
            config: client configuration
            environ: environment to read (defaults to os.environ)
            platform: platform name (defaults to sys.platform)
        """
        self.config = config
        self.environ = os.environ if environ is None else environ
        self.platform = sys.platform if platform is None else platform

    @property
    def debug_dir(self) -> Optional[str]:
        return self.environ.get(self.config.debug_dir_env_var) or None

    def candidates(self) -> List[str]:
        """Ordered, de-duplicated candidate paths inside the debug dir."""
        base_dir = self.debug_dir
        if base_dir is None:
            return []

        suffix = executable_suffix(self.platform)
        paths = []
        for template in self.config.fallback_candidates:
            filename = template.format(
                name=self.config.executable,
                exe_suffix=suffix,
            )
            path = os.path.join(base_dir, filename)
            if path not in paths:
                paths.append(path)
        return paths

    def resolve(self) -> str:
        """Return the debug build path if one exists, else the bare name."""
        for path in self.candidates():
            if os.path.exists(path):
                return path
        return self.config.executable
