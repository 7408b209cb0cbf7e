"""Extension entry points called by the host.

The host hands the same ``ExtensionContext`` to ``activate`` and
``deactivate``; the context owns the lifecycle manager, so no module state
is involved.
"""

from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

from nml_client.lsp.manager import ClientLifecycleManager
from nml_client.lsp.settings import ClientConfig, load_client_config
from nml_client.utils.logging_utils import logging_func


@dataclass
class ExtensionContext:
    config: ClientConfig
    lifecycle: ClientLifecycleManager
    # async cleanups run (last registered first) on deactivate
    subscriptions: List[Callable[[], Awaitable[None]]] = field(default_factory=list)


def create_context(config: Optional[ClientConfig] = None, **manager_kwargs) -> ExtensionContext:
    """Build a context from ``config`` or the loaded config.ini.

    Extra keyword arguments go to ``ClientLifecycleManager``.
    """
    if config is None:
        config = load_client_config()
    return ExtensionContext(
        config=config,
        lifecycle=ClientLifecycleManager(config, **manager_kwargs),
    )


@logging_func("start nml language client")
async def activate(context: ExtensionContext):
    await context.lifecycle.activate()


@logging_func("stop nml language client")
async def deactivate(context: ExtensionContext):
    try:
        await context.lifecycle.deactivate()
    finally:
        while context.subscriptions:
            cleanup = context.subscriptions.pop()
            await cleanup()
