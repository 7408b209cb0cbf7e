"""utility modules for nml-client"""

from nml_client.utils.singleton_utils import SingletonInstance
from nml_client.utils.logging_utils import Logger, TraceChannel, logging_func
from nml_client.utils.config_utils import (
    load_config_ini,
    get_config_value,
    get_config_bool,
    get_config_list,
)

__all__ = [
    "SingletonInstance",
    "Logger",
    "TraceChannel",
    "logging_func",
    "load_config_ini",
    "get_config_value",
    "get_config_bool",
    "get_config_list",
]
