"""configuration management utilities"""

import os
import shlex
import configparser
from typing import List, Optional

global_config = configparser.ConfigParser()

CONFIG_PATH_ENV = "NML_CLIENT_CONFIG"


def load_config_ini(config_path: Optional[str] = None) -> None:
    """load configuration file

    Args:
        config_path: path to config.ini file (defaults to $NML_CLIENT_CONFIG,
                     then ./config.ini)
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_PATH_ENV, "./config.ini")
    if os.path.exists(config_path):
        global_config.read(config_path, encoding="utf-8")


def reset_config() -> None:
    """forget every loaded section (for testing)"""
    for section in global_config.sections():
        global_config.remove_section(section)


def get_config_value(section: str, key: str, default=None):
    """get configuration value

    Args:
        section: config section name
        key: config key name
        default: default value if not found

    Returns:
        config value or default
    """
    try:
        return global_config.get(section, key)
    except (configparser.NoSectionError, configparser.NoOptionError):
        return default


def get_config_bool(section: str, key: str, default: bool = False) -> bool:
    """get configuration value as boolean"""
    value = get_config_value(section, key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def get_config_list(
    section: str,
    key: str,
    default: Optional[List[str]] = None,
) -> Optional[List[str]]:
    """get configuration value as a shell-style token list

    `lsp --log trace` -> ["lsp", "--log", "trace"]
    """
    value = get_config_value(section, key)
    if value is None:
        return default
    return shlex.split(value)


# auto-load on import
load_config_ini()
