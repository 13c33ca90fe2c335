"""
Configuration loading.

Settings come from, in increasing priority:
- built-in defaults
- <name>.yaml found in /etc/dnsmasq-manager/ or the working directory
- DMM_* environment variables (DMM stands for (d)ns(m)asq (M)anager),
  e.g. DMM_HOST_STATIC_FILE, DMM_SERVER_PORT, DMM_LOG_LEVEL
"""

import logging
import os
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)

CONFIG_PATHS = ['/etc/dnsmasq-manager/', '.']
ENV_PREFIX = 'DMM'

DEFAULT_DHCP_STATIC_HOST_FILE = '/etc/dnsmasq.d/04-dhcp-static-leases.conf'
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_SERVER_PORT = 6904

LOG_LEVELS = ('debug', 'info', 'warning', 'error')
LOG_FORMATS = ('json', 'text')


class ConfigError(Exception):
    """Invalid configuration file or value"""


@dataclass
class Config:
    host_static_file: str = DEFAULT_DHCP_STATIC_HOST_FILE
    server_host: str = DEFAULT_SERVER_HOST
    server_port: int = DEFAULT_SERVER_PORT
    log_level: str = 'info'
    log_file: str = ''
    log_format: str = 'json'
    log_source: bool = False


# dotted setting key -> Config attribute
SETTINGS = {
    'host.static.file': 'host_static_file',
    'server.host': 'server_host',
    'server.port': 'server_port',
    'log.level': 'log_level',
    'log.file': 'log_file',
    'log.format': 'log_format',
    'log.source': 'log_source',
}


def find_config_file(name, paths=None):
    """Return the first <name>.yaml found in paths, or None"""
    for directory in paths or CONFIG_PATHS:
        for extension in ('.yaml', '.yml'):
            candidate = os.path.join(directory, name + extension)
            if os.path.isfile(candidate):
                return candidate
    return None


def _lookup(data, dotted_key):
    """Case-insensitive nested lookup of a dotted key in a YAML mapping"""
    node = data
    for part in dotted_key.split('.'):
        if not isinstance(node, dict):
            return None
        matches = [value for key, value in node.items() if str(key).lower() == part]
        if not matches:
            return None
        node = matches[0]
    return node


def _coerce(attribute, value):
    if attribute == 'server_port':
        try:
            port = int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid server port: {value}")
        if not 0 < port < 65536:
            raise ConfigError(f"Server port out of range: {port}")
        return port

    if attribute == 'log_source':
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ('1', 'true', 'yes', 'on')

    value = '' if value is None else str(value)
    if attribute == 'log_level':
        value = value.lower()
        if value not in LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {value} (expected one of {', '.join(LOG_LEVELS)})")
    elif attribute == 'log_format':
        value = value.lower()
        if value not in LOG_FORMATS:
            raise ConfigError(f"Invalid log format: {value} (expected one of {', '.join(LOG_FORMATS)})")
    return value


def load_config(name='config', paths=None, environ=None):
    """Load configuration from defaults, YAML file and environment"""
    environ = os.environ if environ is None else environ
    values = {}

    config_file = find_config_file(name, paths)
    if config_file:
        try:
            with open(config_file) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read config file {config_file}: {e}")
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_file} must contain a mapping")

        for key, attribute in SETTINGS.items():
            value = _lookup(data, key)
            if value is not None:
                values[attribute] = value

    for key, attribute in SETTINGS.items():
        env_name = f"{ENV_PREFIX}_{key.replace('.', '_').upper()}"
        if env_name in environ:
            values[attribute] = environ[env_name]

    config = Config(**{attribute: _coerce(attribute, value) for attribute, value in values.items()})
    logger.debug(f"Loaded configuration from {config_file or 'defaults'}: {config}")
    return config
