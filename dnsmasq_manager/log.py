"""
Logging setup for the server and CLI
"""

import json
import logging
from datetime import datetime, timezone

TEXT_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
TEXT_SOURCE_FORMAT = '%(asctime)s - %(levelname)s - %(pathname)s:%(lineno)d - %(message)s'

LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


class JSONFormatter(logging.Formatter):
    """One JSON object per log record"""

    def __init__(self, source=False):
        super().__init__()
        self.source = source

    def format(self, record):
        entry = {
            'time': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if self.source:
            entry['source'] = f"{record.pathname}:{record.lineno}"
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(level='info', file='', fmt='json', source=False):
    """Configure the root logger"""
    handler = logging.FileHandler(file) if file else logging.StreamHandler()

    if fmt == 'json':
        handler.setFormatter(JSONFormatter(source=source))
    else:
        handler.setFormatter(logging.Formatter(TEXT_SOURCE_FORMAT if source else TEXT_FORMAT))

    logging.basicConfig(level=LEVELS.get(level, logging.INFO), handlers=[handler], force=True)


def setup_logging_from_config(config):
    setup_logging(config.log_level, config.log_file, config.log_format, config.log_source)
