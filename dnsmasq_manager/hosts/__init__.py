"""
Static DHCP host entries, their file repository and service
"""

from .errors import (
    CorruptStoreError,
    DuplicateEntryError,
    HostsError,
    HostValidationError,
    InvalidFieldError,
    MalformedHostLineError,
)
from .model import StaticDhcpHost, decode, encode, equal
from .repository import HostRepository
from .service import HostService

__all__ = [
    'CorruptStoreError',
    'DuplicateEntryError',
    'HostRepository',
    'HostService',
    'HostValidationError',
    'HostsError',
    'InvalidFieldError',
    'MalformedHostLineError',
    'StaticDhcpHost',
    'decode',
    'encode',
    'equal',
]
