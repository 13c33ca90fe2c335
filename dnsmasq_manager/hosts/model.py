"""
Static DHCP host entries and their dnsmasq configuration line format.

A reservation is stored by dnsmasq as:

    dhcp-host=02:04:06:aa:bb:cc,10.0.0.11,s1

MAC Address Formats:
- Canonical: lowercase, colon separated (02:04:06:aa:bb:cc), used in the file
- Also accepted on input: hyphen separated (02-04-06-AA-BB-CC) and
  Cisco dotted (0204.06aa.bbcc), any case
"""

import ipaddress
import re
from dataclasses import dataclass
from typing import Optional

from .errors import HostValidationError, InvalidFieldError, MalformedHostLineError

DHCP_HOST_PREFIX = 'dhcp-host='

MAC_PAIRS_PATTERN = re.compile(r'^[0-9a-fA-F]{2}([:-])(?:[0-9a-fA-F]{2}\1){4}[0-9a-fA-F]{2}$')
MAC_DOTTED_PATTERN = re.compile(r'^[0-9a-fA-F]{4}\.[0-9a-fA-F]{4}\.[0-9a-fA-F]{4}$')
HOSTNAME_LABEL = re.compile(r'[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?')

# characters that would split a dhcp-host= line into extra tokens or lines
HOSTNAME_FORBIDDEN = (',', '\n', '\r')


def parse_mac(value):
    """Normalize a MAC address to lowercase colon separated form"""
    if not isinstance(value, str):
        raise InvalidFieldError('MacAddress', 'invalid MAC address', str(value))

    if MAC_PAIRS_PATTERN.fullmatch(value):
        digits = value.replace(':', '').replace('-', '')
    elif MAC_DOTTED_PATTERN.fullmatch(value):
        digits = value.replace('.', '')
    else:
        raise InvalidFieldError('MacAddress', 'invalid MAC address', value)

    digits = digits.lower()
    return ':'.join(digits[i:i+2] for i in range(0, 12, 2))


def parse_ip(value):
    """Parse a dotted IPv4 address"""
    if isinstance(value, ipaddress.IPv4Address):
        return value
    if not isinstance(value, str):
        raise InvalidFieldError('IPAddress', 'invalid IP address', str(value))
    try:
        return ipaddress.IPv4Address(value)
    except ValueError:
        raise InvalidFieldError('IPAddress', 'invalid IP address', str(value))


def is_valid_hostname(hostname):
    """RFC 1123 hostname: dot separated labels of letters, digits and inner hyphens"""
    if not isinstance(hostname, str) or not 0 < len(hostname) <= 253:
        return False
    return all(HOSTNAME_LABEL.fullmatch(label) for label in hostname.split('.'))


def check_hostname(hostname):
    """Raise HostValidationError unless hostname is a valid RFC 1123 name"""
    if not is_valid_hostname(hostname):
        raise HostValidationError([InvalidFieldError('HostName', f"invalid hostname {hostname!r}")])


@dataclass(frozen=True)
class StaticDhcpHost:
    """
    One static DHCP reservation.

    Addresses are held in canonical form (see parse_mac/parse_ip) so that
    plain dataclass equality compares them exactly.
    """

    mac_address: Optional[str] = None
    ip_address: Optional[ipaddress.IPv4Address] = None
    hostname: str = ''

    @classmethod
    def from_values(cls, mac_address, ip_address, hostname):
        """
        Build a host from raw strings.

        MAC, IP and hostname are checked independently; every problem is
        reported in a single HostValidationError.
        """
        errors = []
        mac = ip = None

        try:
            mac = parse_mac(mac_address)
        except InvalidFieldError as e:
            errors.append(e)

        try:
            ip = parse_ip(ip_address)
        except InvalidFieldError as e:
            errors.append(e)

        if not hostname:
            errors.append(InvalidFieldError('HostName', 'missing hostname'))

        if errors:
            raise HostValidationError(errors)

        return cls(mac_address=mac, ip_address=ip, hostname=hostname)

    @classmethod
    def from_dict(cls, data):
        return cls.from_values(data.get('MacAddress'), data.get('IPAddress'), data.get('HostName'))

    def to_dict(self):
        return {
            'MacAddress': self.mac_address,
            'IPAddress': str(self.ip_address) if self.ip_address is not None else None,
            'HostName': self.hostname,
        }

    def __str__(self):
        return f"{self.hostname} ({self.ip_address}, {self.mac_address})"


def decode(line):
    """
    Parse a dhcp-host= configuration line.

    :raises MalformedHostLineError: line is not <prefix><mac>,<ip>,<hostname>
    :raises HostValidationError: one or more fields are invalid
    """
    tokens = line.split(',')
    if len(tokens) != 3 or not tokens[0].startswith(DHCP_HOST_PREFIX):
        raise MalformedHostLineError(line)

    mac = tokens[0][len(DHCP_HOST_PREFIX):]
    return StaticDhcpHost.from_values(mac, tokens[1], tokens[2])


def check(host):
    """
    Report every field of host that cannot be written, in a single
    HostValidationError: unset fields and hostnames that would not decode.
    """
    errors = []
    if not host.mac_address:
        errors.append(InvalidFieldError('MacAddress', 'missing MAC address'))
    if host.ip_address is None:
        errors.append(InvalidFieldError('IPAddress', 'missing IP address'))
    if not host.hostname:
        errors.append(InvalidFieldError('HostName', 'missing hostname'))
    elif any(c in host.hostname for c in HOSTNAME_FORBIDDEN):
        errors.append(InvalidFieldError('HostName', f"hostname {host.hostname!r} breaks the line format"))
    if errors:
        raise HostValidationError(errors)


def encode(host):
    """Render host as a dhcp-host= configuration line"""
    check(host)
    return f"{DHCP_HOST_PREFIX}{host.mac_address.lower()},{host.ip_address},{host.hostname}"


def equal(a, b):
    """Field by field equality of two hosts"""
    return (a.mac_address == b.mac_address
            and a.ip_address == b.ip_address
            and a.hostname == b.hostname)
