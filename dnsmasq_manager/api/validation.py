"""
Request validation for the static host endpoints
"""

from ..hosts import model
from ..hosts.errors import InvalidFieldError
from ..hosts.model import is_valid_hostname

HOST_FIELDS = ('MacAddress', 'IPAddress', 'HostName')


def _field_error(field, reason, value):
    return {'field': field, 'reason': reason, 'value': '' if value is None else str(value)}


def validate_host_body(data):
    """
    Check a decoded JSON request body.

    Returns (host, []) when valid, otherwise (None, field_errors) listing
    every problem found.
    """
    errors = []
    for field in HOST_FIELDS:
        if data.get(field) in (None, ''):
            errors.append(_field_error(field, 'required', ''))

    mac = data.get('MacAddress')
    if mac not in (None, ''):
        try:
            model.parse_mac(mac)
        except InvalidFieldError:
            errors.append(_field_error('MacAddress', 'mac', mac))

    ip = data.get('IPAddress')
    if ip not in (None, ''):
        try:
            model.parse_ip(ip)
        except InvalidFieldError:
            errors.append(_field_error('IPAddress', 'ipv4', ip))

    hostname = data.get('HostName')
    if hostname not in (None, '') and not is_valid_hostname(hostname):
        errors.append(_field_error('HostName', 'hostname_rfc1123', hostname))

    if errors:
        return None, errors

    return model.StaticDhcpHost.from_dict(data), []
