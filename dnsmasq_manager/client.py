"""
Client for a running dnsmasq Manager API
"""

import requests

from .hosts.errors import DuplicateEntryError
from .hosts.model import StaticDhcpHost

STATIC_HOSTS_PATH = '/api/v1/static/hosts'
STATIC_HOST_PATH = '/api/v1/static/host'


class ApiError(Exception):
    """Non-success response from the API"""

    def __init__(self, status_code, message):
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


def _key_params(mac, ip):
    if mac:
        return {'mac': mac}
    if ip:
        return {'ip': str(ip)}
    raise ValueError("Either a MAC or an IP address is required")


class HostsClient:
    def __init__(self, base_url, timeout=10, session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method, path, absent_ok=False, **kwargs):
        response = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        if absent_ok and response.status_code in (204, 404):
            return None
        if response.status_code == 409:
            raise self._duplicate_error(response)
        if not response.ok:
            raise ApiError(response.status_code, self._error_message(response))
        return response.json()

    @staticmethod
    def _error_message(response):
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason
        details = body.get('details')
        if isinstance(details, list):
            details = ', '.join(f"{d.get('field')}: {d.get('reason')} {d.get('value')}".strip() for d in details)
        return f"{body.get('message', response.reason)}: {details}" if details else body.get('message', response.reason)

    @staticmethod
    def _duplicate_error(response):
        # details read "Duplicated <MAC|IP> address: <value>"
        details = ''
        try:
            details = response.json().get('details', '')
        except ValueError:
            pass
        field, _, value = details.replace('Duplicated ', '', 1).partition(' address: ')
        return DuplicateEntryError(field or 'unknown', value)

    def list(self):
        data = self._request('GET', STATIC_HOSTS_PATH)
        return [StaticDhcpHost.from_dict(item) for item in data or []]

    def get(self, mac=None, ip=None):
        data = self._request('GET', STATIC_HOST_PATH, absent_ok=True, params=_key_params(mac, ip))
        return StaticDhcpHost.from_dict(data) if data else None

    def add(self, host):
        self._request('POST', STATIC_HOST_PATH, json=host.to_dict())

    def update(self, host):
        self._request('PUT', STATIC_HOST_PATH, json=host.to_dict())

    def delete(self, mac=None, ip=None):
        data = self._request('DELETE', STATIC_HOST_PATH, absent_ok=True, params=_key_params(mac, ip))
        return StaticDhcpHost.from_dict(data) if data else None
