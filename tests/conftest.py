import ipaddress
import os

import pytest

from dnsmasq_manager.hosts import StaticDhcpHost


def make_host(mac, ip, hostname):
    return StaticDhcpHost(mac_address=mac, ip_address=ipaddress.IPv4Address(ip), hostname=hostname)


FOO = make_host('02:04:06:aa:bb:cc', '1.1.1.1', 'Foo')
BAR = make_host('02:04:06:dd:ee:ff', '1.1.1.2', 'Bar')
BAZ = make_host('02:04:06:12:34:56', '1.1.1.3', 'Baz')
UNKNOWN = make_host('02:04:06:aa:bb:ff', '9.9.9.9', 'Unknown')

ALL_HOSTS = [BAR, FOO, BAZ]

ALL_HOSTS_FILE_CONTENT = (
    "dhcp-host=02:04:06:dd:ee:ff,1.1.1.2,Bar\n"
    "dhcp-host=02:04:06:aa:bb:cc,1.1.1.1,Foo\n"
    "dhcp-host=02:04:06:12:34:56,1.1.1.3,Baz"
)
DELETED_FOO_FILE_CONTENT = (
    "dhcp-host=02:04:06:dd:ee:ff,1.1.1.2,Bar\n"
    "dhcp-host=02:04:06:12:34:56,1.1.1.3,Baz"
)
ADDED_UNKNOWN_FILE_CONTENT = ALL_HOSTS_FILE_CONTENT + "\ndhcp-host=02:04:06:aa:bb:ff,9.9.9.9,Unknown"
FOO_FILE_CONTENT = "dhcp-host=02:04:06:aa:bb:cc,1.1.1.1,Foo"
INVALID_HOSTS_FILE_CONTENT = "dhcp-host=ab:cd:ef:gh:ij:kl,1.1.1.1,Jung"

running_as_root = hasattr(os, 'geteuid') and os.geteuid() == 0
skip_if_root = pytest.mark.skipif(running_as_root, reason="file permissions are not enforced for root")


@pytest.fixture
def hosts_file(tmp_path):
    """Create a static hosts file with the given content and return its path"""
    def _create(content=''):
        path = tmp_path / 'dhcp-static-leases.conf'
        path.write_bytes(content.encode())
        return path
    return _create


@pytest.fixture
def read_only():
    """chmod a file to 0444 and restore write access afterwards"""
    paths = []

    def _make_read_only(path):
        os.chmod(path, 0o444)
        paths.append(path)
        return path

    yield _make_read_only

    for path in paths:
        if os.path.exists(path):
            os.chmod(path, 0o644)
