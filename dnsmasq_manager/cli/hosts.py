"""
Static DHCP host management commands
"""

import sys

from ..client import HostsClient
from ..hosts import HostRepository, HostService, StaticDhcpHost
from ..hosts.model import check_hostname


class LocalHosts:
    """Same interface as HostsClient, working on the hosts file directly"""

    def __init__(self, path):
        self.service = HostService(HostRepository(path))

    def list(self):
        return self.service.fetch_all()

    def get(self, mac=None, ip=None):
        return self.service.fetch_by_mac(mac) if mac else self.service.fetch_by_ip(ip)

    def add(self, host):
        self.service.insert(host)

    def update(self, host):
        self.service.update(host)

    def delete(self, mac=None, ip=None):
        return self.service.remove_by_mac(mac) if mac else self.service.remove_by_ip(ip)


def register_hosts_commands(subparsers):
    """Register static host management commands"""
    hosts_parser = subparsers.add_parser('hosts', help='Static DHCP host management')
    hosts_parser.set_defaults(func=lambda args: args.parser.print_help(), parser=hosts_parser)
    target = hosts_parser.add_mutually_exclusive_group()
    target.add_argument('--file', help='Static hosts file (default: from configuration)')
    target.add_argument('--api', help='Base URL of a running dnsmasq-manager server')
    hosts_subparsers = hosts_parser.add_subparsers(dest='hosts_command', help='Host commands')

    list_parser = hosts_subparsers.add_parser('list', help='List static hosts')
    list_parser.set_defaults(func=hosts_list)

    get_parser = hosts_subparsers.add_parser('get', help='Show a static host')
    _add_key_arguments(get_parser)
    get_parser.set_defaults(func=hosts_get)

    add_parser = hosts_subparsers.add_parser('add', help='Add a static host, failing on duplicated MAC or IP')
    _add_host_arguments(add_parser)
    add_parser.set_defaults(func=hosts_add)

    update_parser = hosts_subparsers.add_parser(
        'update', help='Add or replace a static host, removing any host holding the same MAC or IP')
    _add_host_arguments(update_parser)
    update_parser.set_defaults(func=hosts_update)

    delete_parser = hosts_subparsers.add_parser('delete', help='Delete a static host')
    _add_key_arguments(delete_parser)
    delete_parser.set_defaults(func=hosts_delete)


def _add_key_arguments(parser):
    key = parser.add_mutually_exclusive_group(required=True)
    key.add_argument('--mac', help='MAC address')
    key.add_argument('--ip', help='IP address')


def _add_host_arguments(parser):
    parser.add_argument('mac', help='MAC address (e.g. 02:04:06:aa:bb:cc)')
    parser.add_argument('ip', help='IPv4 address')
    parser.add_argument('hostname', help='Hostname')


def get_hosts_backend(args):
    if getattr(args, 'api', None):
        return HostsClient(args.api)
    return LocalHosts(getattr(args, 'file', None) or args.config.host_static_file)


def print_hosts(hosts):
    if not hosts:
        print("No static hosts found")
        return

    print(f"{'MAC Address':<17} {'IP':<15} {'Hostname'}")
    print("-" * 50)
    for host in hosts:
        print(f"{host.mac_address:<17} {str(host.ip_address):<15} {host.hostname}")


def hosts_list(args):
    """List static hosts"""
    print_hosts(get_hosts_backend(args).list())


def hosts_get(args):
    """Show a static host"""
    host = get_hosts_backend(args).get(mac=args.mac, ip=args.ip)
    if host is None:
        print(f"No static host with {'MAC' if args.mac else 'IP'} address {args.mac or args.ip}")
        sys.exit(1)
    print_hosts([host])


def host_from_args(args):
    host = StaticDhcpHost.from_values(args.mac, args.ip, args.hostname)
    check_hostname(host.hostname)
    return host


def hosts_add(args):
    """Add a static host"""
    host = host_from_args(args)
    get_hosts_backend(args).add(host)
    print(f"Added {host}")


def hosts_update(args):
    """Add or replace a static host"""
    host = host_from_args(args)
    get_hosts_backend(args).update(host)
    print(f"Updated {host}")


def hosts_delete(args):
    """Delete a static host"""
    host = get_hosts_backend(args).delete(mac=args.mac, ip=args.ip)
    if host is None:
        print(f"No static host with {'MAC' if args.mac else 'IP'} address {args.mac or args.ip}")
        return
    print(f"Deleted {host}")
