"""
dnsmasq Manager

Manages the static DHCP host reservations (dhcp-host= lines) read by
dnsmasq and exposes them through a small HTTP API.
"""

__version__ = "0.1.0"
__author__ = "dnsmasq-manager Team"

from .hosts import HostRepository, HostService, StaticDhcpHost

__all__ = ['HostRepository', 'HostService', 'StaticDhcpHost']
