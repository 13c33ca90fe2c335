"""
Static host service: global MAC/IP uniqueness on top of the repository
"""

import logging

from .errors import DuplicateEntryError

logger = logging.getLogger(__name__)


class HostService:
    def __init__(self, repository):
        self.repository = repository

    def insert(self, host):
        """
        Add a new host.

        :raises DuplicateEntryError: MAC or IP already in use (MAC is checked first)
        """
        if self.repository.find_by_mac(host.mac_address) is not None:
            logger.warning(f"Rejected {host}: MAC address already in use")
            raise DuplicateEntryError('MAC', host.mac_address)

        if self.repository.find_by_ip(host.ip_address) is not None:
            logger.warning(f"Rejected {host}: IP address already in use")
            raise DuplicateEntryError('IP', str(host.ip_address))

        self.repository.save(host)

    def update(self, host):
        """
        Insert or replace host.

        Whatever currently holds the MAC or the IP is removed first, even if
        it is an unrelated host.
        """
        replaced_mac = self.repository.delete_by_mac(host.mac_address)
        replaced_ip = self.repository.delete_by_ip(host.ip_address)
        for replaced in (replaced_mac, replaced_ip):
            if replaced is not None:
                logger.info(f"Replacing {replaced} with {host}")

        self.repository.save(host)

    def fetch_all(self):
        return self.repository.find_all()

    def fetch_by_mac(self, mac_address):
        return self.repository.find_by_mac(mac_address)

    def fetch_by_ip(self, ip_address):
        return self.repository.find_by_ip(ip_address)

    def remove_by_mac(self, mac_address):
        return self.repository.delete_by_mac(mac_address)

    def remove_by_ip(self, ip_address):
        return self.repository.delete_by_ip(ip_address)
