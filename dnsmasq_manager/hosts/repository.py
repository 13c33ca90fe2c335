"""
Static DHCP hosts file repository.

The file is the only source of truth: every call reads it completely and
every mutation rewrites it completely. Nothing is cached between calls.
"""

import logging
import os
import tempfile

from . import model
from .errors import CorruptStoreError, HostsError
from .model import DHCP_HOST_PREFIX

logger = logging.getLogger(__name__)


class HostRepository:
    """Keyed access to the dhcp-host= lines of a single file"""

    def __init__(self, path):
        self.path = os.fspath(path)

    # -------- Reading --------

    def _load(self):
        """
        Read the store into a list of (line, host) pairs.

        host is None for lines that are not dhcp-host= entries; those lines
        are kept byte for byte so a rewrite does not alter them. Bytes that
        are not UTF-8 survive as surrogate escapes.
        """
        try:
            with open(self.path, 'r', encoding='utf-8', errors='surrogateescape', newline='') as f:
                content = f.read()
        except OSError as e:
            logger.error(f"Error reading static hosts file ({self.path}): {e}")
            raise

        lines = content.split('\n')
        if lines[-1] == '':
            lines.pop()

        entries = []
        for line_number, line in enumerate(lines, start=1):
            if not line.startswith(DHCP_HOST_PREFIX):
                logger.debug(f"Skipping line {line_number}: {line!r}")
                entries.append((line, None))
                continue

            try:
                host = model.decode(line[:-1] if line.endswith('\r') else line)
            except HostsError as e:
                logger.error(f"Failed to parse static DHCP host entry ({line!r}): {e}")
                raise CorruptStoreError(self.path, line_number, line, e) from e

            entries.append((line, host))

        return entries

    def find_all(self):
        """Return every host in file order"""
        return [host for _, host in self._load() if host is not None]

    def _find_first(self, predicate):
        for host in self.find_all():
            if predicate(host):
                return host
        return None

    def find(self, host):
        """Return the stored host equal to host, or None"""
        return self._find_first(lambda h: model.equal(h, host))

    def find_by_mac(self, mac_address):
        """Return the host holding mac_address, or None"""
        mac = model.parse_mac(mac_address)
        return self._find_first(lambda h: h.mac_address == mac)

    def find_by_ip(self, ip_address):
        """Return the host holding ip_address, or None"""
        ip = model.parse_ip(ip_address)
        return self._find_first(lambda h: h.ip_address == ip)

    # -------- Mutations --------

    def save(self, host):
        """Append host to the store"""
        line = model.encode(host)
        entries = self._load()
        entries.append((line, host))
        self._write(entries)
        logger.info(f"Saved static host {host}")

    def _delete_first(self, predicate):
        entries = self._load()
        for index, (_, host) in enumerate(entries):
            if host is not None and predicate(host):
                del entries[index]
                self._write(entries)
                logger.info(f"Deleted static host {host}")
                return host
        return None

    def delete(self, host):
        """Remove the stored host equal to host; return it, or None"""
        return self._delete_first(lambda h: model.equal(h, host))

    def delete_by_mac(self, mac_address):
        """Remove the host holding mac_address; return it, or None"""
        mac = model.parse_mac(mac_address)
        return self._delete_first(lambda h: h.mac_address == mac)

    def delete_by_ip(self, ip_address):
        """Remove the host holding ip_address; return it, or None"""
        ip = model.parse_ip(ip_address)
        return self._delete_first(lambda h: h.ip_address == ip)

    def _write(self, entries):
        """
        Replace the file content with entries in a single step.

        The target is opened for writing first (no create, no truncate) so a
        read-only or vanished file fails before anything changes. The new
        content then goes to a temporary file in the same directory which is
        renamed over the target. A symlinked path is resolved first so the
        link is kept and the file it points to is replaced.
        """
        content = '\n'.join(line for line, _ in entries)
        target = os.path.realpath(self.path)

        try:
            fd = os.open(target, os.O_WRONLY)
            os.close(fd)
        except OSError as e:
            logger.error(f"Error writing static hosts file ({self.path}): {e}")
            raise

        directory = os.path.dirname(target)
        fd, temp_path = tempfile.mkstemp(
            dir=directory,
            prefix=f'.{os.path.basename(target)}.',
            suffix='.tmp',
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8', errors='surrogateescape', newline='') as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())

            stat_info = os.stat(target)
            os.chmod(temp_path, stat_info.st_mode)
            try:
                os.chown(temp_path, stat_info.st_uid, stat_info.st_gid)
            except OSError as e:
                logger.warning(f"Could not preserve ownership of {target}: {e}")

            os.replace(temp_path, target)
        except OSError as e:
            logger.error(f"Error writing static hosts file ({target}): {e}")
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

        logger.debug(f"Wrote {len(content)} bytes to {target}")
