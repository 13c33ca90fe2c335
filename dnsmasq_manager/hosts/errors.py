"""
Exceptions raised by the host codec, repository and service.

Missing and unreadable store files are reported with the built-in
FileNotFoundError and PermissionError, so they are not redefined here.
"""


class HostsError(Exception):
    """Base class for static host errors"""


class InvalidFieldError(HostsError, ValueError):
    """A single field of a host entry failed validation"""

    def __init__(self, field, reason, value=''):
        self.field = field
        self.reason = reason
        self.value = value
        super().__init__(self._format())

    def _format(self):
        if self.value:
            return f"address {self.value}: {self.reason}"
        return f"invalid DHCP host: {self.reason}"


class HostValidationError(HostsError, ValueError):
    """Joined report of every field problem found in a host entry"""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__('\n'.join(str(e) for e in self.errors))


class MalformedHostLineError(HostsError, ValueError):
    """A line does not have the dhcp-host=<mac>,<ip>,<hostname> shape"""

    def __init__(self, line):
        self.line = line
        super().__init__(f"invalid DHCP host config: {line}")


class CorruptStoreError(HostsError):
    """A dhcp-host= line in the store could not be decoded"""

    def __init__(self, path, line_number, line, cause):
        self.path = path
        self.line_number = line_number
        self.line = line
        self.cause = cause
        super().__init__(f"corrupt static hosts file {path}, line {line_number}: {cause}")


class DuplicateEntryError(HostsError):
    """Another host already holds the MAC or IP address"""

    def __init__(self, field, value):
        self.field = field
        self.value = value
        super().__init__(f"Duplicated {field} address: {value}")
