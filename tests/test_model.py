"""Tests for the dhcp-host= line codec."""

import ipaddress

import pytest

from dnsmasq_manager.hosts import (
    HostValidationError,
    InvalidFieldError,
    MalformedHostLineError,
    StaticDhcpHost,
    decode,
    encode,
    equal,
)
from dnsmasq_manager.hosts.model import check_hostname, is_valid_hostname, parse_ip, parse_mac

from .conftest import BAR, FOO, make_host

VALID_HOST_CONFIG = "dhcp-host=02:04:06:aa:bb:cc,1.1.1.1,Foo"
INVALID_IP_ADDRESS = "11.1.1"
INVALID_MAC_ADDRESS = "ab:cd:ef:gh:ij:kl"


class TestDecode:
    def test_valid_line(self) -> None:
        assert decode(VALID_HOST_CONFIG) == FOO

    def test_uppercase_mac_is_normalized(self) -> None:
        assert decode("dhcp-host=02:04:06:AA:BB:CC,1.1.1.1,Foo") == FOO

    def test_invalid_ip_address(self) -> None:
        with pytest.raises(HostValidationError) as excinfo:
            decode(f"dhcp-host=02:04:06:aa:bb:cc,{INVALID_IP_ADDRESS},Foo")
        assert str(excinfo.value) == f"address {INVALID_IP_ADDRESS}: invalid IP address"

    def test_invalid_mac_address(self) -> None:
        with pytest.raises(HostValidationError) as excinfo:
            decode(f"dhcp-host={INVALID_MAC_ADDRESS},1.1.1.1,Foo")
        assert str(excinfo.value) == f"address {INVALID_MAC_ADDRESS}: invalid MAC address"

    def test_invalid_both_addresses_reports_both(self) -> None:
        with pytest.raises(HostValidationError) as excinfo:
            decode(f"dhcp-host={INVALID_MAC_ADDRESS},{INVALID_IP_ADDRESS},Foo")
        message = str(excinfo.value)
        assert f"address {INVALID_MAC_ADDRESS}: invalid MAC address" in message
        assert f"address {INVALID_IP_ADDRESS}: invalid IP address" in message
        assert [e.field for e in excinfo.value.errors] == ['MacAddress', 'IPAddress']

    @pytest.mark.parametrize("line", [
        "dhcp-range=10.0.0.100,10.0.0.200,12h",
        "address=/example.com/1.2.3.4",
        "dhcp-host=02:04:06:aa:bb:cc,Foo",
        "dhcp-host=02:04:06:aa:bb:cc,1.1.1.1",
        "dhcp-host=1.1.1.1,Foo",
        "dhcp-host=02:04:06:aa:bb:cc,1.1.1.1,Foo,infinite",
        "host=02:04:06:aa:bb:cc,1.1.1.1,Foo",
    ])
    def test_malformed_line(self, line) -> None:
        with pytest.raises(MalformedHostLineError) as excinfo:
            decode(line)
        assert str(excinfo.value) == f"invalid DHCP host config: {line}"

    def test_malformed_line_is_not_a_field_error(self) -> None:
        with pytest.raises(MalformedHostLineError) as excinfo:
            decode("dhcp-host=02:04:06:aa:bb:cc,Foo")
        assert not isinstance(excinfo.value, HostValidationError)

    def test_empty_hostname(self) -> None:
        with pytest.raises(HostValidationError, match="missing hostname"):
            decode("dhcp-host=02:04:06:aa:bb:cc,1.1.1.1,")


class TestEncode:
    def test_valid_host(self) -> None:
        assert encode(FOO) == VALID_HOST_CONFIG

    def test_missing_mac_address(self) -> None:
        host = StaticDhcpHost(ip_address=ipaddress.IPv4Address('1.1.1.1'), hostname='Foo')
        with pytest.raises(HostValidationError) as excinfo:
            encode(host)
        assert str(excinfo.value) == "invalid DHCP host: missing MAC address"

    def test_missing_ip_address(self) -> None:
        host = StaticDhcpHost(mac_address='02:04:06:aa:bb:cc', hostname='Foo')
        with pytest.raises(HostValidationError) as excinfo:
            encode(host)
        assert str(excinfo.value) == "invalid DHCP host: missing IP address"

    def test_missing_hostname(self) -> None:
        host = StaticDhcpHost(mac_address='02:04:06:aa:bb:cc', ip_address=ipaddress.IPv4Address('1.1.1.1'))
        with pytest.raises(HostValidationError) as excinfo:
            encode(host)
        assert str(excinfo.value) == "invalid DHCP host: missing hostname"

    def test_empty_host_reports_every_missing_field(self) -> None:
        with pytest.raises(HostValidationError) as excinfo:
            encode(StaticDhcpHost())
        assert str(excinfo.value).splitlines() == [
            "invalid DHCP host: missing MAC address",
            "invalid DHCP host: missing IP address",
            "invalid DHCP host: missing hostname",
        ]

    def test_decode_encode_round_trip(self) -> None:
        for host in (FOO, BAR, make_host('00:00:00:00:00:01', '255.255.255.254', 'a-b.example')):
            assert decode(encode(host)) == host

    @pytest.mark.parametrize("hostname", ["a,b", "bar\n.baz", "Foo\r"])
    def test_hostname_that_breaks_the_line(self, hostname) -> None:
        host = make_host('02:04:06:aa:bb:cc', '1.1.1.1', hostname)
        with pytest.raises(HostValidationError, match="breaks the line format"):
            encode(host)


class TestEqual:
    def test_same_hosts(self) -> None:
        assert equal(FOO, decode(VALID_HOST_CONFIG))

    def test_empty_hosts(self) -> None:
        assert equal(StaticDhcpHost(), StaticDhcpHost())

    @pytest.mark.parametrize("other", [
        make_host('02:04:06:aa:bb:cc', '1.1.1.2', 'Foo'),
        make_host('02:04:06:aa:bb:cd', '1.1.1.1', 'Foo'),
        make_host('02:04:06:aa:bb:cc', '1.1.1.1', 'foo'),
        BAR,
    ])
    def test_different_hosts(self, other) -> None:
        assert not equal(FOO, other)


class TestAddressParsing:
    @pytest.mark.parametrize("value", [
        "02:04:06:aa:bb:cc",
        "02:04:06:AA:BB:CC",
        "02-04-06-aa-bb-cc",
        "0204.06aa.bbcc",
    ])
    def test_mac_forms(self, value) -> None:
        assert parse_mac(value) == "02:04:06:aa:bb:cc"

    @pytest.mark.parametrize("value", [
        "", "02:04:06:aa:bb", "02:04:06:aa:bb:cc:dd", "02:04-06:aa:bb:cc", "02:04:06:aa:bb:cc\n",
        INVALID_MAC_ADDRESS, None,
    ])
    def test_invalid_mac(self, value) -> None:
        with pytest.raises(InvalidFieldError):
            parse_mac(value)

    @pytest.mark.parametrize("value", ["1111", "11.1.1", "256.1.1.1", "::1", "", None, 16843009])
    def test_invalid_ip(self, value) -> None:
        with pytest.raises(InvalidFieldError):
            parse_ip(value)

    def test_from_dict_to_dict(self) -> None:
        data = {'MacAddress': '02:04:06:AA:BB:CC', 'IPAddress': '1.1.1.1', 'HostName': 'Foo'}
        host = StaticDhcpHost.from_dict(data)
        assert host == FOO
        assert host.to_dict() == {'MacAddress': '02:04:06:aa:bb:cc', 'IPAddress': '1.1.1.1', 'HostName': 'Foo'}


class TestHostname:
    @pytest.mark.parametrize("hostname", ["Foo", "a-b.example", "s1", "x" * 63, "a." * 126 + "b"])
    def test_valid(self, hostname) -> None:
        assert is_valid_hostname(hostname)

    @pytest.mark.parametrize("hostname", [
        "", "B@r", "a,b", "bar\n", "bar\n.baz", "-foo", "foo-", "a..b", "x" * 64, "a." * 127 + "b", None,
    ])
    def test_invalid(self, hostname) -> None:
        assert not is_valid_hostname(hostname)

    def test_check_hostname(self) -> None:
        check_hostname("Foo")
        with pytest.raises(HostValidationError, match="invalid hostname 'a,b'"):
            check_hostname("a,b")
