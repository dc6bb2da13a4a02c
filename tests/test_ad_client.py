from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from ldap3.core.exceptions import LDAPException

import core.ad_client as ad_client_module
from core.ad_client import (
    COMPUTER_ATTRIBUTES, COMPUTER_FILTER, LEGACY_LAPS_ATTRIBUTE, MODERN_LAPS_ATTRIBUTE,
    ActiveDirectoryClient, is_windows, to_datetime
)
from core.exceptions import DirectorySourceError


class FakeConnection:
    """Stands in for an ldap3 Connection with paged search"""

    def __init__(self, entries=None, schema_attributes=None, error=None):
        self.entries = entries or []
        self.error = error
        self.search_kwargs = None
        self.unbound = False
        schema = None
        if schema_attributes is not None:
            schema = SimpleNamespace(attribute_types={name: object() for name in schema_attributes})
        self.server = SimpleNamespace(schema=schema)
        self.extend = SimpleNamespace(standard=SimpleNamespace(paged_search=self._paged_search))

    def _paged_search(self, **kwargs):
        self.search_kwargs = kwargs
        if self.error:
            raise self.error
        return iter(self.entries)

    def unbind(self):
        self.unbound = True


def _entry(name, os_name, uac=4096, **extra):
    attributes = {
        'name': name,
        'operatingSystem': os_name,
        'operatingSystemVersion': '10.0 (20348)',
        'userAccountControl': uac,
        'lastLogonTimestamp': [],
        'distinguishedName': f'CN={name},OU=Servers,DC=corp,DC=local',
        MODERN_LAPS_ATTRIBUTE: [],
        LEGACY_LAPS_ATTRIBUTE: [],
    }
    attributes.update(extra)
    return {'type': 'searchResEntry', 'dn': attributes['distinguishedName'], 'attributes': attributes}


def _client(connection):
    client = ActiveDirectoryClient('ldap://dc01', 'CORP\\svc', 'pw', 'DC=corp,DC=local', page_size=250)
    client.connection = connection
    return client


def test_fetch_computers_maps_entries():
    logon = datetime(2024, 4, 30, 8, 0, tzinfo=timezone.utc)
    connection = FakeConnection([
        _entry('SRV01', 'Windows Server 2022 Standard',
               **{MODERN_LAPS_ATTRIBUTE: 133590000000000000, 'lastLogonTimestamp': logon}),
        _entry('WS01', 'Windows 11 Pro', uac=4098, **{LEGACY_LAPS_ATTRIBUTE: ['133560000000000000']}),
    ])

    records = _client(connection).fetch_computers()

    assert [r.name for r in records] == ['SRV01', 'WS01']
    assert records[0].modern_expiration == 133590000000000000
    assert records[0].legacy_expiration is None
    assert records[0].last_logon_timestamp == logon
    assert records[0].account_enabled is True
    assert records[0].distinguished_name == 'CN=SRV01,OU=Servers,DC=corp,DC=local'
    assert records[1].legacy_expiration == '133560000000000000'
    assert records[1].account_enabled is False
    assert records[1].last_logon_timestamp is None


def test_search_parameters():
    connection = FakeConnection([])
    _client(connection).fetch_computers()

    assert connection.search_kwargs['search_base'] == 'DC=corp,DC=local'
    assert connection.search_kwargs['search_filter'] == COMPUTER_FILTER
    assert connection.search_kwargs['attributes'] == COMPUTER_ATTRIBUTES
    assert connection.search_kwargs['paged_size'] == 250
    assert connection.search_kwargs['generator'] is True


def test_non_windows_and_referrals_are_skipped():
    connection = FakeConnection([
        _entry('LNX01', 'Ubuntu 22.04'),
        _entry('WS01', 'WINDOWS 10 Enterprise'),
        {'type': 'searchResRef', 'uri': ['ldap://other.corp.local/DC=other']},
        _entry('EMPTY', ''),
    ])

    records = _client(connection).fetch_computers()
    assert [r.name for r in records] == ['WS01']


def test_missing_laps_schema_attributes_are_not_requested():
    base = [a for a in COMPUTER_ATTRIBUTES if a not in (LEGACY_LAPS_ATTRIBUTE, MODERN_LAPS_ATTRIBUTE)]
    connection = FakeConnection([], schema_attributes=base + [MODERN_LAPS_ATTRIBUTE])

    _client(connection).fetch_computers()

    requested = connection.search_kwargs['attributes']
    assert MODERN_LAPS_ATTRIBUTE in requested
    assert LEGACY_LAPS_ATTRIBUTE not in requested


def test_search_failure_raises_directory_error():
    connection = FakeConnection(error=LDAPException('insufficientAccessRights'))
    with pytest.raises(DirectorySourceError, match='insufficientAccessRights'):
        _client(connection).fetch_computers()


def test_fetch_without_connection():
    client = ActiveDirectoryClient('ldap://dc01', 'u', 'p', 'DC=corp,DC=local')
    with pytest.raises(DirectorySourceError):
        client.fetch_computers()


def test_connect_failure_raises_directory_error(monkeypatch):
    def refuse(*args, **kwargs):
        raise LDAPException('socket connection error')

    monkeypatch.setattr(ad_client_module, 'Connection', refuse)
    client = ActiveDirectoryClient('ldap://dc01', 'u', 'p', 'DC=corp,DC=local', timeout=5)

    with pytest.raises(DirectorySourceError, match='socket connection error'):
        with client:
            pass


def test_context_manager_unbinds(monkeypatch):
    connection = FakeConnection([])
    captured = {}

    def fake_connection(server, **kwargs):
        captured.update(kwargs)
        return connection

    monkeypatch.setattr(ad_client_module, 'Connection', fake_connection)

    with ActiveDirectoryClient('ldap://dc01', 'u', 'p', 'DC=corp,DC=local', timeout=7) as client:
        assert client.connection is connection

    assert connection.unbound
    assert client.connection is None
    assert captured['receive_timeout'] == 7
    assert captured['auto_bind'] is True


class TestToDatetime:

    def test_filetime_integer(self):
        assert to_datetime(133589952000000000) == datetime(2024, 5, 1, 0, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, '', 0, '0', 9223372036854775807, 'garbage',
                                       datetime(1601, 1, 1, tzinfo=timezone.utc)])
    def test_never(self, value):
        assert to_datetime(value) is None

    def test_datetime_passthrough(self):
        moment = datetime(2024, 1, 2, 3, 4, 5)
        assert to_datetime(moment) is moment


@pytest.mark.parametrize("os_name,expected", [
    ('Windows Server 2022', True),
    ('windows 11 pro', True),
    ('Mac OS X', False),
    ('', False),
    (None, False),
])
def test_is_windows(os_name, expected):
    assert is_windows(os_name) is expected
