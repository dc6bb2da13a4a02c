from datetime import datetime
from typing import List

import pytest

from core.exceptions import DirectorySourceError
from core.inventory import ComputerSource
from core.models import RawComputerRecord

GENERATED_AT = datetime(2024, 5, 1, 9, 30, 0)


class StaticComputerSource(ComputerSource):
    """Directory stand-in returning a fixed record list"""

    def __init__(self, records: List[RawComputerRecord] = None, error: Exception = None):
        self.records = records or []
        self.error = error
        self.calls = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return None

    def fetch_computers(self) -> List[RawComputerRecord]:
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.records)


def make_record(name="WS01", operating_system="Windows 11 Pro", modern=None, legacy=None,
                enabled=True, last_logon=None, dn=None, version="10.0 (22631)"):
    return RawComputerRecord(
        name=name,
        operating_system=operating_system,
        operating_system_version=version,
        legacy_expiration=legacy,
        modern_expiration=modern,
        account_enabled=enabled,
        last_logon_timestamp=last_logon,
        distinguished_name=dn if dn is not None else f"CN={name},OU=Workstations,DC=corp,DC=local",
    )


@pytest.fixture
def sample_records():
    return [
        make_record("SRV-DC01", "Windows Server 2022 Standard", modern=133580000000000000,
                    last_logon=datetime(2024, 4, 30, 8, 15, 0),
                    dn="CN=SRV-DC01,OU=Domain Controllers,DC=corp,DC=local"),
        make_record("SRV-FS01", "Windows Server 2019 Datacenter", legacy=133570000000000000,
                    dn="CN=SRV-FS01,OU=Servers,DC=corp,DC=local"),
        make_record("WS02", "Windows 10 Enterprise", enabled=False),
        make_record("ws01", "Windows 11 Pro", modern=133590000000000000, legacy=133560000000000000,
                    last_logon=datetime(2024, 4, 29, 17, 2, 45)),
    ]


@pytest.fixture
def failing_source():
    return StaticComputerSource(error=DirectorySourceError("Cannot connect to ldap://dc01: timed out"))


@pytest.fixture
def ad_env(monkeypatch, tmp_path):
    monkeypatch.setenv("AD_SERVER", "ldap://dc01.corp.local")
    monkeypatch.setenv("AD_USERNAME", "CORP\\svc-report")
    monkeypatch.setenv("AD_PASSWORD", "secret")
    monkeypatch.setenv("BASE_DN", "DC=corp,DC=local")
    monkeypatch.setenv("AD_DOMAIN", "corp.local")
    monkeypatch.setenv("REPORT_OUTPUT_PATH", str(tmp_path / "out" / "report.html"))
    monkeypatch.delenv("LDAP_TIMEOUT", raising=False)
    monkeypatch.delenv("LDAP_PAGE_SIZE", raising=False)
    return tmp_path
