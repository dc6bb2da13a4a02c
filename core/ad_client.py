# =============================================================================
# core/ad_client.py - Active Directory computer reader
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from ldap3 import Server, Connection, ALL, SUBTREE
from ldap3.core.exceptions import LDAPException

from core.exceptions import DirectorySourceError
from core.inventory import ComputerSource
from core.models import RawComputerRecord

LEGACY_LAPS_ATTRIBUTE = 'ms-Mcs-AdmPwdExpirationTime'
MODERN_LAPS_ATTRIBUTE = 'msLAPS-PasswordExpirationTime'

COMPUTER_FILTER = '(&(objectCategory=computer)(operatingSystem=*Windows*))'
COMPUTER_ATTRIBUTES = [
    'name', 'operatingSystem', 'operatingSystemVersion',
    MODERN_LAPS_ATTRIBUTE, LEGACY_LAPS_ATTRIBUTE,
    'userAccountControl', 'lastLogonTimestamp', 'distinguishedName'
]
OPTIONAL_ATTRIBUTES = {LEGACY_LAPS_ATTRIBUTE, MODERN_LAPS_ATTRIBUTE}

FILETIME_EPOCH = datetime(1601, 1, 1, tzinfo=timezone.utc)


class ActiveDirectoryClient(ComputerSource):
    """Reads Windows computer objects and their LAPS attributes from Active Directory"""

    def __init__(self, server_url: str, username: str, password: str, base_dn: str,
                 timeout: int = 30, page_size: int = 500):
        self.server_url = server_url
        self.username = username
        self.password = password
        self.base_dn = base_dn
        self.timeout = timeout
        self.page_size = page_size
        self.connection: Optional[Connection] = None
        self.logger = logging.getLogger(__name__)

    def __enter__(self):
        """Context manager entry"""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.disconnect()

    def connect(self) -> None:
        """Establish connection to Active Directory"""
        try:
            server = Server(self.server_url, get_info=ALL, connect_timeout=self.timeout)
            self.connection = Connection(
                server,
                user=self.username,
                password=self.password,
                auto_bind=True,
                receive_timeout=self.timeout,
                raise_exceptions=True
            )
            self.logger.info(f"Successfully connected to Active Directory at {self.server_url}")
        except LDAPException as e:
            self.logger.error(f"Failed to connect to AD: {e}")
            raise DirectorySourceError(f"Cannot connect to {self.server_url}: {e}") from e

    def disconnect(self) -> None:
        """Close Active Directory connection"""
        if self.connection:
            self.connection.unbind()
            self.connection = None
            self.logger.info("Disconnected from Active Directory")

    def fetch_computers(self) -> List[RawComputerRecord]:
        """Page through every Windows computer object under the base DN"""
        if not self.connection:
            raise DirectorySourceError("Not connected to Active Directory")

        attributes = self._available_attributes()
        records = []
        skipped = 0

        try:
            entries = self.connection.extend.standard.paged_search(
                search_base=self.base_dn,
                search_filter=COMPUTER_FILTER,
                search_scope=SUBTREE,
                attributes=attributes,
                paged_size=self.page_size,
                generator=True
            )

            for entry in entries:
                if entry.get('type') != 'searchResEntry':
                    continue

                record = self._to_record(entry)
                if not is_windows(record.operating_system):
                    skipped += 1
                    continue
                records.append(record)

        except LDAPException as e:
            self.logger.error(f"Computer search under {self.base_dn} failed: {e}")
            raise DirectorySourceError(f"Computer search failed: {e}") from e

        if skipped:
            self.logger.debug(f"Skipped {skipped} non-Windows computer objects")
        self.logger.info(f"Retrieved {len(records)} Windows computers from {self.base_dn}")
        return records

    def _available_attributes(self) -> List[str]:
        """Drop LAPS attributes the directory schema does not define"""
        schema = self.connection.server.schema
        if schema is None:
            return list(COMPUTER_ATTRIBUTES)

        attributes = []
        for attribute in COMPUTER_ATTRIBUTES:
            if attribute in OPTIONAL_ATTRIBUTES and attribute not in schema.attribute_types:
                self.logger.warning(f"Schema has no {attribute} attribute, treating it as unset")
                continue
            attributes.append(attribute)
        return attributes

    def _to_record(self, entry: Dict[str, Any]) -> RawComputerRecord:
        attrs = entry.get('attributes', {})
        dn = _first(attrs.get('distinguishedName')) or entry.get('dn', '')

        return RawComputerRecord(
            name=str(_first(attrs.get('name')) or ''),
            operating_system=str(_first(attrs.get('operatingSystem')) or ''),
            operating_system_version=str(_first(attrs.get('operatingSystemVersion')) or ''),
            legacy_expiration=_first(attrs.get(LEGACY_LAPS_ATTRIBUTE)),
            modern_expiration=_first(attrs.get(MODERN_LAPS_ATTRIBUTE)),
            account_enabled=self._is_account_active(_first(attrs.get('userAccountControl')) or 0),
            last_logon_timestamp=to_datetime(_first(attrs.get('lastLogonTimestamp'))),
            distinguished_name=str(dn)
        )

    def _is_account_active(self, user_account_control: int) -> bool:
        """Check if account is active based on userAccountControl flags"""
        # 0x2 = ACCOUNTDISABLE flag
        return not bool(int(user_account_control) & 0x2)


def is_windows(operating_system: Optional[str]) -> bool:
    """Check if an operatingSystem value names a Windows release"""
    return bool(operating_system) and 'windows' in operating_system.lower()


def to_datetime(value: Any) -> Optional[datetime]:
    """Normalize an AD timestamp (datetime or FILETIME integer) to a datetime"""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value if value.year > 1601 else None

    try:
        filetime = int(value)
    except (TypeError, ValueError):
        return None
    if filetime <= 0:
        return None
    try:
        return FILETIME_EPOCH + timedelta(microseconds=filetime // 10)
    except OverflowError:
        # 0x7FFFFFFFFFFFFFFF means "never"
        return None


def _first(value: Any) -> Any:
    """Unwrap a single-valued attribute; empty lists become None"""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value
