# =============================================================================
# core/models.py - Computer inventory data models
# =============================================================================

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional
from enum import Enum


class OSRole(Enum):
    """Operating system role of a computer"""
    SERVER = "Windows Server"
    CLIENT = "Windows Client"


class RotationState(Enum):
    """Whether any LAPS mechanism is active"""
    ENABLED = "Enabled"
    NOT_ENABLED = "Not Enabled"


class RotationType(Enum):
    """Which LAPS mechanism is active"""
    LEGACY = "Legacy LAPS"
    MODERN = "Windows LAPS"
    NONE = "None"


@dataclass(frozen=True)
class RawComputerRecord:
    """Computer object as read from Active Directory"""
    name: str
    operating_system: str = ""
    operating_system_version: str = ""
    legacy_expiration: Optional[Any] = None
    modern_expiration: Optional[Any] = None
    account_enabled: bool = False
    last_logon_timestamp: Optional[datetime] = None
    distinguished_name: str = ""


@dataclass(frozen=True)
class ComputerStatus:
    """Classified LAPS status for a single computer"""
    computer_name: str
    os_role: OSRole
    rotation_state: RotationState
    rotation_type: RotationType
    account_enabled: bool
    last_logon: str
    organizational_unit: str
    operating_system: str = ""
    operating_system_version: str = ""

    @property
    def is_enabled(self) -> bool:
        return self.rotation_state is RotationState.ENABLED


def _percentage(part: int, whole: int) -> float:
    """part as a percentage of whole, rounded to 2 places; 0.0 when whole is 0"""
    if whole == 0:
        return 0.0
    return round(part / whole * 100, 2)


@dataclass
class ReportSummary:
    """Aggregate LAPS coverage counts"""
    total_computers: int = 0
    server_count: int = 0
    client_count: int = 0
    enabled_count: int = 0
    not_enabled_count: int = 0
    legacy_count: int = 0
    modern_count: int = 0
    server_enabled_count: int = 0
    client_enabled_count: int = 0

    @property
    def enabled_percentage(self) -> float:
        """Share of all computers with any LAPS mechanism"""
        return _percentage(self.enabled_count, self.total_computers)

    @property
    def not_enabled_percentage(self) -> float:
        return _percentage(self.not_enabled_count, self.total_computers)

    @property
    def server_percentage(self) -> float:
        """Share of servers with any LAPS mechanism"""
        return _percentage(self.server_enabled_count, self.server_count)

    @property
    def client_percentage(self) -> float:
        """Share of clients with any LAPS mechanism"""
        return _percentage(self.client_enabled_count, self.client_count)
