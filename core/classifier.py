# =============================================================================
# core/classifier.py - Per-computer LAPS classification
# =============================================================================

from datetime import datetime
from typing import Any, Optional, Tuple

from core.models import (
    ComputerStatus, OSRole, RawComputerRecord, RotationState, RotationType
)

NEVER_LOGGED_ON = "Never"
LAST_LOGON_FORMAT = "%Y-%m-%d %H:%M:%S"


def classify(record: RawComputerRecord) -> ComputerStatus:
    """Map a raw directory record to its LAPS status. Never raises."""
    rotation_state, rotation_type = determine_rotation(
        record.modern_expiration, record.legacy_expiration
    )

    return ComputerStatus(
        computer_name=record.name or _leaf_name(record.distinguished_name),
        os_role=determine_os_role(record.operating_system),
        rotation_state=rotation_state,
        rotation_type=rotation_type,
        account_enabled=bool(record.account_enabled),
        last_logon=format_last_logon(record.last_logon_timestamp),
        organizational_unit=organizational_unit(record.distinguished_name),
        operating_system=record.operating_system or "",
        operating_system_version=record.operating_system_version or "",
    )


def determine_os_role(operating_system: Optional[str]) -> OSRole:
    """Server when the OS name mentions 'server', otherwise Client"""
    if operating_system and "server" in operating_system.lower():
        return OSRole.SERVER
    return OSRole.CLIENT


def determine_rotation(modern_expiration: Any,
                       legacy_expiration: Any) -> Tuple[RotationState, RotationType]:
    """
    Decide which LAPS mechanism is active.

    Windows LAPS wins over legacy LAPS: a computer mid-migration with both
    expiration attributes set reports as Windows LAPS only.
    """
    if has_value(modern_expiration):
        return RotationState.ENABLED, RotationType.MODERN
    if has_value(legacy_expiration):
        return RotationState.ENABLED, RotationType.LEGACY
    return RotationState.NOT_ENABLED, RotationType.NONE


def has_value(value: Any) -> bool:
    """True for a populated attribute value; None, blanks and empty lists are absent.

    An expiration of 0 is present: it is how an admin forces an immediate rotation.
    """
    if value is None:
        return False
    if isinstance(value, (list, tuple)):
        return any(has_value(item) for item in value)
    if isinstance(value, (bytes, str)):
        return bool(value.strip())
    return True


def format_last_logon(timestamp: Optional[datetime]) -> str:
    """Local YYYY-MM-DD HH:MM:SS, or "Never" when the computer has not logged on"""
    if timestamp is None or timestamp.year <= 1601:
        return NEVER_LOGGED_ON

    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone()
    return timestamp.strftime(LAST_LOGON_FORMAT)


def organizational_unit(distinguished_name: Optional[str]) -> str:
    """Drop the leading CN=<name> component and keep the rest verbatim"""
    if not distinguished_name or "," not in distinguished_name:
        return ""
    return distinguished_name.split(",", 1)[1]


def _leaf_name(distinguished_name: Optional[str]) -> str:
    if not distinguished_name:
        return ""
    leaf = distinguished_name.split(",", 1)[0]
    return leaf.split("=", 1)[-1].strip()
