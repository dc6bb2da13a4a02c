# =============================================================================
# core/aggregator.py - LAPS coverage statistics
# =============================================================================

from typing import Iterable

from core.models import ComputerStatus, OSRole, ReportSummary, RotationType


def aggregate(statuses: Iterable[ComputerStatus]) -> ReportSummary:
    """Reduce classified computers to coverage counts in a single pass"""
    summary = ReportSummary()

    for status in statuses:
        summary.total_computers += 1
        is_server = status.os_role is OSRole.SERVER

        if is_server:
            summary.server_count += 1
        else:
            summary.client_count += 1

        if not status.is_enabled:
            summary.not_enabled_count += 1
            continue

        summary.enabled_count += 1
        if status.rotation_type is RotationType.MODERN:
            summary.modern_count += 1
        elif status.rotation_type is RotationType.LEGACY:
            summary.legacy_count += 1

        if is_server:
            summary.server_enabled_count += 1
        else:
            summary.client_enabled_count += 1

    return summary
