# =============================================================================
# reporting/renderer.py - HTML report rendering
# =============================================================================

from datetime import datetime
from typing import Iterable, List

from jinja2 import Environment

from core.models import ComputerStatus, OSRole, ReportSummary, RotationState, RotationType
from reporting.template import REPORT_TEMPLATE

FOOTER_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

STATE_BADGES = {
    RotationState.ENABLED: "badge-enabled",
    RotationState.NOT_ENABLED: "badge-not-enabled",
}
TYPE_BADGES = {
    RotationType.LEGACY: "badge-legacy",
    RotationType.MODERN: "badge-modern",
    RotationType.NONE: "badge-none",
}

_environment = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)
_template = _environment.from_string(REPORT_TEMPLATE)


def sort_statuses(statuses: Iterable[ComputerStatus]) -> List[ComputerStatus]:
    """Order rows by OS role display name, then computer name"""
    return sorted(
        statuses,
        key=lambda s: (s.os_role.value, s.computer_name.lower(), s.computer_name)
    )


def render(summary: ReportSummary, statuses: Iterable[ComputerStatus],
           generated_at: datetime, domain: str) -> str:
    """
    Render the full self-contained report document.

    Args:
        summary: Aggregate counts shown in the stat cards
        statuses: One row per computer, in any order
        generated_at: Timestamp stamped into the footer
        domain: Domain name shown in the header and footer

    Returns:
        The HTML document as text
    """
    return _template.render(
        summary=summary,
        rows=sort_statuses(statuses),
        generated_at=generated_at.strftime(FOOTER_TIME_FORMAT),
        domain=domain,
        os_roles=sorted(role.value for role in OSRole),
        rotation_states=[state.value for state in RotationState],
        rotation_types=[rotation_type.value for rotation_type in RotationType],
        state_badges=STATE_BADGES,
        type_badges=TYPE_BADGES,
    )
