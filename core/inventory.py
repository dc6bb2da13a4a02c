# =============================================================================
# core/inventory.py - Report pipeline
# =============================================================================

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List
import logging

from core.aggregator import aggregate
from core.classifier import classify
from core.models import ComputerStatus, RawComputerRecord, ReportSummary
from reporting.renderer import render


class ComputerSource(ABC):
    """Anything that can list the domain's Windows computers"""

    @abstractmethod
    def fetch_computers(self) -> List[RawComputerRecord]:
        """Return every Windows computer record; raise DirectorySourceError on failure"""
        pass


@dataclass
class ReportResult:
    """Everything produced by one report run"""
    statuses: List[ComputerStatus]
    summary: ReportSummary
    document: str


def collect_statuses(source: ComputerSource) -> List[ComputerStatus]:
    """Fetch all computers and classify each one"""
    logger = logging.getLogger(__name__)

    records = source.fetch_computers()
    statuses = [classify(record) for record in records]
    logger.info(f"Classified {len(statuses)} computers")
    return statuses


def build_report(source: ComputerSource, domain: str, generated_at: datetime) -> ReportResult:
    """Query, classify, aggregate and render. Nothing is rendered if the query fails."""
    statuses = collect_statuses(source)
    summary = aggregate(statuses)
    document = render(summary, statuses, generated_at=generated_at, domain=domain)
    return ReportResult(statuses=statuses, summary=summary, document=document)
