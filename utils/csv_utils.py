# =============================================================================
# utils/csv_utils.py - CSV utilities
# =============================================================================

import csv
from typing import List, Dict, Any, Iterable, Optional
import logging

from core.exceptions import WriteError
from core.models import ComputerStatus

STATUS_FIELDNAMES = [
    'computer_name', 'os_role', 'operating_system', 'operating_system_version',
    'laps_status', 'laps_type', 'account_enabled', 'last_logon', 'organizational_unit'
]


class CSVHandler:
    """Utilities for writing CSV files"""

    @staticmethod
    def write_csv(data: List[Dict[str, Any]], output_path: str,
                  fieldnames: Optional[List[str]] = None) -> None:
        """Write data to CSV file"""
        logger = logging.getLogger(__name__)

        if not data:
            logger.warning("No data to write")
            return

        if fieldnames is None:
            fieldnames = list(data[0].keys())

        try:
            with open(output_path, 'w', newline='', encoding='utf-8') as file:
                writer = csv.DictWriter(file, fieldnames=fieldnames)
                writer.writeheader()
                writer.writerows(data)

            logger.info(f"Successfully wrote {len(data)} records to {output_path}")

        except OSError as e:
            logger.error(f"Error writing CSV: {e}")
            raise WriteError(f"Cannot write CSV to {output_path}: {e}") from e


def status_to_dict(status: ComputerStatus) -> Dict[str, Any]:
    """Convert ComputerStatus to dictionary for CSV output"""
    return {
        'computer_name': status.computer_name,
        'os_role': status.os_role.value,
        'operating_system': status.operating_system,
        'operating_system_version': status.operating_system_version,
        'laps_status': status.rotation_state.value,
        'laps_type': status.rotation_type.value,
        'account_enabled': 'Yes' if status.account_enabled else 'No',
        'last_logon': status.last_logon,
        'organizational_unit': status.organizational_unit
    }


def export_statuses_csv(statuses: Iterable[ComputerStatus], output_path: str) -> None:
    """Write one CSV row per computer"""
    rows = [status_to_dict(status) for status in statuses]
    CSVHandler.write_csv(rows, output_path, STATUS_FIELDNAMES)
