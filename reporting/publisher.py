# =============================================================================
# reporting/publisher.py - Report output and console summary
# =============================================================================

import logging
import os
import stat
import tempfile
import webbrowser
from pathlib import Path
from typing import Union

from core.exceptions import WriteError
from core.models import ReportSummary


class ReportPublisher:
    """Writes the rendered report to disk and announces the results"""

    def __init__(self, output_path: Union[str, Path]):
        self.output_path = Path(output_path)
        self.logger = logging.getLogger(self.__class__.__name__)

    def publish(self, document: str) -> Path:
        """Write the document atomically, creating the parent directory if needed"""
        target = self.output_path.resolve()
        tmp_name = None

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile('w', encoding='utf-8', dir=target.parent,
                                             prefix=f".{target.name}.", suffix='.tmp',
                                             delete=False) as tmp:
                tmp_name = tmp.name
                tmp.write(document)
            os.chmod(tmp_name, _published_mode(target))
            os.replace(tmp_name, target)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.remove(tmp_name)
            self.logger.error(f"Error writing report to {target}: {e}")
            raise WriteError(f"Cannot write report to {target}: {e}") from e

        self.logger.info(f"Report written to {target}")
        return target

    def log_summary(self, summary: ReportSummary) -> None:
        """Log the headline numbers"""
        self.logger.info("=" * 60)
        self.logger.info("LAPS deployment summary")
        self.logger.info("=" * 60)
        self.logger.info(f"Total computers:  {summary.total_computers}")
        self.logger.info(f"LAPS enabled:     {summary.enabled_count} ({summary.enabled_percentage:.2f}%)")
        self.logger.info(f"LAPS not enabled: {summary.not_enabled_count} ({summary.not_enabled_percentage:.2f}%)")
        self.logger.info(f"  Legacy LAPS:    {summary.legacy_count}")
        self.logger.info(f"  Windows LAPS:   {summary.modern_count}")
        self.logger.info(f"Servers:          {summary.server_enabled_count}/{summary.server_count} "
                         f"enabled ({summary.server_percentage:.2f}%)")
        self.logger.info(f"Clients:          {summary.client_enabled_count}/{summary.client_count} "
                         f"enabled ({summary.client_percentage:.2f}%)")

    def open_in_viewer(self, path: Path) -> bool:
        """Open the report in the default browser; failures are only logged"""
        try:
            opened = webbrowser.open(Path(path).resolve().as_uri())
        except (webbrowser.Error, OSError) as e:
            self.logger.warning(f"Could not open report in browser: {e}")
            return False

        if not opened:
            self.logger.warning("No browser available to open the report")
        return opened


def _published_mode(target: Path) -> int:
    """Keep an existing report's mode, otherwise use what a plain open() would create"""
    if target.exists():
        return stat.S_IMODE(target.stat().st_mode)

    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
