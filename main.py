# =============================================================================
# main.py - CLI entry point
# =============================================================================

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from core.ad_client import ActiveDirectoryClient
from core.exceptions import LAPSReportError
from core.inventory import build_report
from reporting.publisher import ReportPublisher
from reporting.renderer import sort_statuses
from utils.config import Config
from utils.csv_utils import export_statuses_csv


def setup_logging(level: str = "INFO") -> str:
    """Setup logging configuration with both console and file output"""
    # Create logs directory if it doesn't exist
    log_dir = Path("logs")
    log_dir.mkdir(exist_ok=True)

    # Generate date-stamped filename
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_filename = log_dir / f"laps_report_{timestamp}.log"

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_filename, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized - Console: {level.upper()}, File: DEBUG")
    logger.info(f"Log file: {log_filename}")

    return str(log_filename)


def run_report(args, config: Config) -> Path:
    """Query AD, render the report and publish it"""
    logger = logging.getLogger(__name__)
    domain = args.domain or config.domain_name

    with ActiveDirectoryClient(
            config.ad_server, config.ad_username,
            config.ad_password, config.base_dn,
            timeout=config.ldap_timeout,
            page_size=config.ldap_page_size
    ) as ad_client:
        result = build_report(ad_client, domain=domain, generated_at=datetime.now())

    publisher = ReportPublisher(args.output or config.report_output_path)
    report_path = publisher.publish(result.document)

    if args.csv_output:
        export_statuses_csv(sort_statuses(result.statuses), args.csv_output)

    publisher.log_summary(result.summary)
    logger.info(f"Report: {report_path}")

    if not args.no_open:
        publisher.open_in_viewer(report_path)

    return report_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LAPS deployment status report")
    parser.add_argument('--output', help='HTML report path (default: REPORT_OUTPUT_PATH or LAPS_Status_Report.html)')
    parser.add_argument('--csv-output', help='Also export the computer list as CSV')
    parser.add_argument('--domain', help='Domain name shown in the report (default: from environment)')
    parser.add_argument('--no-open', action='store_true', help='Do not open the report in a browser')
    parser.add_argument('--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')
    return parser


def main(argv=None):
    """Main CLI entry point"""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    # Load configuration
    config = Config()
    if not config.validate_ad_config():
        missing_vars = config.get_missing_ad_vars()
        logger.error(f"Missing required environment variables: {missing_vars}")
        sys.exit(1)

    try:
        run_report(args, config)
    except (LAPSReportError, ValueError) as e:
        logger.error(f"Report generation failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
