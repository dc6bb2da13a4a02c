#!/usr/bin/env python3
"""
Flask Web UI for the LAPS status report
Renders the report on demand from Active Directory and serves the published file
"""

import os
import logging
from pathlib import Path
from datetime import datetime
from flask import Flask, Response, jsonify, send_file

from core.ad_client import ActiveDirectoryClient
from core.exceptions import DirectorySourceError, WriteError
from core.inventory import ReportResult, build_report
from reporting.publisher import ReportPublisher
from utils.config import Config

app = Flask(__name__)


class ConfigurationError(Exception):
    """Required AD settings are missing"""


def setup_logging():
    """Setup logging for the web application"""
    log_dir = Path("logs")
    log_dir.mkdir(exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_filename = log_dir / f"webapp_{timestamp}.log"

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_filename),
            logging.StreamHandler()
        ]
    )


def generate_report(config: Config) -> ReportResult:
    """Run the full query/classify/render pipeline"""
    if not config.validate_ad_config():
        missing_vars = config.get_missing_ad_vars()
        raise ConfigurationError(f'Missing AD configuration: {", ".join(missing_vars)}')

    try:
        timeout, page_size = config.ldap_timeout, config.ldap_page_size
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    with ActiveDirectoryClient(
            config.ad_server, config.ad_username,
            config.ad_password, config.base_dn,
            timeout=timeout, page_size=page_size
    ) as ad_client:
        return build_report(ad_client, domain=config.domain_name, generated_at=datetime.now())


@app.route('/')
def index():
    """Render a fresh report"""
    result = generate_report(Config())
    app.logger.info(f"Rendered report for {result.summary.total_computers} computers")
    return Response(result.document, mimetype='text/html')


@app.route('/download')
def download_report():
    """Publish a fresh report and send it as a file"""
    config = Config()
    result = generate_report(config)
    report_path = ReportPublisher(config.report_output_path).publish(result.document)
    return send_file(report_path, as_attachment=True, download_name=report_path.name)


@app.route('/health')
def health_check():
    """Health check endpoint"""
    config = Config()
    ad_config_valid = config.validate_ad_config()

    return jsonify({
        'status': 'healthy' if ad_config_valid else 'configuration_error',
        'ad_config_valid': ad_config_valid,
        'missing': config.get_missing_ad_vars()
    })


@app.errorhandler(ConfigurationError)
def handle_configuration_error(e):
    app.logger.error(str(e))
    return jsonify({'error': str(e)}), 503


@app.errorhandler(DirectorySourceError)
def handle_directory_error(e):
    app.logger.error(f"Directory query failed: {e}")
    return jsonify({'error': f'Directory query failed: {e}'}), 502


@app.errorhandler(WriteError)
def handle_write_error(e):
    app.logger.error(f"Report write failed: {e}")
    return jsonify({'error': f'Report write failed: {e}'}), 500


if __name__ == '__main__':
    setup_logging()

    # Check configuration on startup
    config = Config()
    if not config.validate_ad_config():
        missing_vars = config.get_missing_ad_vars()
        app.logger.warning(f"Missing AD configuration: {', '.join(missing_vars)}")
        print("⚠️  Warning: Missing AD configuration variables. The application will start but reports will fail.")
        print(f"   Missing: {', '.join(missing_vars)}")
    else:
        app.logger.info("AD configuration validated successfully")

    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_DEBUG', 'False').lower() == 'true'

    print(f"🚀 Starting LAPS Status Report Web UI on port {port}")
    print(f"📁 Report path: {config.report_output_path}")
    print(f"🔧 Debug mode: {debug}")

    app.run(host='0.0.0.0', port=port, debug=debug)
