"""
Test Configuration

Environment setup MUST happen before any application import: settings and the
loguru sinks are built at import time.
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('POSTGRES_DB', 'party_booking_test_db')
    os.environ['HOLD_SWEEP_ENABLED'] = 'false'
    os.environ['OTEL_EXPORTER_OTLP_ENDPOINT'] = ''


_early_setup_test_environment()
