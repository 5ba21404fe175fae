"""Startup hooks for the FixWatch API.

Run in order when the application starts:
1. Load a local .env file, if present
2. Configure structured logging
3. Validate lifecycle configuration so a bad threshold fails at boot
4. Record service startup for uptime tracking
"""

from dotenv import load_dotenv
from structlog import get_logger

from fixwatch.config.lifecycle_config import (
    JudgeThresholdConfig,
    SecretConfig,
    get_environment,
)
from fixwatch.infrastructure.monitoring.metrics import get_metrics_collector
from fixwatch.infrastructure.observability import configure_structlog

SERVICE_NAME = "api"


def configure_logging() -> None:
    """Configure structlog from the ENVIRONMENT variable.

    ``production`` (the default) renders JSON, anything else renders
    colored console output.
    """
    environment = get_environment()
    configure_structlog(environment=environment)

    log = get_logger().bind(component="startup_logging")
    log.info("structured_logging_configured", environment=environment)


def validate_lifecycle_config() -> None:
    """Load thresholds and secret sizes once, failing fast on bad values.

    Raises:
        ValueError: If any configured value is out of range.
    """
    thresholds = JudgeThresholdConfig.from_environment()
    secrets_config = SecretConfig.from_environment()

    get_logger().bind(component="startup_config").info(
        "lifecycle_config_loaded",
        confirm_threshold=thresholds.confirm_threshold,
        contest_threshold=thresholds.contest_threshold,
        secret_length=secrets_config.secret_length,
        report_id_length=secrets_config.report_id_length,
    )


def record_service_startup() -> None:
    """Record startup time for the uptime gauge."""
    get_metrics_collector().record_startup(SERVICE_NAME)
    get_logger().bind(component="startup_metrics").info(
        "service_startup_recorded", service=SERVICE_NAME
    )


def run_startup() -> None:
    """Run the full startup sequence."""
    load_dotenv()
    configure_logging()
    validate_lifecycle_config()
    record_service_startup()
