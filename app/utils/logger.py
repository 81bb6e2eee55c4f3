import logging
import sys
import os
from types import FrameType
from loguru import logger
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry._logs import set_logger_provider

# stdlib loggers whose own handlers are replaced by the loguru bridge
HIJACKED_LOGGERS = (
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
    "fastapi",
    "sqlalchemy.engine",
    "minio",
)


class InterceptHandler(logging.Handler):
    """
    Forward stdlib logging records (uvicorn, SQLAlchemy, service modules) to Loguru.
    Records emitted by OpenTelemetry itself are dropped to avoid a feedback loop
    through the OTLP sink.
    """

    def emit(self, record: logging.LogRecord) -> None:
        if record.name.startswith("opentelemetry"):
            return

        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk back to the frame that actually called logging
        frame: FrameType | None = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _add_otel_sink(level: str) -> None:
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if not endpoint:
        return
    try:
        resource = Resource.create(
            {
                "service.name": os.getenv("OTEL_SERVICE_NAME", "jobboard-backend"),
                "deployment.environment": os.getenv("ENVIRONMENT", "production"),
            }
        )
        logger_provider = LoggerProvider(resource=resource)
        set_logger_provider(logger_provider)

        insecure = os.getenv("OTEL_EXPORTER_OTLP_INSECURE", "false").lower() == "true"
        exporter = OTLPLogExporter(endpoint=endpoint, insecure=insecure)
        logger_provider.add_log_record_processor(BatchLogRecordProcessor(exporter))

        otel_handler = LoggingHandler(
            level=logging.getLevelName(level), logger_provider=logger_provider
        )
        logger.add(otel_handler, level=level, serialize=True)
        logger.info("OTLP log sink active.")
    except Exception as e:
        # Print to stderr directly if OTel fails, don't crash the app
        print(f"Log Setup Failed: {e}", file=sys.stderr)


def setup_logging():
    """
    Route all application logging through Loguru.

    Installs the InterceptHandler on the root logger and on the server/ORM
    loggers, replaces Loguru's default sink with a colored stderr sink at
    LOG_LEVEL (default INFO), and adds an OTLP sink when
    OTEL_EXPORTER_OTLP_ENDPOINT is set.

    Returns:
        The configured loguru logger.
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()

    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(level)

    for name in HIJACKED_LOGGERS:
        log = logging.getLogger(name)
        log.handlers = []
        log.propagate = False
        log.addHandler(InterceptHandler())

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> <level>{level}</level>: <cyan>[{name}:{line}]</cyan> - <level>{message}</level>",
        colorize=True,
        enqueue=True,  # Async safety
    )

    _add_otel_sink(level)

    return logger
