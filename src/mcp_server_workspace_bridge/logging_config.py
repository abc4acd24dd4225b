import logging
import json
import sys
from pathlib import Path
from typing import Optional

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class SafeStreamHandler(logging.StreamHandler):
    """
    Stream handler that gracefully handles closed streams during shutdown.
    """

    def emit(self, record):
        try:
            super().emit(record)
        except (ValueError, OSError) as e:
            # Closed stderr during interpreter shutdown
            if "closed file" in str(e).lower() or "bad file descriptor" in str(e).lower():
                pass
            else:
                raise


class StructuredLogFormatter(logging.Formatter):
    """
    Formats log records as structured JSON with contextual fields.
    """

    CONTEXT_FIELDS = ("request_id", "tool", "project", "duration_ms")

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in self.CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            log_record["exception"] = record.exc_text
        return json.dumps(log_record, ensure_ascii=False)


def configure_logging(
    log_level: str = "INFO",
    json_format: bool = False,
    log_file: Optional[Path] = None,
) -> None:
    """
    Centralized logging configuration for MCP Workspace Bridge.
    Logs go to stderr; stdout is reserved for the MCP stdio transport.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    formatter: logging.Formatter = (
        StructuredLogFormatter() if json_format else logging.Formatter(TEXT_FORMAT)
    )
    handler = SafeStreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)  # Always debug level for file
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.DEBUG)
        handler.setLevel(log_level.upper())

    # Silence overly verbose loggers
    logging.getLogger("asyncio").setLevel("WARNING")
    logging.getLogger("git").setLevel("WARNING")
    logging.getLogger("mcp").setLevel("WARNING")
