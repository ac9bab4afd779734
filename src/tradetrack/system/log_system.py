"""Centralized logging configuration for tradetrack.

Library modules log through ``structlog.get_logger(__name__)`` and never
configure anything themselves. The CLI calls ``LoggerFactory.configure()``
once per invocation; until then structlog's defaults apply.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Literal

import structlog
from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_LOG_FILE = Path("logs/tradetrack.log")

# Own key so domain fields named "date" or "timestamp" are never overwritten
TIMESTAMP_KEY = "log_timestamp"


class LoggingConfig(BaseModel):
    """Configuration for logging system.

    What each level shows:

    DEBUG:
    - Estimation methods tried and skipped (sharpe.method_skipped)
    - Indeterminate consistency evaluations
    - Kelly "no edge" outcomes

    INFO (Default):
    - Calculation summaries

    WARNING:
    - Input lines skipped while parsing daily P&L

    ERROR:
    - Invalid parameters and unreadable inputs reported by a command
    """

    level: LogLevel = Field(
        default="INFO",
        description="Minimum console log level",
    )
    format: Literal["console", "json"] = Field(
        default="console",
        description="Console output format",
    )
    enable_file: bool = Field(
        default=False,
        description="Also write JSON lines to file_path",
    )
    file_path: Path = Field(
        default=DEFAULT_LOG_FILE,
        description="Log file, relative to the working directory unless absolute",
    )
    file_level: LogLevel = Field(
        default="WARNING",
        description="Minimum log level for file output",
    )
    file_rotation: bool = Field(
        default=True,
        description="Rotate the log file once it reaches max_file_size_mb",
    )
    max_file_size_mb: int = Field(default=10, gt=0)
    backup_count: int = Field(default=3, ge=0)


class LoggerFactory:
    """
    Configures structlog on top of stdlib logging handlers.

    Console output goes to stderr so that the tables a command prints on
    stdout can be piped. File output, when enabled, is always JSON.

    Example:
        LoggerFactory.configure(LoggingConfig(level="DEBUG"))
        logger = LoggerFactory.get_logger(__name__)
        logger.debug("sharpe.method_skipped", method="monthly_returns")
    """

    _configured: bool = False

    @classmethod
    def configure(cls, config: LoggingConfig | None = None) -> None:
        """
        Install handlers and the structlog processor chain.

        Calling it again replaces the previous configuration.

        Args:
            config: LoggingConfig instance. If None, uses default configuration.
        """
        if config is None:
            config = LoggingConfig()

        pre_chain = cls._build_common_processors()

        console_handler = logging.StreamHandler(stream=sys.stderr)
        console_handler.setLevel(getattr(logging, config.level))
        console_renderer: Any = (
            cls._custom_console_renderer() if config.format == "console" else structlog.processors.JSONRenderer()
        )
        console_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(processor=console_renderer, foreign_pre_chain=pre_chain)
        )

        handlers: list[logging.Handler] = [console_handler]
        root_level = getattr(logging, config.level)
        if config.enable_file:
            handlers.append(cls._configure_file_logging(config, pre_chain))
            root_level = min(root_level, getattr(logging, config.file_level))

        logging.basicConfig(level=root_level, handlers=handlers, force=True)

        structlog.configure(
            processors=[
                *pre_chain,
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        cls._configured = True

    @staticmethod
    def _build_common_processors() -> list[Any]:
        """Processors applied to both structlog and foreign stdlib records before rendering."""
        return [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="%y%m%d-%H%M%S", utc=True, key=TIMESTAMP_KEY),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
        ]

    @staticmethod
    def _custom_console_renderer() -> Callable[[Any, str, dict[str, Any]], str]:
        """Render ``<time> [level] event | key=value ... (logger:line)``."""
        colors = {
            "DEBUG": "\033[36m",
            "INFO": "\033[32m",
            "WARNING": "\033[33m",
            "ERROR": "\033[31m",
            "CRITICAL": "\033[35m",
        }
        reset = "\033[0m"
        gray = "\033[90m"

        def renderer(logger: Any, name: str, event_dict: dict[str, Any]) -> str:
            timestamp = event_dict.pop(TIMESTAMP_KEY, "")
            level = event_dict.pop("level", "info").upper()
            event = event_dict.pop("event", "")
            filename = event_dict.pop("filename", "")
            lineno = event_dict.pop("lineno", "")
            logger_name = event_dict.pop("logger", "")

            parts = [timestamp, f"[{colors.get(level, '')}{level.lower()}{reset}]", str(event)]

            context = " ".join(f"{key}={value}" for key, value in sorted(event_dict.items()) if not key.startswith("_"))
            if context:
                parts.append(f"{gray}|{reset} {context}")

            if filename and lineno:
                # Logger names are module paths already; show the leaf module only
                module = logger_name.rsplit(".", 1)[-1] if logger_name else Path(filename).stem
                parts.append(f"{gray}({module}:{lineno}){reset}")

            return " ".join(part for part in parts if part)

        return renderer

    @staticmethod
    def _configure_file_logging(config: LoggingConfig, pre_chain: list[Any]) -> logging.Handler:
        """Create the JSON-lines file handler, creating the log directory if needed."""
        config.file_path.parent.mkdir(parents=True, exist_ok=True)

        handler: logging.Handler
        if config.file_rotation:
            handler = RotatingFileHandler(
                filename=str(config.file_path),
                maxBytes=config.max_file_size_mb * 1024 * 1024,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        else:
            handler = logging.FileHandler(filename=str(config.file_path), encoding="utf-8")

        handler.setLevel(getattr(logging, config.file_level))
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=pre_chain,
            )
        )
        return handler

    @classmethod
    def get_logger(cls, name: str = "tradetrack"):
        """Get a structlog logger, configuring defaults on first use."""
        if not cls._configured:
            cls.configure()
        return structlog.get_logger(name)

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured

    @classmethod
    def reset(cls) -> None:
        """Remove all handlers and restore structlog defaults (used by tests)."""
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()
        root_logger.setLevel(logging.NOTSET)
        cls._configured = False
        structlog.reset_defaults()
