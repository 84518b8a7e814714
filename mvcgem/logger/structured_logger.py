import inspect
import logging
from datetime import datetime, timezone
from typing import Dict, Optional

import structlog
from colorama import Fore, Style, just_fix_windows_console

just_fix_windows_console()


class StructuredLogger:
    """Console + optional JSON file logger, one cached pair of sinks per name."""

    _logger_cache: Dict[str, "StructuredLogger"] = {}

    LEVEL_COLORS = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.GREEN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.MAGENTA + Style.BRIGHT,
    }

    def __init__(
        self,
        name: str = "mvcgem",
        log_file: Optional[str] = None,
        level: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        self.name = name
        self.context = context or {}

        # first configuration of a name wins, later conflicting ones are reported
        if name in self._logger_cache:
            cached = self._logger_cache[name]
            self.log_file = cached.log_file
            self.level = cached.level
            self.console_logger = cached.console_logger.bind(**self.context)
            self.file_logger = cached.file_logger.bind(**self.context) if cached.file_logger else None
            conflicts = {}
            if log_file is not None and log_file != cached.log_file:
                conflicts["log_file"] = log_file
            if level is not None and level.upper() != cached.level:
                conflicts["level"] = level.upper()
            if conflicts:
                self.console_logger.warning(
                    "Logger already configured, keeping first configuration",
                    log_file=cached.log_file,
                    level=cached.level,
                    ignored=conflicts,
                )
            return

        self.log_file = log_file
        self.level = (level or "INFO").upper()
        numeric_level = getattr(logging, self.level, logging.INFO)

        # ----------------------------
        # Stack walker processor
        # ----------------------------
        def add_caller(logger, method_name, event_dict):
            frame = inspect.currentframe()
            while frame:
                module_name = frame.f_globals.get("__name__", "")
                if not module_name.startswith("structlog") and not module_name.endswith("structured_logger"):
                    event_dict["module"] = module_name
                    event_dict["function"] = frame.f_code.co_name
                    event_dict["lineno"] = frame.f_lineno
                    break
                frame = frame.f_back
            return event_dict

        # ----------------------------
        # Console renderer
        # ----------------------------
        def console_renderer(logger, method_name, event_dict):
            ts = event_dict.pop("timestamp", None) or datetime.now(timezone.utc).isoformat()
            level_name = event_dict.pop("level", method_name).upper()
            logger_name = event_dict.pop("logger", self.name)
            msg = event_dict.pop("event", "")
            module = event_dict.pop("module", "")
            func = event_dict.pop("function", "")
            lineno = event_dict.pop("lineno", "")

            # Only show caller info for WARNING and above
            caller = ""
            if level_name in ("WARNING", "ERROR", "CRITICAL") and module and func:
                caller = f" ({module}.{func}:{lineno})"

            fields = " ".join(f"{k}={v}" for k, v in event_dict.items())
            color = self.LEVEL_COLORS.get(level_name, Fore.WHITE)
            line = f"{ts} [{logger_name}] {level_name}: {msg}"
            if fields:
                line += f" {fields}"
            return f"{color}{line}{caller}{Style.RESET_ALL}"

        console_logger = logging.getLogger(f"{name}.console")
        console_logger.setLevel(numeric_level)
        console_logger.propagate = False
        if not console_logger.handlers:
            ch = logging.StreamHandler()
            ch.setFormatter(logging.Formatter("%(message)s"))
            console_logger.addHandler(ch)

        self.console_logger = structlog.wrap_logger(
            console_logger,
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                add_caller,
                structlog.processors.format_exc_info,
                console_renderer,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        ).bind(logger=name, **self.context)

        # ----------------------------
        # File logger (JSON), optional
        # ----------------------------
        self.file_logger = None
        if log_file:
            file_logger = logging.getLogger(f"{name}.file")
            file_logger.setLevel(numeric_level)
            file_logger.propagate = False
            if not any(isinstance(h, logging.FileHandler) for h in file_logger.handlers):
                fh = logging.FileHandler(log_file, encoding="utf-8")
                fh.setFormatter(logging.Formatter("%(message)s"))
                file_logger.addHandler(fh)

            self.file_logger = structlog.wrap_logger(
                file_logger,
                processors=[
                    structlog.stdlib.filter_by_level,
                    structlog.processors.TimeStamper(fmt="iso"),
                    structlog.stdlib.add_log_level,
                    add_caller,
                    structlog.processors.StackInfoRenderer(),
                    structlog.processors.format_exc_info,
                    structlog.processors.UnicodeDecoder(),
                    structlog.processors.JSONRenderer(),
                ],
                wrapper_class=structlog.stdlib.BoundLogger,
                cache_logger_on_first_use=True,
            ).bind(logger=name, **self.context)

        self._logger_cache[name] = self

    def bind(self, **context) -> "StructuredLogger":
        return StructuredLogger(self.name, context={**self.context, **context})

    # ----------------------------
    # Logging methods
    # ----------------------------
    def _emit(self, level: str, msg: str, **extra):
        getattr(self.console_logger, level)(msg, **extra)
        if self.file_logger is not None:
            getattr(self.file_logger, level)(msg, **extra)

    def debug(self, msg: str, **extra):
        self._emit("debug", msg, **extra)

    def info(self, msg: str, **extra):
        self._emit("info", msg, **extra)

    def warning(self, msg: str, **extra):
        self._emit("warning", msg, **extra)

    def error(self, msg: str, **extra):
        self._emit("error", msg, **extra)

    def exception(self, msg: str, **extra):
        self._emit("exception", msg, **extra)


def create_logger(name: str, log_file: Optional[str] = None, level: Optional[str] = None) -> StructuredLogger:
    """Return the cached logger for name, creating its sinks on first use (level defaults to INFO)."""
    return StructuredLogger(name=name, log_file=log_file, level=level)
