#!/usr/bin/env python3
"""
Diff Viewer Configuration & Logging Module
==========================================
Centralized configuration, structured logging, and error types.
"""

import os
import sys
import json
import logging
import uuid
import time
import threading
from datetime import datetime, timezone
from typing import Optional, Dict, Any
from pathlib import Path
from dataclasses import dataclass, field
from contextlib import contextmanager

# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================
DEFAULT_TAB_WIDTH = 4               # Non-breaking spaces per rendered tab
MAX_TAB_WIDTH = 16
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024  # 5MB max per log file
LOG_BACKUP_COUNT = 5                # Number of log backup files to keep
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
LOG_FORMATS = ('json', 'text')


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == 'true'


# =============================================================================
# ENVIRONMENT CONFIGURATION
# =============================================================================

@dataclass
class DiffViewerConfig:
    """Diff viewer configuration with library-friendly defaults."""

    # Rendering
    tab_width: int = DEFAULT_TAB_WIDTH
    show_line_numbers: bool = True

    # Logging
    log_level: str = "WARNING"
    log_format: str = "text"  # Options: json, text
    log_to_file: bool = False
    log_to_console: bool = True
    log_dir: Path = field(default_factory=lambda: Path.cwd() / 'logs')

    @classmethod
    def from_env(cls) -> 'DiffViewerConfig':
        """Load configuration from environment variables."""
        log_dir = os.environ.get('DIFF_VIEWER_LOG_DIR')
        raw_tab_width = os.environ.get('DIFF_VIEWER_TAB_WIDTH', str(DEFAULT_TAB_WIDTH))
        try:
            tab_width = int(raw_tab_width)
        except ValueError:
            raise ConfigurationError(
                f"DIFF_VIEWER_TAB_WIDTH must be an integer, got {raw_tab_width!r}"
            ) from None
        return cls(
            tab_width=tab_width,
            show_line_numbers=_env_flag('DIFF_VIEWER_LINE_NUMBERS', 'true'),
            log_level=os.environ.get('DIFF_VIEWER_LOG_LEVEL', 'WARNING'),
            log_format=os.environ.get('DIFF_VIEWER_LOG_FORMAT', 'text'),
            log_to_file=_env_flag('DIFF_VIEWER_LOG_FILE', 'false'),
            log_to_console=_env_flag('DIFF_VIEWER_LOG_CONSOLE', 'true'),
            log_dir=Path(log_dir) if log_dir else Path.cwd() / 'logs',
        )

    def validate(self) -> tuple:
        """Validate configuration and return (is_valid, errors)."""
        errors = []

        if not isinstance(self.tab_width, int) or not 1 <= self.tab_width <= MAX_TAB_WIDTH:
            errors.append(f"tab_width must be an integer between 1 and {MAX_TAB_WIDTH}, got {self.tab_width!r}")

        if str(self.log_level).upper() not in LOG_LEVELS:
            errors.append(f"Invalid log_level: {self.log_level}. Must be one of {', '.join(LOG_LEVELS)}")

        if self.log_format not in LOG_FORMATS:
            errors.append(f"Invalid log_format: {self.log_format}. Must be 'json' or 'text'")

        return (len(errors) == 0, errors)


# Global config instance
_config: Optional[DiffViewerConfig] = None

def get_config() -> DiffViewerConfig:
    """Get or create the global configuration."""
    global _config
    if _config is None:
        _config = DiffViewerConfig.from_env()
    return _config


def reset_config():
    """Reset the global configuration (for testing)."""
    global _config
    _config = None


# =============================================================================
# STRUCTURED LOGGING
# =============================================================================

class StructuredLogger:
    """Thread-safe structured logger with correlation IDs."""

    _local = threading.local()
    _configured = set()
    _configure_lock = threading.Lock()

    def __init__(self, name: str, config: Optional[DiffViewerConfig] = None):
        self.name = name
        self.config = config or get_config()
        self.logger = logging.getLogger(self.name)
        with self._configure_lock:
            if self.name not in self._configured:
                self._configured.add(self.name)
                # Leave loggers the host application already set up alone
                if not self.logger.handlers and self.logger.level == logging.NOTSET:
                    self._setup_logger()

    def _setup_logger(self):
        """Configure the underlying Python logger (once per logger name)."""
        self.logger.setLevel(getattr(logging, self.config.log_level.upper()))

        if self.config.log_format == 'json':
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s [%(levelname)s] %(name)s - %(message)s'
            )

        if self.config.log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        # File handler with rotation
        if self.config.log_to_file:
            from logging.handlers import RotatingFileHandler
            self.config.log_dir.mkdir(parents=True, exist_ok=True)
            log_file = self.config.log_dir / f"{self.name.lower()}.log"
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    @classmethod
    def set_correlation_id(cls, correlation_id: str):
        """Set correlation ID for current thread."""
        cls._local.correlation_id = correlation_id

    @classmethod
    def get_correlation_id(cls) -> str:
        """Get correlation ID for current thread."""
        return getattr(cls._local, 'correlation_id', None) or str(uuid.uuid4())[:8]

    @classmethod
    def new_correlation_id(cls) -> str:
        """Generate and set a new correlation ID."""
        correlation_id = str(uuid.uuid4())[:12]
        cls.set_correlation_id(correlation_id)
        return correlation_id

    def _build_log_record(self, level: str, message: str, **kwargs) -> Dict[str, Any]:
        """Build a structured log record."""
        return {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': level,
            'logger': self.name,
            'correlation_id': self.get_correlation_id(),
            'message': message,
            **kwargs
        }

    def _render(self, level: str, message: str, **kwargs) -> str:
        if self.config.log_format != 'json':
            return message
        return json.dumps(self._build_log_record(level, message, **kwargs), default=str)

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(self._render('DEBUG', message, **kwargs), extra=kwargs)

    def info(self, message: str, **kwargs):
        """Log info message."""
        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(self._render('INFO', message, **kwargs), extra=kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self.logger.warning(self._render('WARNING', message, **kwargs), extra=kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs):
        """Log error message with optional exception info."""
        if exc_info and self.config.log_format == 'json':
            import traceback
            kwargs['traceback'] = traceback.format_exc()
        self.logger.error(self._render('ERROR', message, **kwargs), exc_info=exc_info, extra=kwargs)

    def exception(self, message: str, **kwargs):
        """Log exception with full traceback."""
        self.error(message, exc_info=True, **kwargs)

    @contextmanager
    def log_operation(self, operation: str, **context):
        """Context manager for logging operation start/end with timing."""
        start_time = time.time()
        self.debug(f"{operation} started", operation=operation, status='started', **context)
        try:
            yield
            duration_ms = (time.time() - start_time) * 1000
            self.debug(f"{operation} completed", operation=operation, status='completed',
                       duration_ms=round(duration_ms, 2), **context)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self.error(f"{operation} failed: {e}", operation=operation, status='failed',
                       duration_ms=round(duration_ms, 2), exc_info=True, **context)
            raise


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    _RESERVED = frozenset((
        'name', 'msg', 'args', 'created', 'filename', 'funcName',
        'levelname', 'levelno', 'lineno', 'module', 'msecs',
        'pathname', 'process', 'processName', 'relativeCreated',
        'stack_info', 'thread', 'threadName', 'exc_info', 'exc_text',
        'message', 'taskName'
    ))

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log_data['traceback'] = self.formatException(record.exc_info)

        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in self._RESERVED:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def get_logger(name: str, config: Optional[DiffViewerConfig] = None) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name, config or get_config())


# =============================================================================
# ERROR HANDLING
# =============================================================================

class DiffViewerError(Exception):
    """Base exception for the diff viewer."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR",
                 details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to an error payload dict."""
        return {
            'success': False,
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details
            }
        }


class ValidationError(DiffViewerError):
    """Invalid argument passed by a caller."""
    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, code="VALIDATION_ERROR",
                         details={'field': field, **kwargs})


class ConfigurationError(DiffViewerError):
    """Invalid configuration."""
    def __init__(self, errors, **kwargs):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        message = "Diff viewer configuration is invalid:\n" + "\n".join(f"  - {e}" for e in self.errors)
        super().__init__(message, code="CONFIG_ERROR",
                         details={'errors': self.errors, **kwargs})
