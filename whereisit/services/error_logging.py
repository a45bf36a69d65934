"""
Error Logging Service

Error logging system that:
- Writes to rotating log files when the logs directory is writable
- Stores errors in the database for querying
- Captures request and user context plus the traceback
- Sanitizes sensitive data

Usage:
    from whereisit.services.error_logging import error_logger

    try:
        # some code
    except Exception as e:
        error_logger.log_error(e, request=request, user=current_user)
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from whereisit.models.error_log import ErrorLog

logger = logging.getLogger("whereisit.errors")

# Sensitive fields to sanitize
SENSITIVE_FIELDS = {'token', 'access_token', 'authorization', 'api_key', 'secret', 'credential'}

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
DETAILED_LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def sanitize_data(data: Any, depth: int = 0) -> Any:
    """
    Sanitize sensitive data from dictionaries and strings.
    Replaces sensitive field values with '[REDACTED]'.
    """
    if depth > 10:
        return "[MAX_DEPTH]"

    if isinstance(data, dict):
        sanitized = {}
        for key, value in data.items():
            if any(sensitive in str(key).lower() for sensitive in SENSITIVE_FIELDS):
                sanitized[key] = "[REDACTED]"
            else:
                sanitized[key] = sanitize_data(value, depth + 1)
        return sanitized
    if isinstance(data, list):
        return [sanitize_data(item, depth + 1) for item in data]
    if isinstance(data, str) and len(data) > 20 and data.startswith("eyJ"):
        # JWT
        return "[REDACTED_TOKEN]"
    return data


def truncate_string(s: str, max_length: int = 10000) -> str:
    if len(s) > max_length:
        return s[:max_length] + f"... [TRUNCATED, total {len(s)} chars]"
    return s


def setup_file_logging(logs_dir: str) -> bool:
    """
    Attach rotating file handlers to the root logger.

    errors.log receives ERROR and above, app_detailed.log everything.
    Returns False, leaving console logging only, when the directory cannot
    be written.
    """
    path = Path(logs_dir)
    try:
        path.mkdir(parents=True, exist_ok=True)
        marker = path / ".write_test"
        marker.touch()
        marker.unlink()
    except OSError as e:
        logger.warning(f"Cannot write to logs directory {path}: {e}. File logging disabled.")
        return False

    error_handler = RotatingFileHandler(
        path / "errors.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=10,
        encoding='utf-8'
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    detailed_handler = RotatingFileHandler(
        path / "app_detailed.log",
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    detailed_handler.setLevel(logging.DEBUG)
    detailed_handler.setFormatter(logging.Formatter(DETAILED_LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.addHandler(error_handler)
    root_logger.addHandler(detailed_handler)
    return True


class ErrorLogger:
    """
    Error logging service that writes to both file and database.
    """

    def __init__(self):
        self.db_session_factory: Optional[Callable[[], Session]] = None

    def set_db_session_factory(self, factory: Optional[Callable[[], Session]]):
        """Set the database session factory for DB logging."""
        self.db_session_factory = factory

    def log_error(
        self,
        error: Exception,
        request: Optional[Any] = None,
        user: Optional[Any] = None,
        severity: str = "error",
        context: Optional[Dict] = None,
        save_to_db: bool = True
    ) -> Optional[int]:
        """
        Log an error with full context.

        Args:
            error: The exception that occurred
            request: Starlette Request object (optional)
            user: Current user object (optional)
            severity: debug, info, warning, error, critical
            context: Additional context data
            save_to_db: Whether to save to database

        Returns:
            ID of the error log row if saved to DB, None otherwise
        """
        timestamp = datetime.now(timezone.utc)
        error_type = type(error).__name__
        error_message = str(error) or error_type

        tb = error.__traceback__ or sys.exc_info()[2]
        module = function = line_number = None
        if tb is not None:
            stack_trace = ''.join(traceback.format_exception(type(error), error, tb))
            frames = traceback.extract_tb(tb)
            if frames:
                last_frame = frames[-1]
                module = last_frame.filename
                function = last_frame.name
                line_number = str(last_frame.lineno)
        else:
            stack_trace = ''.join(traceback.format_exception_only(type(error), error))

        buffer_parts = [
            "=== ERROR LOG ===",
            f"Timestamp: {timestamp.isoformat()}",
            f"Type: {error_type}",
            f"Message: {error_message}",
            f"Severity: {severity}",
        ]

        request_method = request_path = request_query = None
        request_headers = client_ip = user_agent = None
        if request is not None:
            request_method = request.method
            request_path = str(request.url.path)
            request_query = str(request.url.query) if request.url.query else None
            client_ip = request.client.host if request.client else None
            user_agent = request.headers.get("user-agent")

            safe_headers = {
                key: request.headers[key]
                for key in ('content-type', 'accept', 'accept-language', 'x-request-id')
                if key in request.headers
            }
            request_headers = safe_headers or None

            buffer_parts.extend([
                "\n=== REQUEST ===",
                f"Method: {request_method}",
                f"Path: {request_path}",
                f"Query: {request_query}",
                f"Client IP: {client_ip}",
                f"User Agent: {user_agent}",
            ])

        user_id = getattr(user, "id", None)
        user_email = getattr(user, "email", None)
        if user is not None:
            buffer_parts.extend([
                "\n=== USER ===",
                f"ID: {user_id}",
                f"Email: {user_email}",
            ])

        sanitized_context = sanitize_data(context) if context else None
        if sanitized_context:
            buffer_parts.extend([
                "\n=== CONTEXT ===",
                json.dumps(sanitized_context, indent=2, default=str),
            ])

        buffer_parts.extend(["\n=== STACK TRACE ===", stack_trace])
        error_buffer = truncate_string("\n".join(buffer_parts), 50000)

        log_message = f"{error_type}: {error_message} | User: {user_email or user_id or 'anonymous'} | Path: {request_path or 'N/A'}"
        level = {
            "critical": logging.CRITICAL,
            "error": logging.ERROR,
            "warning": logging.WARNING,
            "debug": logging.DEBUG,
        }.get(severity, logging.INFO)
        logger.log(level, log_message)

        if not save_to_db or self.db_session_factory is None:
            return None

        db = self.db_session_factory()
        try:
            error_log = ErrorLog(
                timestamp=timestamp,
                error_type=error_type,
                error_code=str(getattr(error, 'status_code', '')) or None,
                severity=severity,
                module=module,
                function=function,
                line_number=line_number,
                user_id=user_id,
                user_email=user_email,
                request_method=request_method,
                request_path=request_path,
                request_query=request_query,
                request_headers=request_headers,
                client_ip=client_ip,
                user_agent=truncate_string(user_agent, 500) if user_agent else None,
                message=truncate_string(error_message, 1000),
                error_buffer=error_buffer,
                stack_trace=truncate_string(stack_trace, 20000),
                context_data=sanitized_context,
            )
            db.add(error_log)
            db.commit()
            logger.debug(f"Error logged to DB with ID: {error_log.id}")
            return error_log.id
        except SQLAlchemyError as db_err:
            db.rollback()
            logger.error(f"Failed to save error to database: {db_err}")
            return None
        finally:
            db.close()


# Singleton instance
error_logger = ErrorLogger()


def configure_error_logging(
    db_session_factory: Optional[Callable[[], Session]],
    logs_dir: Optional[str] = None
) -> None:
    """
    Configure the error logging system.
    Call this during app startup.
    """
    if logs_dir:
        setup_file_logging(logs_dir)
    error_logger.set_db_session_factory(db_session_factory)
    logger.info("Error logging system configured")
