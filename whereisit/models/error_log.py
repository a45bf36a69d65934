"""
Error Log Model
Server-side failures persisted by whereisit.services.error_logging.

Rows are written for unhandled exceptions and 5xx domain errors
(ProvisioningFailed, CodeGenerationExhausted). Client errors (4xx) only go
to the log files.
"""

from sqlalchemy import Column, String, Text, JSON, DateTime
from datetime import datetime, timezone

from whereisit.models.base import BaseModel


class ErrorLog(BaseModel):
    """
    One failure, with enough request and user context to reproduce it.

    user_id is the token subject and is kept as plain text: the user row
    may not exist yet when authentication itself fails.
    """
    __tablename__ = "error_logs"

    timestamp = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True
    )

    # What failed
    error_type = Column(String(255), nullable=False, index=True)  # Exception class, e.g. "ProvisioningFailed"
    error_code = Column(String(50), nullable=True)  # HTTP status carried by domain errors
    severity = Column(String(20), default="error", nullable=False)  # error or critical

    # Innermost frame of the traceback
    module = Column(String(255), nullable=True)
    function = Column(String(255), nullable=True)
    line_number = Column(String(20), nullable=True)

    # Who
    user_id = Column(String(255), nullable=True, index=True)
    user_email = Column(String(255), nullable=True)

    # Request, without body or credentials
    request_method = Column(String(10), nullable=True)
    request_path = Column(String(500), nullable=True)
    request_query = Column(Text, nullable=True)
    request_headers = Column(JSON, nullable=True)
    client_ip = Column(String(50), nullable=True)
    user_agent = Column(String(500), nullable=True)

    message = Column(Text, nullable=False)
    error_buffer = Column(Text, nullable=True)  # Human readable dump, same as the log file entry
    stack_trace = Column(Text, nullable=True)
    context_data = Column(JSON, nullable=True)  # Sanitized extra context

    def __repr__(self):
        return f"<ErrorLog(id={self.id}, type={self.error_type}, path={self.request_path})>"
