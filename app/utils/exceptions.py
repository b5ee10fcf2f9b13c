"""
Domain exceptions for progress tracking

None of these are fatal to the process. Reads fail with InputUnavailable and
are retried by the caller, writes fail with WriteFailed and leave the stored
state untouched.
"""
from typing import Optional


class ReadingTrackerError(Exception):
    """Base class for all tracker errors"""

    code = "tracker_error"

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InputUnavailable(ReadingTrackerError):
    """A record set required for a computation could not be fetched"""

    code = "input_unavailable"


class DuplicateRecordConflict(ReadingTrackerError):
    """The store rejected a second record for a unique key"""

    code = "duplicate_record"


class WriteFailed(ReadingTrackerError):
    """The store rejected a mutation, nothing was changed"""

    code = "write_failed"


class ReadingNotFound(ReadingTrackerError):
    code = "reading_not_found"


class UserNotFound(ReadingTrackerError):
    code = "user_not_found"
