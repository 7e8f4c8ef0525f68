# alumniconnect/utils/db_retry.py
import logging
import time
from functools import wraps

from sqlalchemy.exc import DBAPIError, OperationalError

from ..config import get_settings
from ..constants import ErrorMessages
from ..exceptions import PersistenceError

logger = logging.getLogger(__name__)


def _is_transient(error: DBAPIError) -> bool:
    return isinstance(error, OperationalError) or error.connection_invalidated


def retry_on_transient_error(func):
    """
    Retries a service method when the database connection fails mid-call.

    The wrapped method must own its transaction (commit at the end), so a
    rollback followed by a full re-run is safe. The instance needs a ``db``
    session attribute. Once the attempts are used up a PersistenceError is
    raised; the failure is never turned into an empty result.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        settings = get_settings()
        max_retries = max(1, settings.DB_MAX_RETRIES)

        for attempt in range(1, max_retries + 1):
            try:
                return func(self, *args, **kwargs)
            except DBAPIError as e:
                if not _is_transient(e):
                    raise
                self.db.rollback()
                if attempt == max_retries:
                    logger.error(f"{func.__qualname__} failed after {attempt} attempts: {e}")
                    raise PersistenceError(ErrorMessages.DATABASE_UNAVAILABLE) from e
                logger.warning(f"Transient database error in {func.__qualname__} (attempt {attempt}/{max_retries}): {e}")
                time.sleep(settings.DB_RETRY_DELAY * attempt)

    return wrapper
