from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from alumniconnect.exceptions import PersistenceError
from alumniconnect.utils.db_retry import retry_on_transient_error


class FlakyRepository:
    def __init__(self, failures, error_factory=None):
        self.db = MagicMock()
        self.failures = failures
        self.calls = 0
        self.error_factory = error_factory or (
            lambda: OperationalError("SELECT 1", {}, Exception("server closed the connection"))
        )

    @retry_on_transient_error
    def load(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error_factory()
        return ["row"]


def test_transient_failure_is_retried_until_success():
    repo = FlakyRepository(failures=2)

    assert repo.load() == ["row"]
    assert repo.calls == 3
    assert repo.db.rollback.call_count == 2


def test_exhausted_retries_surface_as_persistence_error():
    repo = FlakyRepository(failures=10)

    with pytest.raises(PersistenceError) as excinfo:
        repo.load()

    assert repo.calls == 3
    assert isinstance(excinfo.value.__cause__, OperationalError)


def test_non_transient_database_errors_are_not_retried():
    repo = FlakyRepository(
        failures=1,
        error_factory=lambda: IntegrityError("INSERT", {}, Exception("duplicate key")),
    )

    with pytest.raises(IntegrityError):
        repo.load()

    assert repo.calls == 1
    repo.db.rollback.assert_not_called()
