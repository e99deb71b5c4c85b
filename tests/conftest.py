import pytest

from models import close_db, init_db
from settings import Settings


@pytest.fixture
def database(tmp_path):
    db = init_db(f"sqlite:///{tmp_path / 'ip_changes.db'}")
    yield db
    close_db()


@pytest.fixture
def make_settings():
    def _make(**overrides):
        values = dict(
            smtp_host="smtp.example.com",
            smtp_port=587,
            smtp_user="notifier@example.com",
            smtp_pass="secret",
            mail_from="notifier@example.com",
            mail_to=("ops@example.com",),
        )
        values.update(overrides)
        return Settings(**values)

    return _make


class RecordingSender:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def __call__(self, settings, subject, body):
        self.calls.append((settings.mail_to, subject, body))
        if self.error is not None:
            raise self.error


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def failing_sender():
    def _make(error):
        return RecordingSender(error=error)

    return _make
