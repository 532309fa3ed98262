"""
Shared pytest fixtures: in-memory SQLite, fake speech/chat clients, TestClient.
"""
import os

# Keep the app's own engine off the filesystem during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.clients import get_chat_client, get_speech_client
from app.config import settings
from app.database import Base, get_db, init_db
from app.models import CostRecordModel, PurchaseOrderModel  # noqa: F401  (register models)
from app.main import app

# StaticPool ensures all connections share the same in-memory database
_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_Session = sessionmaker(autocommit=False, autoflush=False, bind=_ENGINE)


class FakeSpeechClient:
    """Stands in for ``ElevenLabs``; answers per language code."""

    def __init__(self):
        self.responses = {}
        self.calls = []
        self.speech_to_text = self

    def convert(self, *, file, model_id, language_code, tag_audio_events, diarize):
        self.calls.append(language_code)
        outcome = self.responses[language_code]
        if isinstance(outcome, Exception):
            raise outcome
        return SimpleNamespace(text=outcome)


class FakeChatClient:
    """Stands in for ``OpenAI``; replies are consumed in call order."""

    def __init__(self):
        self.replies = []
        self.requests = []
        self.chat = SimpleNamespace(completions=self)

    def create(self, **kwargs):
        self.requests.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        message = SimpleNamespace(content=reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture(autouse=True)
def _reset_tables():
    init_db(_ENGINE)
    yield
    Base.metadata.drop_all(bind=_ENGINE)


@pytest.fixture(autouse=True)
def _tmp_storage(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "MEMO_LOG_PATH", str(tmp_path / "memos.txt"))
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))


@pytest.fixture()
def memo_path(tmp_path):
    return tmp_path / "memos.txt"


@pytest.fixture()
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture()
def db():
    session = _Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def speech():
    return FakeSpeechClient()


@pytest.fixture()
def chat():
    return FakeChatClient()


@pytest.fixture()
def client(db, speech, chat):
    def _override():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = _override
    app.dependency_overrides[get_speech_client] = lambda: speech
    app.dependency_overrides[get_chat_client] = lambda: chat
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
