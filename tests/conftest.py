import pytest

from services.auth import AuthService
from services.conversation import ConversationService
from services.signal import SignalPredictionService
from store.chat_history import ChatHistoryStore
from store.credentials import CredentialStore
from store.kv import MemoryStore
from store.session import SessionStore
from tests.fakes import FakeAnswerFlow, FakePredictFlow


@pytest.fixture
def kv():
    return MemoryStore()


@pytest.fixture
def auth(kv):
    return AuthService(CredentialStore(kv), SessionStore(kv))


@pytest.fixture
def answer_flow():
    return FakeAnswerFlow()


@pytest.fixture
def conversations(answer_flow):
    return ConversationService(ChatHistoryStore(), answer_flow=answer_flow)


@pytest.fixture
def predict_flow():
    return FakePredictFlow()


@pytest.fixture
def signals(predict_flow):
    return SignalPredictionService(predict_flow=predict_flow)
