import json
from concurrent.futures import ThreadPoolExecutor

import pytest

import services.auth
from services.auth import AuthService
from services.models import AuthError, EmailInUseError, ErrorKind, InvalidCredentialsError, User
from store.credentials import USERS_KEY, CredentialStore
from store.session import SESSION_KEY, SessionStore


class RecordingContext:
    """Wraps a CryptContext and records which checks were run."""

    def __init__(self, context):
        self.context = context
        self.calls = []

    def hash(self, password):
        return self.context.hash(password)

    def verify(self, password, hashed):
        self.calls.append("verify")
        return self.context.verify(password, hashed)

    def dummy_verify(self):
        self.calls.append("dummy_verify")
        return self.context.dummy_verify()


def test_signup_then_login_returns_same_uid(auth):
    created = auth.signup("asha@example.com", "s3cret")
    auth.logout()

    logged_in = auth.login("asha@example.com", "s3cret")

    assert logged_in.uid == created.uid
    assert logged_in.email == "asha@example.com"
    assert logged_in.display_name == "asha"
    assert auth.current_user == logged_in


def test_signup_sets_session_and_persists_it(auth, kv):
    user = auth.signup("ravi@example.com", "pw")

    assert auth.current_user == user
    assert json.loads(kv.get(SESSION_KEY))["uid"] == user.uid


def test_signup_generates_distinct_uids(auth):
    first = auth.signup("a@example.com", "pw")
    second = auth.signup("b@example.com", "pw")

    assert first.uid != second.uid
    assert first.uid.startswith("uid-")


@pytest.mark.parametrize("password", ["pw", "different", ""])
def test_duplicate_signup_fails_regardless_of_password(auth, password):
    auth.signup("dup@example.com", "pw")

    with pytest.raises(EmailInUseError) as excinfo:
        auth.signup("dup@example.com", password)

    assert str(excinfo.value) == "Email already in use"
    assert excinfo.value.kind is ErrorKind.AUTHENTICATION


def test_login_with_wrong_password_fails(auth):
    auth.signup("meera@example.com", "Correct")
    auth.logout()

    with pytest.raises(InvalidCredentialsError):
        auth.login("meera@example.com", "correct")
    assert auth.current_user is None


def test_login_error_does_not_reveal_unknown_email(auth, monkeypatch):
    auth.signup("known@example.com", "pw")
    hashing = RecordingContext(services.auth.pwd_context)
    monkeypatch.setattr(services.auth, "pwd_context", hashing)

    with pytest.raises(AuthError) as unknown:
        auth.login("nobody@example.com", "pw")
    with pytest.raises(AuthError) as wrong:
        auth.login("known@example.com", "nope")

    assert type(unknown.value) is type(wrong.value)
    assert str(unknown.value) == str(wrong.value) == "Invalid email or password"
    # Both paths pay for one password hash check.
    assert hashing.calls == ["dummy_verify", "verify"]


def test_password_is_not_stored_verbatim(auth, kv):
    auth.signup("hash@example.com", "plain-text-secret")

    stored = json.loads(kv.get(USERS_KEY))["hash@example.com"]
    assert "plain-text-secret" not in kv.get(USERS_KEY)
    assert stored["password_hash"].startswith("$pbkdf2-sha256$")


def test_logout_then_restore_yields_no_user(auth, kv):
    auth.signup("bye@example.com", "pw")
    auth.logout()

    assert kv.get(SESSION_KEY) is None
    restored = AuthService(CredentialStore(kv), SessionStore(kv))
    assert restored.restore_session() is None
    assert restored.loading is False


def test_restore_session_picks_up_persisted_user(auth, kv):
    user = auth.signup("stay@example.com", "pw")

    restarted = AuthService(CredentialStore(kv), SessionStore(kv))
    assert restarted.loading is True
    assert restarted.current_user is None

    assert restarted.restore_session() == user
    assert restarted.loading is False


def test_restore_session_loads_only_once(auth, kv):
    assert auth.restore_session() is None
    # A session written behind the service's back is not re-read.
    SessionStore(kv).save(User(uid="uid-1-abc", email="late@example.com"))

    assert auth.restore_session() is None
    assert auth.current_user is None
    assert auth.loading is False


def test_accounts_survive_restart(auth, kv):
    user = auth.signup("persist@example.com", "pw")

    restarted = AuthService(CredentialStore(kv), SessionStore(kv))
    assert restarted.login("persist@example.com", "pw").uid == user.uid


def test_display_name_without_at_sign_is_whole_email(auth):
    assert auth.signup("localonly", "pw").display_name == "localonly"


def test_concurrent_signups_for_one_email_create_one_account(auth, kv):
    def attempt(i):
        try:
            return auth.signup("race@example.com", f"pw{i}")
        except EmailInUseError:
            return None

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(attempt, range(16)))

    created = [user for user in results if user is not None]
    assert len(created) == 1
    assert list(json.loads(kv.get(USERS_KEY))) == ["race@example.com"]
    assert CredentialStore(kv).get("race@example.com").uid == created[0].uid
