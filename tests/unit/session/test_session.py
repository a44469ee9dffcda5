"""Tests for session cookie decoding and credential forwarding."""

import base64

import httpx
import pytest
from conftest import SESSION_ID, USER_ID, make_token

from notesweb.session import Session, decode_session_token, forward_credentials, read_session

BACKEND = httpx.URL("http://localhost:3123/api")


@pytest.fixture
def session():
    return Session(token=make_token(), id=SESSION_ID, user_id=USER_ID)


class TestDecodeSessionToken:
    """Tests for decode_session_token."""

    def test_valid_token(self):
        """Test that header claims are extracted and the token kept verbatim."""
        token = make_token()
        session = decode_session_token(token)

        assert session is not None
        assert session.token == token
        assert session.id == SESSION_ID
        assert session.user_id == USER_ID

    def test_jws_shaped_token(self):
        """Test that a three-segment token is accepted too."""
        token = ".".join(make_token().split(".")[:3])
        session = decode_session_token(token)
        assert session is not None
        assert session.user_id == USER_ID

    @pytest.mark.parametrize(
        "token",
        [
            "",
            "not-a-token",
            "a.b",
            ".payload.signature",
            "!!!.payload.signature",
            base64.urlsafe_b64encode(b"not json").decode() + ".x.y",
            base64.urlsafe_b64encode(b"[1, 2]").decode() + ".x.y",
            base64.urlsafe_b64encode(b"\xff\xfe").decode() + ".x.y",
            base64.urlsafe_b64encode(b"[" * 2000).decode() + ".a.b.c.d",
            base64.urlsafe_b64encode(b"{" * 2000).decode() + ".a.b.c.d",
            "A" * 5000 + ".a.b.c.d",
        ],
    )
    def test_malformed_token_is_no_session(self, token):
        """Test that malformed tokens degrade to no session instead of raising."""
        assert decode_session_token(token) is None

    def test_missing_claims(self):
        """Test that a header without session claims is no session."""
        assert decode_session_token(make_token({"alg": "A256GCMKW"})) is None
        assert decode_session_token(make_token({"session_id": str(SESSION_ID)})) is None

    def test_non_string_claims(self):
        """Test that claims must be strings."""
        assert decode_session_token(make_token({"session_id": 1, "user_id": 2})) is None

    def test_non_uuid_claims(self):
        """Test that claims must be UUIDs."""
        header = {"session_id": "../../notes", "user_id": str(USER_ID)}
        assert decode_session_token(make_token(header)) is None


class TestReadSession:
    """Tests for read_session."""

    def test_no_cookie(self):
        assert read_session({}) is None

    def test_empty_cookie(self):
        assert read_session({"sessionToken": ""}) is None

    def test_malformed_cookie(self):
        assert read_session({"sessionToken": "garbage"}) is None

    def test_valid_cookie(self):
        session = read_session({"sessionToken": make_token(), "userId": "ignored"})
        assert session is not None
        assert session.id == SESSION_ID


class TestForwardCredentials:
    """Tests for forward_credentials."""

    def test_backend_request_gets_bearer_token(self, session):
        headers = forward_credentials(session, httpx.URL("http://localhost:3123/api/notes"), BACKEND)
        assert headers == {"Authorization": f"Bearer {session.token}"}

    def test_no_session_no_header(self):
        assert forward_credentials(None, httpx.URL("http://localhost:3123/api/notes"), BACKEND) == {}

    @pytest.mark.parametrize(
        "target",
        [
            "http://example.com/api/notes",
            "http://localhost:8080/api/notes",
            "http://localhost/api/notes",
            "http://127.0.0.1:3123/api/notes",
        ],
    )
    def test_other_hosts_never_get_header(self, session, target):
        """Test that the token only goes to the notes API host and port."""
        assert forward_credentials(session, httpx.URL(target), BACKEND) == {}

    def test_default_ports_match(self, session):
        """Test that an explicit default port matches an implicit one."""
        backend = httpx.URL("https://notes.example.com/api")
        target = httpx.URL("https://notes.example.com:443/api/notes")
        assert forward_credentials(session, target, backend) == {"Authorization": f"Bearer {session.token}"}

    def test_hostname_match_is_case_insensitive(self, session):
        target = httpx.URL("http://LOCALHOST:3123/api/notes")
        assert "Authorization" in forward_credentials(session, target, BACKEND)
