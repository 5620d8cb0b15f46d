import pytest
from jose import jwt

from dependencies import ALGORITHM, SECRET_KEY, create_session_token
from models import AnonymousSession
from services.auth_service import InvalidBookIdError, authenticate_with_book_id, sign_out


class TestAuthenticateWithBookId:
    """Book ID login."""

    def test_active_member_resolves(self, db, member):
        resolved, anon = authenticate_with_book_id(db, "RM-1042")
        assert resolved.id == member.id
        assert anon.uid

    def test_book_id_is_trimmed(self, db, member):
        resolved, _ = authenticate_with_book_id(db, "  RM-1042 \n")
        assert resolved.id == member.id

    def test_unknown_and_inactive_fail_identically(self, db, inactive_member):
        with pytest.raises(InvalidBookIdError) as unknown:
            authenticate_with_book_id(db, "RM-9999")
        with pytest.raises(InvalidBookIdError) as inactive:
            authenticate_with_book_id(db, inactive_member.book_id)

        assert type(unknown.value) is type(inactive.value)
        assert str(unknown.value) == str(inactive.value)

    def test_empty_book_id_rejected(self, db, member):
        with pytest.raises(InvalidBookIdError):
            authenticate_with_book_id(db, "   ")

    def test_new_session_on_every_call(self, db, member):
        _, first = authenticate_with_book_id(db, "RM-1042")
        _, second = authenticate_with_book_id(db, "RM-1042")
        assert first.uid != second.uid
        assert db.query(AnonymousSession).count() == 2

    def test_session_created_even_when_login_fails(self, db):
        with pytest.raises(InvalidBookIdError):
            authenticate_with_book_id(db, "RM-9999")
        assert db.query(AnonymousSession).count() == 1


class TestSignOut:
    """Ending anonymous sessions."""

    def test_sign_out_removes_session(self, db, member):
        _, anon = authenticate_with_book_id(db, "RM-1042")
        assert sign_out(db, anon.uid) is True
        assert db.query(AnonymousSession).count() == 0

    def test_sign_out_unknown_session(self, db):
        assert sign_out(db, "does-not-exist") is False


class TestSessionToken:
    """Tokens identify the app instance and carry a member snapshot."""

    def test_token_claims(self, db, member):
        _, anon = authenticate_with_book_id(db, "RM-1042")
        token = create_session_token(anon.uid, member)

        claims = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        assert claims["sub"] == anon.uid
        assert claims["member"] == {
            "id": member.id,
            "book_id": "RM-1042",
            "name": "Priya Raman",
            "is_admin": False,
        }

    def test_subject_is_session_not_member(self, db, member):
        _, anon = authenticate_with_book_id(db, "RM-1042")
        claims = jwt.decode(create_session_token(anon.uid, member), SECRET_KEY, algorithms=[ALGORITHM])
        assert claims["sub"] != str(member.id)
