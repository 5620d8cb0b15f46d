import pytest

from models import INSTALLMENT_MONTHS, Member
from services.member_service import DuplicateBookIdError, MemberNotFoundError, MemberService


class TestCreateMember:
    """Creating members."""

    def test_new_member_has_zero_totals(self, member):
        assert member.total_grams == 0.0
        assert member.total_amount_spent == 0.0
        assert member.months_paid == 0
        assert member.is_active is True
        assert member.is_admin is False
        assert member.created_at is not None

    def test_optional_email(self, db):
        m = MemberService.create_member(db, name="Arun", book_id="RM-2000", phone="9222222222", email="")
        assert m.email is None

    def test_duplicate_book_id_rejected(self, db, member):
        with pytest.raises(DuplicateBookIdError):
            MemberService.create_member(db, name="Someone Else", book_id="RM-1042", phone="9333333333")
        assert db.query(Member).count() == 1

    def test_book_id_stored_trimmed(self, db):
        m = MemberService.create_member(db, name="Arun", book_id=" RM-2000 ", phone="9222222222")
        assert m.book_id == "RM-2000"


class TestListMembers:
    """Listing members."""

    def test_admins_hidden_by_default(self, db, member, admin_member):
        listed = MemberService.list_members(db)
        assert [m.id for m in listed] == [member.id]

    def test_include_admins(self, db, member, admin_member):
        listed = MemberService.list_members(db, include_admins=True)
        assert {m.id for m in listed} == {member.id, admin_member.id}

    def test_newest_first(self, db):
        first = MemberService.create_member(db, name="A", book_id="RM-1", phone="1")
        second = MemberService.create_member(db, name="B", book_id="RM-2", phone="2")
        assert [m.id for m in MemberService.list_members(db)] == [second.id, first.id]


class TestDeactivateMember:
    """Soft deactivation."""

    def test_deactivate_keeps_record(self, db, member):
        MemberService.deactivate_member(db, member.id)
        db.expire_all()
        stored = db.query(Member).filter(Member.id == member.id).one()
        assert stored.is_active is False

    def test_unknown_member(self, db):
        with pytest.raises(MemberNotFoundError):
            MemberService.deactivate_member(db, 404)


class TestMonthsRemaining:
    """Installment plan progress."""

    @pytest.mark.parametrize("paid,remaining", [(0, 11), (4, 7), (11, 0), (13, 0)])
    def test_months_remaining(self, paid, remaining):
        assert INSTALLMENT_MONTHS == 11
        assert Member(months_paid=paid).months_remaining == remaining
