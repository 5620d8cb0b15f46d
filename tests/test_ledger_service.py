import math
from datetime import datetime

import pytest

from models import Member, Transaction
from services.ledger_service import (
    MemberTotals,
    apply_purchase,
    append_transaction,
    compute_total_amount,
    create_transaction,
    get_all_transactions,
    get_member_transactions,
    read_member_totals,
    write_member_totals,
)
from services.member_service import MemberService


def _set_totals(db, member, grams, amount, months):
    write_member_totals(db, member.id, MemberTotals(grams, amount, months))


def _fresh(db, member_id):
    db.expire_all()
    return db.query(Member).filter(Member.id == member_id).one()


def _buy(db, member, grams, price, now=None):
    return create_transaction(
        db,
        user_id=member.id,
        user_book_id=member.book_id,
        user_name=member.name,
        grams_purchased=grams,
        price_per_gram=price,
        now=now,
    )


class TestComputeTotal:
    """Total amount is grams times price per gram."""

    @pytest.mark.parametrize("grams,price", [(1.0, 5600.0), (0.5, 5512.75), (2.25, 6001.1), (0.001, 78.5)])
    def test_total_is_product(self, grams, price):
        assert compute_total_amount(grams, price) == grams * price

    def test_persisted_total_matches_product(self, db, member):
        entry = _buy(db, member, 0.37, 5523.45)
        stored = db.query(Transaction).filter(Transaction.id == entry.id).one()
        assert math.isclose(stored.total_amount, 0.37 * 5523.45, rel_tol=1e-12)


class TestCreateTransaction:
    """Recording a purchase appends a transaction and updates member totals."""

    def test_worked_example(self, db, member):
        """2.5g/13750/3 months plus 1.0g at 5600 -> 3.5g/19350/4 months."""
        _set_totals(db, member, 2.5, 13750.0, 3)

        entry = _buy(db, member, 1.0, 5600.0)

        assert entry.grams_purchased == 1.0
        assert entry.price_per_gram == 5600.0
        assert entry.total_amount == pytest.approx(5600.00)

        updated = _fresh(db, member.id)
        assert updated.total_grams == pytest.approx(3.5)
        assert updated.total_amount_spent == pytest.approx(19350.00)
        assert updated.months_paid == 4

    def test_denormalized_member_fields(self, db, member):
        entry = _buy(db, member, 1.0, 5600.0)
        assert entry.user_id == member.id
        assert entry.user_book_id == "RM-1042"
        assert entry.user_name == "Priya Raman"

    def test_copied_name_is_not_maintained(self, db, member):
        entry = _buy(db, member, 1.0, 5600.0)
        member.name = "Priya R."
        db.commit()

        db.expire_all()
        stored = db.query(Transaction).filter(Transaction.id == entry.id).one()
        assert stored.user_name == "Priya Raman"

    def test_month_and_year_from_timestamp(self, db, member):
        when = datetime(2026, 3, 14, 9, 30)
        entry = _buy(db, member, 1.0, 5600.0, now=when)
        assert entry.transaction_date == when
        assert entry.month == 3
        assert entry.year == 2026

    def test_sequential_purchases_accumulate(self, db, member):
        purchases = [(1.0, 5500.0), (0.5, 5600.0), (2.0, 5450.5), (0.25, 5710.0)]
        for grams, price in purchases:
            _buy(db, member, grams, price)

        updated = _fresh(db, member.id)
        assert updated.total_grams == pytest.approx(sum(g for g, _ in purchases))
        assert updated.total_amount_spent == pytest.approx(sum(g * p for g, p in purchases))
        assert updated.months_paid == len(purchases)

    def test_months_paid_moves_by_one_regardless_of_size(self, db, member):
        _buy(db, member, 10.0, 5600.0)
        assert _fresh(db, member.id).months_paid == 1
        _buy(db, member, 0.01, 5600.0)
        assert _fresh(db, member.id).months_paid == 2

    def test_totals_never_decrease(self, db, member):
        previous = (0.0, 0.0)
        for grams in (0.5, 1.0, 0.1):
            _buy(db, member, grams, 5600.0)
            m = _fresh(db, member.id)
            assert m.total_grams >= previous[0]
            assert m.total_amount_spent >= previous[1]
            previous = (m.total_grams, m.total_amount_spent)

    def test_missing_member_keeps_transaction(self, db):
        entry = create_transaction(
            db,
            user_id=999,
            user_book_id="GHOST",
            user_name="Nobody",
            grams_purchased=1.0,
            price_per_gram=5600.0,
        )
        assert db.query(Transaction).filter(Transaction.id == entry.id).count() == 1
        assert db.query(Member).count() == 0

    def test_transaction_survives_when_totals_step_never_runs(self, db, member):
        """The two writes are independent: the append is committed on its own."""
        append_transaction(db, member.id, member.book_id, member.name, 1.0, 5600.0)

        assert db.query(Transaction).count() == 1
        updated = _fresh(db, member.id)
        assert updated.total_grams == 0.0
        assert updated.months_paid == 0


class TestConcurrentPurchases:
    """Known limitation: member totals use read-modify-write without a version check."""

    def test_interleaved_purchases_lose_an_update(self, db, session_maker, member):
        _set_totals(db, member, 2.5, 13750.0, 3)
        first, second = session_maker(), session_maker()
        try:
            append_transaction(first, member.id, member.book_id, member.name, 1.0, 5600.0)
            append_transaction(second, member.id, member.book_id, member.name, 2.0, 5600.0)

            # Both purchases read the same pre-purchase totals...
            seen_by_first = read_member_totals(first, member.id)
            seen_by_second = read_member_totals(second, member.id)
            assert seen_by_first == seen_by_second

            # ...and each writes back its own view; the later write wins.
            write_member_totals(first, member.id, apply_purchase(seen_by_first, 1.0, 5600.0))
            write_member_totals(second, member.id, apply_purchase(seen_by_second, 2.0, 11200.0))
        finally:
            first.close()
            second.close()

        assert db.query(Transaction).count() == 2
        updated = _fresh(db, member.id)
        assert updated.total_grams == pytest.approx(4.5)  # not 5.5
        assert updated.total_amount_spent == pytest.approx(24950.0)  # not 30550.0
        assert updated.months_paid == 4  # not 5


class TestTransactionQueries:
    """Listing transactions."""

    def test_member_transactions_newest_first(self, db, member):
        _buy(db, member, 1.0, 5500.0, now=datetime(2026, 1, 5))
        _buy(db, member, 2.0, 5600.0, now=datetime(2026, 3, 5))
        _buy(db, member, 3.0, 5550.0, now=datetime(2026, 2, 5))

        rows = get_member_transactions(db, member.id)
        assert [t.grams_purchased for t in rows] == [2.0, 3.0, 1.0]

    def test_member_transactions_filtered_by_member(self, db, member):
        other = MemberService.create_member(db, name="Arun", book_id="RM-2000", phone="9222222222")
        _buy(db, member, 1.0, 5500.0)
        _buy(db, other, 2.0, 5500.0)

        assert [t.user_id for t in get_member_transactions(db, member.id)] == [member.id]
        assert len(get_all_transactions(db)) == 2

    def test_limit(self, db, member):
        for day in range(1, 8):
            _buy(db, member, 1.0, 5500.0, now=datetime(2026, 1, day))
        rows = get_all_transactions(db, limit=5)
        assert len(rows) == 5
        assert rows[0].transaction_date == datetime(2026, 1, 7)
