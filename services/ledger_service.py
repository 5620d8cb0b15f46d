# services/ledger_service.py
"""
Ledger Service - gold purchase bookkeeping.

A purchase is recorded as two independent writes:
1. Append an immutable Transaction (total = grams * price_per_gram, float math)
2. Re-read the member's running totals and write back
   total_grams += grams, total_amount_spent += total, months_paid += 1

The writes are committed separately. If the process stops between them the
Transaction exists but the member totals do not include it. Step 2 is a plain
read-modify-write without a version check, so two concurrent purchases by the
same member can lose one update (last write wins).

months_paid moves by exactly one per purchase regardless of grams or amount.

Input validation (positive, finite grams) is the caller's responsibility.
"""
import logging
from datetime import datetime
from typing import List, NamedTuple, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from models import Member, Transaction

logger = logging.getLogger(__name__)


class MemberTotals(NamedTuple):
     total_grams: float
     total_amount_spent: float
     months_paid: int


def compute_total_amount(grams_purchased: float, price_per_gram: float) -> float:
     """Monetary cost of a purchase; plain float multiplication."""
     return grams_purchased * price_per_gram


def append_transaction(
     db: Session,
     user_id: int,
     user_book_id: str,
     user_name: str,
     grams_purchased: float,
     price_per_gram: float,
     now: Optional[datetime] = None,
) -> Transaction:
     """
     Append an immutable Transaction and commit it on its own.

     month/year are derived from the transaction timestamp.
     """
     if now is None:
          now = datetime.utcnow()

     entry = Transaction(
          user_id=user_id,
          user_book_id=user_book_id,
          user_name=user_name,
          grams_purchased=grams_purchased,
          price_per_gram=price_per_gram,
          total_amount=compute_total_amount(grams_purchased, price_per_gram),
          transaction_date=now,
          month=now.month,
          year=now.year,
     )
     db.add(entry)
     db.commit()
     db.refresh(entry)
     return entry


def read_member_totals(db: Session, user_id: int) -> Optional[MemberTotals]:
     """Read the member's current running totals (None if the member is missing)."""
     row = (
          db.query(Member.total_grams, Member.total_amount_spent, Member.months_paid)
          .filter(Member.id == user_id)
          .first()
     )
     if row is None:
          return None
     return MemberTotals(
          total_grams=row.total_grams or 0.0,
          total_amount_spent=row.total_amount_spent or 0.0,
          months_paid=row.months_paid or 0,
     )


def write_member_totals(db: Session, user_id: int, totals: MemberTotals) -> None:
     """Unconditionally overwrite the member's running totals and commit."""
     db.query(Member).filter(Member.id == user_id).update(
          {
               Member.total_grams: totals.total_grams,
               Member.total_amount_spent: totals.total_amount_spent,
               Member.months_paid: totals.months_paid,
          },
          synchronize_session="fetch",
     )
     db.commit()


def apply_purchase(totals: MemberTotals, grams_purchased: float, total_amount: float) -> MemberTotals:
     """New running totals after one purchase."""
     return MemberTotals(
          total_grams=totals.total_grams + grams_purchased,
          total_amount_spent=totals.total_amount_spent + total_amount,
          months_paid=totals.months_paid + 1,
     )


def create_transaction(
     db: Session,
     user_id: int,
     user_book_id: str,
     user_name: str,
     grams_purchased: float,
     price_per_gram: float,
     now: Optional[datetime] = None,
) -> Transaction:
     """
     Record a gold purchase for a member.

     Args:
          db: SQLAlchemy database session
          user_id: Member record id
          user_book_id: Member Book ID (copied onto the transaction)
          user_name: Member display name (copied onto the transaction)
          grams_purchased: Grams bought; must already be validated as positive
          price_per_gram: Price applied, normally the current gold quote
          now: Transaction timestamp (default: utcnow)

     Returns:
          The persisted Transaction

     A missing member leaves the Transaction in place and skips the totals update.
     """
     entry = append_transaction(
          db,
          user_id=user_id,
          user_book_id=user_book_id,
          user_name=user_name,
          grams_purchased=grams_purchased,
          price_per_gram=price_per_gram,
          now=now,
     )
     logger.info("Transaction %s: member %s bought %sg at %s/g (total %.2f)",
                 entry.id, user_book_id, grams_purchased, price_per_gram, entry.total_amount)

     totals = read_member_totals(db, user_id)
     if totals is None:
          logger.warning("Member %s not found; totals not updated for transaction %s", user_id, entry.id)
          return entry

     write_member_totals(db, user_id, apply_purchase(totals, grams_purchased, entry.total_amount))
     return entry


def get_member_transactions(db: Session, user_id: int, limit: Optional[int] = None) -> List[Transaction]:
     """A member's transactions, newest first."""
     query = (
          db.query(Transaction)
          .filter(Transaction.user_id == user_id)
          .order_by(desc(Transaction.transaction_date), desc(Transaction.id))
     )
     if limit:
          query = query.limit(limit)
     return query.all()


def get_all_transactions(db: Session, limit: Optional[int] = None) -> List[Transaction]:
     """Every transaction, newest first."""
     query = db.query(Transaction).order_by(desc(Transaction.transaction_date), desc(Transaction.id))
     if limit:
          query = query.limit(limit)
     return query.all()
