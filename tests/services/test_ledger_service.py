"""
Comprehensive tests for the LedgerPoster.

Tests cover:
- Posting one transaction per line
- Chronological order after posts and batch loads
- Reversal, including unknown ids
- post followed by reverse restores the prior state
- Edits leave no duplicate rows for a journal id
- Lines for unregistered accounts are dropped
"""

import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from bookkeeping.exceptions import AccountNotFoundError
from bookkeeping.models.enums import AccountType
from bookkeeping.schemas.journal import JournalEntry, JournalLine
from bookkeeping.services.ledger_service import LedgerPoster


# --- Helper to reduce repetition ---

def make_entry(entry_id, day, *lines, description="Test"):
    """Build an entry dated in March 2026 from (account, debit, credit)."""
    return JournalEntry(
        id=entry_id,
        date=datetime(2026, 3, day),
        description=description,
        lines=[
            JournalLine(
                account_name=name,
                debit=Decimal(debit),
                credit=Decimal(credit),
            )
            for name, debit, credit in lines
        ],
    )


ACCOUNTS = [
    ("Cash", AccountType.ASSET),
    ("Sales Revenue", AccountType.REVENUE),
    ("Rent Expense", AccountType.EXPENSE),
    ("Capital", AccountType.EQUITY),
]


@pytest.fixture
def ledger():
    poster = LedgerPoster()
    for name, account_type in ACCOUNTS:
        poster.add_account(name, account_type)
    return poster


def posted_rows(ledger, journal_id):
    return [
        t for account in ledger.accounts.values()
        for t in account.transactions
        if t.journal_id == journal_id
    ]


def snapshot(ledger):
    return {
        name: list(account.transactions)
        for name, account in ledger.accounts.items()
    }


class TestPost:

    def test_post_creates_transaction_per_line(self, ledger):
        ledger.post(make_entry(
            "JE-1", 5, ("Cash", "500", "0"), ("Sales Revenue", "0", "500"),
        ))

        cash = ledger.get_account("Cash")
        assert len(cash.transactions) == 1
        txn = cash.transactions[0]
        assert txn.debit == Decimal("500")
        assert txn.credit == Decimal("0")
        assert txn.journal_id == "JE-1"
        assert txn.date == datetime(2026, 3, 5)
        assert ledger.get_account("Sales Revenue").balance == Decimal("500")

    def test_post_keeps_accounts_sorted_by_date(self, ledger):
        ledger.post(make_entry(
            "JE-2", 20, ("Cash", "10", "0"), ("Sales Revenue", "0", "10"),
        ))
        ledger.post(make_entry(
            "JE-1", 3, ("Cash", "20", "0"), ("Sales Revenue", "0", "20"),
        ))

        ids = [t.journal_id for t in ledger.get_account("Cash").transactions]
        assert ids == ["JE-1", "JE-2"]

    def test_same_date_keeps_posting_order(self, ledger):
        for i in range(3):
            ledger.post(make_entry(
                f"JE-{i}", 1, ("Cash", "1", "0"), ("Capital", "0", "1"),
            ))
        ids = [t.journal_id for t in ledger.get_account("Cash").transactions]
        assert ids == ["JE-0", "JE-1", "JE-2"]

    def test_offset_dates_sort_with_naive_ones(self, ledger):
        ledger.post(make_entry(
            "JE-1", 2, ("Cash", "10", "0"), ("Capital", "0", "10"),
        ))
        dhaka = timezone(timedelta(hours=6))
        ledger.post(JournalEntry(
            id="JE-2",
            date=datetime(2026, 3, 2, 4, 0, tzinfo=dhaka),
            lines=[
                JournalLine(account_name="Cash", debit=Decimal("5")),
                JournalLine(account_name="Sales Revenue", credit=Decimal("5")),
            ],
        ))

        cash = ledger.get_account("Cash").transactions
        # 04:00 at +06:00 is 22:00 UTC the day before
        assert [t.journal_id for t in cash] == ["JE-2", "JE-1"]
        assert cash[0].date == datetime(2026, 3, 1, 22, 0)
        assert cash[0].date.tzinfo is None

    def test_unknown_account_lines_are_dropped(self, ledger):
        ledger.post(make_entry(
            "JE-1", 1, ("Cash", "50", "0"), ("Mystery", "0", "50"),
        ))
        assert "Mystery" not in ledger.accounts
        assert len(ledger.get_account("Cash").transactions) == 1

    def test_get_unknown_account_raises(self, ledger):
        with pytest.raises(AccountNotFoundError):
            ledger.get_account("Mystery")


class TestBatchLoad:

    def test_post_all_sorts_regardless_of_order(self, ledger):
        entries = [
            make_entry("JE-3", 25, ("Cash", "3", "0"), ("Capital", "0", "3")),
            make_entry("JE-1", 2, ("Cash", "1", "0"), ("Capital", "0", "1")),
            make_entry("JE-2", 14, ("Cash", "2", "0"), ("Capital", "0", "2")),
        ]
        ledger.post_all(entries)

        dates = [t.date for t in ledger.get_account("Cash").transactions]
        assert dates == sorted(dates)

    def test_rebuild_starts_from_empty_accounts(self, ledger):
        ledger.post(make_entry(
            "JE-1", 1, ("Cash", "50", "0"), ("Capital", "0", "50"),
        ))
        ledger.rebuild(ACCOUNTS, [
            make_entry("JE-2", 2, ("Cash", "70", "0"), ("Capital", "0", "70")),
        ])

        assert ledger.get_account("Cash").balance == Decimal("70")
        assert posted_rows(ledger, "JE-1") == []


class TestReverse:

    def test_post_then_reverse_restores_prior_state(self, ledger):
        ledger.post(make_entry(
            "JE-1", 1, ("Cash", "100", "0"), ("Capital", "0", "100"),
        ))
        ledger.post(make_entry(
            "JE-2", 9, ("Rent Expense", "40", "0"), ("Cash", "0", "40"),
        ))
        before = snapshot(ledger)

        entry = make_entry(
            "JE-3", 5, ("Cash", "25", "0"), ("Sales Revenue", "0", "25"),
        )
        ledger.post(entry)
        ledger.reverse(entry)

        assert snapshot(ledger) == before

    def test_round_trip_over_random_entries(self, ledger):
        rng = random.Random(42)
        names = [name for name, _ in ACCOUNTS]
        for i in range(30):
            amount = Decimal(rng.randint(1, 100000)) / 100
            debit_account, credit_account = rng.sample(names, 2)
            ledger.post(make_entry(
                f"JE-{i}", rng.randint(1, 28),
                (debit_account, amount, "0"), (credit_account, "0", amount),
            ))

        for i in range(30):
            before = snapshot(ledger)
            entry = make_entry(
                f"PROBE-{i}", rng.randint(1, 28),
                ("Cash", "12.34", "0"), ("Capital", "0", "12.34"),
            )
            ledger.post(entry)
            ledger.reverse(entry)
            assert snapshot(ledger) == before

    def test_reverse_by_id(self, ledger):
        ledger.post(make_entry(
            "JE-1", 1, ("Cash", "100", "0"), ("Capital", "0", "100"),
        ))
        ledger.reverse("JE-1")
        assert posted_rows(ledger, "JE-1") == []

    def test_reverse_unknown_id_is_noop(self, ledger):
        ledger.post(make_entry(
            "JE-1", 1, ("Cash", "100", "0"), ("Capital", "0", "100"),
        ))
        before = snapshot(ledger)
        ledger.reverse("JE-404")
        assert snapshot(ledger) == before


class TestEdit:

    def test_edit_replaces_transactions(self, ledger):
        old = make_entry(
            "JE-1", 1, ("Cash", "500", "0"), ("Sales Revenue", "0", "500"),
        )
        new = make_entry(
            "JE-1", 1, ("Cash", "300", "0"), ("Sales Revenue", "0", "300"),
        )
        ledger.post(old)
        ledger.edit(old, new)

        assert ledger.get_account("Cash").balance == Decimal("300")
        assert len(posted_rows(ledger, "JE-1")) == 2

    def test_edit_moves_line_to_another_account(self, ledger):
        old = make_entry(
            "JE-1", 1, ("Cash", "80", "0"), ("Sales Revenue", "0", "80"),
        )
        new = make_entry(
            "JE-1", 1, ("Cash", "80", "0"), ("Capital", "0", "80"),
        )
        ledger.post(old)
        ledger.edit(old, new)

        assert ledger.get_account("Sales Revenue").transactions == []
        assert ledger.get_account("Capital").balance == Decimal("80")

    def test_edit_resorts_by_new_date(self, ledger):
        first = make_entry(
            "JE-1", 10, ("Cash", "1", "0"), ("Capital", "0", "1"),
        )
        second = make_entry(
            "JE-2", 20, ("Cash", "2", "0"), ("Capital", "0", "2"),
        )
        ledger.post(first)
        ledger.post(second)

        moved = make_entry(
            "JE-2", 2, ("Cash", "2", "0"), ("Capital", "0", "2"),
        )
        ledger.edit(second, moved)

        ids = [t.journal_id for t in ledger.get_account("Cash").transactions]
        assert ids == ["JE-2", "JE-1"]


class TestReplayAccount:

    def test_replay_picks_up_existing_lines(self, ledger):
        entries = [
            make_entry("JE-1", 4, ("Tips", "0", "5"), ("Cash", "5", "0")),
            make_entry("JE-2", 2, ("Tips", "0", "7"), ("Cash", "7", "0")),
        ]
        ledger.post_all(entries)
        ledger.add_account("Tips", AccountType.REVENUE)
        ledger.replay_account("Tips", entries)

        tips = ledger.get_account("Tips")
        assert tips.balance == Decimal("12")
        assert [t.journal_id for t in tips.transactions] == ["JE-2", "JE-1"]
