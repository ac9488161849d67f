"""
Bookkeeping errors.

Every failure the engine can report is a ValueError subclass.
Services raise them; the API layer turns them into HTTP status
codes. None of them is fatal: the caller corrects the input
and tries again.
"""


class BookkeepingError(ValueError):
    """Base class for all recoverable bookkeeping errors."""


class UnbalancedEntryError(BookkeepingError):
    """Total debits and total credits differ by 0.01 or more."""

    def __init__(self, entry_id: str | None = None):
        self.entry_id = entry_id
        super().__init__("Entry is not balanced: debits must equal credits")


class PostingCancelledError(BookkeepingError):
    """New accounts were not categorized, so nothing was posted."""

    def __init__(self, account_names: list[str]):
        self.account_names = list(account_names)
        super().__init__(
            "Posting cancelled. New accounts were not categorized: "
            + ", ".join(self.account_names)
        )


class EntryNotFoundError(BookkeepingError):

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Journal entry '{entry_id}' not found")


class AccountNotFoundError(BookkeepingError):

    def __init__(self, account_name: str):
        self.account_name = account_name
        super().__init__(f"Account '{account_name}' not found")


class DuplicateEntryError(BookkeepingError):

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Journal entry '{entry_id}' already exists")
