"""
Settings service — persisted user preferences.

The currency symbol lives here instead of in a global so it
can be handed explicitly to whatever formats amounts.
"""

from sqlalchemy.orm import Session

from bookkeeping.config import get_settings
from bookkeeping.models.setting import Setting

CURRENCY_KEY = "currency"


class SettingsStore:

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str, default: str | None = None) -> str | None:
        setting = self.db.get(Setting, key)
        if setting is None:
            return default
        return setting.value

    def set(self, key: str, value: str) -> None:
        setting = self.db.get(Setting, key)
        if setting is None:
            self.db.add(Setting(key=key, value=value))
        else:
            setting.value = value
        self.db.flush()

    def get_currency(self) -> str:
        return self.get(CURRENCY_KEY, get_settings().DEFAULT_CURRENCY)

    def set_currency(self, symbol: str) -> None:
        self.set(CURRENCY_KEY, symbol)
