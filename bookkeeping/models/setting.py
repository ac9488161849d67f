"""
Key/value application settings (currency symbol and the like).
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from bookkeeping.models.base import Base


class Setting(Base):
    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Setting {self.key}={self.value}>"
