"""
Account model (chart of accounts).

An account is identified by its name alone; there are no
numeric codes. The type is chosen once when the account is
created and never changes.
"""

from sqlalchemy import String, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from bookkeeping.models.base import Base
from bookkeeping.models.enums import AccountType


class Account(Base):
    __tablename__ = "accounts"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    account_type: Mapped[AccountType] = mapped_column(
        "type",
        SAEnum(
            AccountType,
            name="account_type_enum",
            values_callable=lambda enum_cls: [t.value for t in enum_cls],
            create_constraint=True,
        ),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Account {self.name} ({self.account_type.value})>"
