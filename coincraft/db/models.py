"""SQLAlchemy declarative base for all ORM models."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""


class PlayerAccountModel(Base):
    """ORM model for player accounts (SmartCoin balance owner)."""

    __tablename__ = "player_accounts"

    player_id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, default="")
    smart_coin_balance: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    transactions: Mapped[list["CoinTransactionModel"]] = relationship(
        "CoinTransactionModel",
        back_populates="account",
        cascade="all, delete-orphan",
        order_by="CoinTransactionModel.seq",
    )


class CoinTransactionModel(Base):
    """ORM model for ledger transactions (append-only)."""

    __tablename__ = "coin_transactions"
    __table_args__ = (UniqueConstraint("player_id", "seq", name="uq_coin_tx_seq"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[str] = mapped_column(
        String, ForeignKey("player_accounts.player_id", ondelete="CASCADE"), nullable=False
    )
    seq: Mapped[int] = mapped_column(Integer, nullable=False)
    tx_type: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    account: Mapped["PlayerAccountModel"] = relationship(
        "PlayerAccountModel", back_populates="transactions"
    )
