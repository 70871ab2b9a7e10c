import enum
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, ForeignKey, DateTime, Numeric, Enum, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db import Base
from app.models.base import utcnow


class TransactionKind(str, enum.Enum):
    ENTRADA = "ENTRADA"  # credito, soma no saldo
    SAIDA = "SAIDA"      # debito, subtrai do saldo

    def effect(self, amount: Decimal) -> Decimal:
        """Efeito assinado do lancamento no saldo da conta."""
        return amount if self is TransactionKind.ENTRADA else -amount


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), index=True)
    # dono da conta no momento do lancamento
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    kind: Mapped[TransactionKind] = mapped_column(
        Enum(TransactionKind, name="transaction_kind", native_enum=False, create_constraint=True, length=7),
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    description: Mapped[str] = mapped_column(String(200))

    # data/hora do lançamento informada pelo cliente
    occurred_at: Mapped[datetime] = mapped_column(DateTime, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    account = relationship("Account", back_populates="transactions")
    categories = relationship(
        "Category",
        secondary="transaction_categories",
        order_by="Category.id",
        viewonly=True,
    )

    def balance_effect(self) -> Decimal:
        return self.kind.effect(self.amount)


class TransactionCategory(Base):
    __tablename__ = "transaction_categories"

    transaction_id: Mapped[int] = mapped_column(ForeignKey("transactions.id", ondelete="CASCADE"), primary_key=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), primary_key=True, index=True)
