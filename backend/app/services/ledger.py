"""Saldo das contas: lock de linha, checagem de fundos e ajuste atomico."""

from decimal import Decimal
import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.core.errors import ReferenceNotFound, InsufficientFunds, account_not_found
from app.models.account import Account

logger = logging.getLogger(__name__)


def lock_accounts(db: Session, account_ids) -> dict[int, Account]:
    """Carrega e trava (SELECT ... FOR UPDATE) as contas envolvidas.

    Sempre em ordem crescente de id, para que dois postings cruzados
    nao travem um ao outro. Levanta ReferenceNotFound se alguma faltar.
    """
    ids = sorted(set(account_ids))
    rows = db.scalars(
        select(Account)
        .where(Account.id.in_(ids))
        .order_by(Account.id)
        .with_for_update()
        .execution_options(populate_existing=True)
    ).all()
    found = {a.id: a for a in rows}
    for account_id in ids:
        if account_id not in found:
            raise ReferenceNotFound(account_not_found(account_id))
    return found


def has_sufficient_funds(account: Account, delta: Decimal) -> bool:
    return Decimal(account.balance) + delta >= 0


def ensure_funds(account: Account, delta: Decimal) -> None:
    if not has_sufficient_funds(account, delta):
        logger.info(
            "saldo insuficiente account_id=%s balance=%s delta=%s",
            account.id, account.balance, delta,
        )
        raise InsufficientFunds(account.id)


def adjust_balance(db: Session, account_id: int, delta: Decimal) -> None:
    """balance = balance + delta, direto no banco (sem read-modify-write em Python)."""
    if not delta:
        return
    res = db.execute(
        update(Account)
        .where(Account.id == account_id)
        .values(balance=Account.balance + delta)
        .execution_options(synchronize_session="evaluate")
    )
    if res.rowcount != 1:
        raise ReferenceNotFound(account_not_found(account_id))
