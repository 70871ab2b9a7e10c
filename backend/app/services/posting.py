"""Posting de transacoes: cria, altera e remove lancamentos mantendo o saldo da conta.

Cada operacao e uma unica unidade atomica:
    trava conta(s) -> checa fundos -> grava transacao + vinculos -> ajusta saldo -> auditoria
Qualquer excecao faz rollback de tudo; nada e gravado pela metade.
"""

from contextlib import contextmanager
from decimal import Decimal
import logging

from sqlalchemy import select, delete
from sqlalchemy.orm import Session, selectinload

from app.core.errors import (
    Conflict,
    EntityNotFound,
    ReferenceNotFound,
    category_not_found,
    transaction_not_found,
)
from app.models.audit import AuditOperation
from app.models.category import Category
from app.models.transaction import Transaction, TransactionCategory, TransactionKind
from app.schemas.transaction import TransactionCreate, TransactionUpdate
from app.services import audit
from app.services.ledger import lock_accounts, ensure_funds, adjust_balance

logger = logging.getLogger(__name__)


@contextmanager
def _atomic(db: Session):
    try:
        yield
        db.commit()
    except Exception:
        db.rollback()
        raise


def _ensure_categories(db: Session, category_ids: list[int]) -> None:
    if not category_ids:
        return
    found = set(db.scalars(select(Category.id).where(Category.id.in_(category_ids))))
    if len(found) != len(set(category_ids)):
        missing = sorted(set(category_ids) - found)
        logger.info("categorias inexistentes: %s", missing)
        raise ReferenceNotFound("Uma ou mais categorias fornecidas nao existem")


def _write_links(db: Session, transaction_id: int, category_ids: list[int]) -> None:
    for category_id in category_ids:
        db.add(TransactionCategory(transaction_id=transaction_id, category_id=category_id))


def _delete_links(db: Session, transaction_id: int) -> None:
    db.execute(delete(TransactionCategory).where(TransactionCategory.transaction_id == transaction_id))


def _load_for_update(db: Session, transaction_id: int) -> Transaction:
    tx = db.scalar(
        select(Transaction)
        .where(Transaction.id == transaction_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    if tx is None:
        raise EntityNotFound(transaction_not_found(transaction_id))
    return tx


def _finish(db: Session, tx: Transaction) -> None:
    db.flush()
    db.refresh(tx, attribute_names=["categories"])


# -----------------------------
# Leitura
# -----------------------------

def list_transactions(
    db: Session,
    kind: TransactionKind | None = None,
    account_id: int | None = None,
    category_id: int | None = None,
) -> list[Transaction]:
    q = select(Transaction).options(selectinload(Transaction.categories)).order_by(Transaction.id.asc())
    if kind is not None:
        q = q.where(Transaction.kind == kind)
    if account_id is not None:
        q = q.where(Transaction.account_id == account_id)
    if category_id is not None:
        q = q.where(
            Transaction.id.in_(
                select(TransactionCategory.transaction_id).where(TransactionCategory.category_id == category_id)
            )
        )
    return list(db.scalars(q))


def get_transaction(db: Session, transaction_id: int) -> Transaction:
    tx = db.scalar(
        select(Transaction).options(selectinload(Transaction.categories)).where(Transaction.id == transaction_id)
    )
    if tx is None:
        raise EntityNotFound(transaction_not_found(transaction_id))
    return tx


# -----------------------------
# Escrita
# -----------------------------

def create_transaction(db: Session, payload: TransactionCreate) -> Transaction:
    with _atomic(db):
        account = lock_accounts(db, [payload.account_id])[payload.account_id]

        delta = payload.kind.effect(payload.amount)
        if payload.kind is TransactionKind.SAIDA:
            ensure_funds(account, delta)

        _ensure_categories(db, payload.categories)

        tx = Transaction(
            account_id=account.id,
            user_id=account.user_id,
            kind=payload.kind,
            amount=payload.amount,
            description=payload.description,
            occurred_at=payload.occurred_at,
        )
        db.add(tx)
        db.flush()

        _write_links(db, tx.id, payload.categories)
        adjust_balance(db, account.id, delta)
        audit.record(db, tx, AuditOperation.INSERT)
        _finish(db, tx)

    logger.info("transacao %s criada account_id=%s kind=%s amount=%s", tx.id, tx.account_id, tx.kind.value, tx.amount)
    return tx


def update_transaction(db: Session, transaction_id: int, payload: TransactionUpdate) -> Transaction:
    """Reverte o efeito antigo e aplica o novo.

    A checagem de fundos de uma SAIDA usa o saldo ja com o efeito antigo
    revertido (saldo_atual + efeito_antigo_revertido + efeito_novo >= 0).
    Quando a transacao muda de conta, a conta antiga recebe so a reversao
    e a nova so o efeito novo.
    """
    with _atomic(db):
        tx = _load_for_update(db, transaction_id)

        old_account_id = tx.account_id
        new_account_id = payload.account_id or old_account_id
        accounts = lock_accounts(db, [old_account_id, new_account_id])

        new_kind = payload.kind or tx.kind
        new_amount = payload.amount if payload.amount is not None else Decimal(tx.amount)

        reversal = -tx.balance_effect()
        new_effect = new_kind.effect(new_amount)

        if new_account_id == old_account_id:
            deltas = {old_account_id: reversal + new_effect}
        else:
            deltas = {old_account_id: reversal, new_account_id: new_effect}

        # so SAIDA passa pela checagem: reduzir uma ENTRADA ja gasta pode deixar saldo negativo
        if new_kind is TransactionKind.SAIDA:
            ensure_funds(accounts[new_account_id], deltas[new_account_id])

        if payload.categories is not None:
            _ensure_categories(db, payload.categories)

        tx.account_id = new_account_id
        tx.user_id = accounts[new_account_id].user_id
        tx.kind = new_kind
        tx.amount = new_amount
        if payload.occurred_at is not None:
            tx.occurred_at = payload.occurred_at
        if payload.description is not None:
            tx.description = payload.description
        db.flush()

        if payload.categories is not None:
            _delete_links(db, tx.id)
            _write_links(db, tx.id, payload.categories)

        for account_id, delta in deltas.items():
            adjust_balance(db, account_id, delta)

        audit.record(db, tx, AuditOperation.UPDATE)
        _finish(db, tx)

    logger.info("transacao %s atualizada deltas=%s", tx.id, deltas)
    return tx


def delete_transaction(db: Session, transaction_id: int) -> None:
    with _atomic(db):
        tx = _load_for_update(db, transaction_id)
        lock_accounts(db, [tx.account_id])

        # sem checagem de fundos: remover uma ENTRADA ja gasta deixa saldo negativo
        reversal = -tx.balance_effect()

        _delete_links(db, tx.id)
        db.delete(tx)
        db.flush()

        adjust_balance(db, tx.account_id, reversal)
        audit.record(db, tx, AuditOperation.DELETE)
        db.flush()

    logger.info("transacao %s removida account_id=%s reversal=%s", transaction_id, tx.account_id, reversal)


def link_category(db: Session, transaction_id: int, category_id: int) -> Transaction:
    """Vincula uma categoria a uma transacao existente (sem efeito no saldo)."""
    with _atomic(db):
        tx = db.scalar(
            select(Transaction).where(Transaction.id == transaction_id).with_for_update()
        )
        if tx is None:
            raise ReferenceNotFound(transaction_not_found(transaction_id))
        if db.get(Category, category_id) is None:
            raise ReferenceNotFound(category_not_found(category_id))

        exists = db.get(TransactionCategory, (transaction_id, category_id))
        if exists is not None:
            raise Conflict("Categoria ja vinculada a transacao")

        _write_links(db, tx.id, [category_id])
        audit.record(db, tx, AuditOperation.UPDATE)
        _finish(db, tx)

    return tx
