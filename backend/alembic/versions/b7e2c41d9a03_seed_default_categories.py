"""seed default categories

Revision ID: b7e2c41d9a03
Revises: 5a1f0c3e8d21
Create Date: 2026-10-19 09:20:47.502116

"""
from datetime import datetime, timezone
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "b7e2c41d9a03"
down_revision: Union[str, Sequence[str], None] = "5a1f0c3e8d21"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


_CATEGORIES = [
    (1, "Alimentacao"),
    (2, "Moradia"),
    (3, "Transporte"),
    (4, "Saude"),
    (5, "Educacao"),
    (6, "Lazer"),
    (7, "Salario"),
    (8, "Investimentos"),
    (9, "Outros"),
]


def _insert_ignoring_conflicts(table, rows, dialect: str):
    """INSERT que pula linhas ja existentes (id ou nome ja ocupados)."""
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert as pg_insert
        # sem index_elements: qualquer constraint unica (pk ou name) vale
        return pg_insert(table).values(rows).on_conflict_do_nothing()
    if dialect in ("mysql", "mariadb"):
        return sa.insert(table).values(rows).prefix_with("IGNORE")
    # sqlite + default
    return sa.insert(table).values(rows).prefix_with("OR IGNORE")


def upgrade() -> None:
    """Seed default categories with stable IDs (idempotent)."""
    conn = op.get_bind()

    categories = sa.table(
        "categories",
        sa.column("id", sa.Integer),
        sa.column("name", sa.String),
        sa.column("created_at", sa.DateTime),
    )

    now = datetime.now(timezone.utc).replace(tzinfo=None)
    rows = [{"id": cid, "name": name, "created_at": now} for cid, name in _CATEGORIES]
    dialect = conn.dialect.name

    conn.execute(_insert_ignoring_conflicts(categories, rows, dialect))

    if dialect == "postgresql":
        # ids explicitos: realinha a sequence para os proximos inserts
        conn.execute(sa.text("SELECT setval(pg_get_serial_sequence('categories', 'id'), (SELECT MAX(id) FROM categories))"))


def downgrade() -> None:
    """Best-effort rollback: remove seeded categories not linked to transactions."""
    conn = op.get_bind()
    ids = [cid for cid, _ in _CATEGORIES]
    stmt = sa.text(
        "DELETE FROM categories WHERE id IN :ids "
        "AND id NOT IN (SELECT category_id FROM transaction_categories)"
    ).bindparams(sa.bindparam("ids", expanding=True))
    conn.execute(stmt, {"ids": ids})
