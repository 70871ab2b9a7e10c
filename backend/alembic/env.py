from pathlib import Path
from logging.config import fileConfig

from sqlalchemy import engine_from_config
from sqlalchemy import pool

from alembic import context
from app.core.settings import settings
from app.db import Base
from app.models.user import User, ConfigurationProfile  # noqa: F401
from app.models.account import Account  # noqa: F401
from app.models.transaction import Transaction, TransactionCategory  # noqa: F401
from app.models.category import Category  # noqa: F401
from app.models.audit import AuditLog  # noqa: F401

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# --- garante Alembic usando o MESMO DATABASE_URL do app ---
def _normalize_sqlite_url(url: str) -> str:
    if not url.startswith("sqlite"):
        return url
    # sqlite:///./foo.db -> absoluto baseado em backend/
    if url.startswith("sqlite:///./"):
        rel = url[len("sqlite:///./"):]
        base = Path(__file__).resolve().parents[1]  # backend/
        abs_path = (base / rel).resolve()
        return "sqlite:////" + abs_path.as_posix().lstrip("/")
    # sqlite:///abs/path.db -> garante 4 slashes
    if url.startswith("sqlite:///") and not url.startswith("sqlite:////"):
        path = url[len("sqlite:///"):]
        if path.startswith("/"):
            return "sqlite:////" + path.lstrip("/")
    return url

config.set_main_option("sqlalchemy.url", _normalize_sqlite_url(settings.DATABASE_URL))


# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# SQLite nao faz ALTER COLUMN: migrations rodam em modo batch
_render_as_batch = settings.DATABASE_URL.startswith("sqlite")


def run_migrations_offline() -> None:
    """Gera o SQL sem conectar (alembic upgrade --sql)."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=_render_as_batch,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=_render_as_batch,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
