from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session
from app.core.settings import settings

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    connect_args={"check_same_thread": False, "timeout": settings.DB_BUSY_TIMEOUT_S} if _is_sqlite else {},
)

if _is_sqlite:
    # SQLite nao tem SELECT ... FOR UPDATE: cada transacao abre com BEGIN IMMEDIATE,
    # o que serializa os writers no proprio banco (saldo da conta nunca le valor velho).
    @event.listens_for(engine, "connect")
    def _sqlite_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cur = dbapi_connection.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()

    @event.listens_for(engine, "begin")
    def _sqlite_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)

class Base(DeclarativeBase):
    pass


# dependency padrão FastAPI
def get_db() -> "Session":
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
