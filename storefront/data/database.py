# storefront/data/database.py
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.utils.settings import DATABASE_URL, DB_LOCK_TIMEOUT_MS

Base = declarative_base()

# opcja wykonania dla transakcji, które piszą po odczycie pod "blokadą" (checkout);
# poza SQLite ignorowana, tam robi to FOR UPDATE
BEGIN_IMMEDIATE = "sqlite_begin_immediate"


def _sqlite_begin(engine: Engine) -> None:
    """
    SQLite nie ma blokad na wierszach (FOR UPDATE jest ignorowane).
    Transakcja z opcją BEGIN_IMMEDIATE startuje jako BEGIN IMMEDIATE,
    więc pisarze idą po kolei. Pozostałe dostają zwykły BEGIN i czytają bez blokowania.
    Przepis z dokumentacji SQLAlchemy (pysqlite + własny BEGIN).
    """

    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        # wyłącz własny BEGIN sterownika pysqlite
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _do_begin(conn):
        if conn.get_execution_options().get(BEGIN_IMMEDIATE):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


def build_engine(url: str = DATABASE_URL, lock_timeout_ms: int = DB_LOCK_TIMEOUT_MS) -> Engine:
    connect_args = {}

    if url.startswith("sqlite"):
        # busy timeout sterownika = czas czekania na blokadę (w sekundach)
        connect_args = {"check_same_thread": False, "timeout": lock_timeout_ms / 1000}
    elif url.startswith("postgresql"):
        # blokada FOR UPDATE czeka max lock_timeout, potem błąd 55P03 (transient)
        connect_args = {"options": f"-c lock_timeout={lock_timeout_ms}"}

    engine = create_engine(url, pool_pre_ping=True, connect_args=connect_args)

    if url.startswith("sqlite"):
        _sqlite_begin(engine)

    return engine


engine = build_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(bind: Engine = engine) -> None:
    # modele muszą być zaimportowane zanim create_all zobaczy tabele
    import storefront.data.models  # noqa: F401

    Base.metadata.create_all(bind=bind)


def ping(bind: Engine = engine) -> bool:
    with bind.connect() as conn:
        conn.execute(text("SELECT 1"))
    return True


def get_db():
    """FastAPI dependency - jedna sesja na request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
