from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from shared.core.config import DATABASE_URL

Base = declarative_base()

POOL_SIZE = 5
MAX_OVERFLOW = 5


def build_engine(database_url: str):
    if database_url.startswith("sqlite"):
        # In-memory SQLite must share one connection across threads
        in_memory = database_url in ("sqlite://", "sqlite:///:memory:") \
            or ":memory:" in database_url
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool if in_memory else None,
        )

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=POOL_SIZE,          # max idle connections
        max_overflow=MAX_OVERFLOW,    # max temporary extra connections
        pool_timeout=30               # wait time before failing
    )


engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    # Register every model on Base.metadata before creating tables
    from shared.models import users  # noqa: F401
    from stock_service.app.models import inventory_items, suppliers, alerts  # noqa: F401

    Base.metadata.create_all(bind=engine)


# Dependency


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
