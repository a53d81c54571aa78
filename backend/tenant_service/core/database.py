import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from tenant_service.core.config import settings
from tenant_service.models import Tenant  # noqa: F401  registers every mapped table
from tenant_service.models.tenant import Base


logger = logging.getLogger(__name__)


def build_engine(database_url: str):
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    # Create tables in dev/test without running Alembic
    if settings.env in {"dev", "test"}:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database schema ensured for env=%s", settings.env)
