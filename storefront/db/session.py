"""Database engine and session factory for the local cache."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from storefront.core.config import settings

connect_args: dict[str, bool] = (
    {"check_same_thread": False} if settings.local_cache_url.startswith("sqlite") else {}
)
engine = create_engine(settings.local_cache_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
