from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from typing import Optional
from functools import lru_cache
from myblog.core.config import get_settings

Base = declarative_base()

def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite only honours ON DELETE rules with this pragma on"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

def build_engine(url: str) -> Engine:
    """创建数据库引擎"""
    if url.startswith("sqlite"):
        engine = create_engine(url, connect_args={"check_same_thread": False})
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(url, pool_pre_ping=True)

@lru_cache()
def get_engine() -> Engine:
    """获取数据库引擎"""
    return build_engine(get_settings().sqlalchemy_url)

def get_session_maker():
    """获取会话工厂"""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())

def get_session():
    """获取数据库会话"""
    SessionLocal = get_session_maker()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

def create_tables(db_engine: Optional[Engine] = None):
    """创建所有表

    Args:
        db_engine: 可选的数据库引擎，如果不提供则使用默认引擎
    """
    # make sure every model is registered on Base.metadata
    from myblog.models import category, post, post_tag, tag  # noqa: F401

    engine = db_engine or get_engine()
    Base.metadata.create_all(bind=engine)
