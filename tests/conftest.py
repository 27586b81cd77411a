import pytest
import os

# 设置测试环境
os.environ["APP_ENV"] = "test"

from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.orm import sessionmaker
from myblog.core.config import SQLITE_TEST_DB
from myblog.main import app
from myblog.db.database import Base, build_engine, get_session
from myblog.models import category, post, post_tag, tag  # noqa: F401
from myblog.services.categories import CategoryRegistry

# 测试数据库配置
test_engine = build_engine(SQLITE_TEST_DB)
TestSessionLocal = sessionmaker(bind=test_engine, autoflush=False)

def drop_tables():
    with test_engine.connect() as conn:
        # 先删除所有表（按依赖关系顺序）
        conn.execute(text("DROP TABLE IF EXISTS post_tags"))
        conn.execute(text("DROP TABLE IF EXISTS posts"))
        conn.execute(text("DROP TABLE IF EXISTS tags"))
        conn.execute(text("DROP TABLE IF EXISTS categories"))
        conn.commit()

@pytest.fixture(autouse=True)
def clean_db():
    """清理并重建测试数据库"""
    drop_tables()
    # 创建所有表
    Base.metadata.create_all(bind=test_engine)
    yield
    # 测试结束后清理
    drop_tables()

@pytest.fixture
def session(clean_db):
    """A session on the test database"""
    test_session = TestSessionLocal()
    yield test_session
    test_session.close()

@pytest.fixture
def categories(session):
    """Categories that exist before any post is written"""
    return CategoryRegistry(session).ensure(["Tech", "Category", "Travel"])

@pytest.fixture
def client(session, categories):
    """创建测试客户端"""
    # 覆盖依赖
    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session

    # 返回测试客户端
    client = TestClient(app)
    yield client

    # 测试结束后清理
    app.dependency_overrides.clear()
