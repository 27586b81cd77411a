import pytest
from myblog.core.config import Settings, SQLITE_DEV_DB, SQLITE_PROD_DB, SQLITE_TEST_DB

@pytest.fixture
def env(monkeypatch):
    for name in (
        "APP_ENV", "DATABASE_URL", "MYSQL_USER", "MYSQL_PASS", "MYSQL_ADDR", "MYSQL_DB",
        "SERVER_ADDRESS", "READ_TIMEOUT", "WRITE_TIMEOUT", "BLOG_CATEGORIES", "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch

class TestSettings:
    def test_defaults(self, env):
        settings = Settings()
        assert settings.sqlalchemy_url == SQLITE_DEV_DB
        assert settings.host == "127.0.0.1"
        assert settings.port == 8000
        assert settings.read_timeout == 15
        assert settings.write_timeout == 15
        assert settings.categories == []

    @pytest.mark.parametrize("app_env,url", [
        ("development", SQLITE_DEV_DB),
        ("test", SQLITE_TEST_DB),
        ("production", SQLITE_PROD_DB),
    ])
    def test_sqlite_per_environment(self, env, app_env, url):
        env.setenv("APP_ENV", app_env)
        assert Settings().sqlalchemy_url == url

    def test_mysql_from_parts(self, env):
        """测试通过 MYSQL_* 环境变量构建连接串"""
        env.setenv("MYSQL_USER", "blog")
        env.setenv("MYSQL_PASS", "secret")
        env.setenv("MYSQL_ADDR", "db:3306")
        env.setenv("MYSQL_DB", "myblog")
        assert Settings().sqlalchemy_url == "mysql+pymysql://blog:secret@db:3306/myblog?charset=utf8mb4"

    def test_database_url_wins(self, env):
        env.setenv("MYSQL_ADDR", "db:3306")
        env.setenv("MYSQL_DB", "myblog")
        env.setenv("DATABASE_URL", "postgresql://blog@localhost/blog")
        assert Settings().sqlalchemy_url == "postgresql://blog@localhost/blog"

    def test_server_and_timeouts(self, env):
        env.setenv("SERVER_ADDRESS", "0.0.0.0:9090")
        env.setenv("READ_TIMEOUT", "5")
        env.setenv("WRITE_TIMEOUT", "30")
        settings = Settings()
        assert (settings.host, settings.port) == ("0.0.0.0", 9090)
        assert settings.read_timeout == 5
        assert settings.write_timeout == 30

    def test_address_without_host(self, env):
        env.setenv("SERVER_ADDRESS", ":8080")
        settings = Settings()
        assert (settings.host, settings.port) == ("127.0.0.1", 8080)

    def test_categories_list(self, env):
        env.setenv("BLOG_CATEGORIES", "Tech, Travel,,Music ")
        assert Settings().categories == ["Tech", "Travel", "Music"]

    def test_invalid_timeout(self, env):
        env.setenv("READ_TIMEOUT", "0")
        with pytest.raises(ValueError):
            Settings()

    def test_keyword_overrides(self, env):
        settings = Settings(write_timeout=1, categories=["Tech"])
        assert settings.write_timeout == 1
        assert settings.categories == ["Tech"]
