from functools import lru_cache
from typing import Annotated, List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# 数据库配置
SQLITE_DEV_DB = "sqlite:///./dev.db"
SQLITE_TEST_DB = "sqlite:///./test.db"
SQLITE_PROD_DB = "sqlite:///./prod.db"

class Settings(BaseSettings):
    """Runtime settings, read from environment variables of the same name"""
    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    app_env: str = "development"
    database_url: Optional[str] = None
    mysql_user: str = ""
    mysql_pass: str = ""
    mysql_addr: str = ""
    mysql_db: str = ""
    server_address: str = "127.0.0.1:8000"
    read_timeout: int = Field(default=15, gt=0)
    write_timeout: int = Field(default=15, gt=0)
    # BLOG_CATEGORIES is a comma separated list, not JSON
    categories: Annotated[List[str], NoDecode] = Field(default_factory=list, validation_alias="BLOG_CATEGORIES")
    log_level: str = "INFO"

    @field_validator("categories", mode="before")
    @classmethod
    def split_categories(cls, value):
        if isinstance(value, str):
            return [name.strip() for name in value.split(",") if name.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def sqlalchemy_url(self) -> str:
        """Pick the database URL

        An explicit DATABASE_URL wins, then a MySQL DSN built from the
        MYSQL_* variables, then the SQLite file for the current APP_ENV.
        """
        if self.database_url:
            return self.database_url
        if self.mysql_addr and self.mysql_db:
            return (
                f"mysql+pymysql://{self.mysql_user}:{self.mysql_pass}"
                f"@{self.mysql_addr}/{self.mysql_db}?charset=utf8mb4"
            )
        if self.app_env == "test":
            return SQLITE_TEST_DB
        if self.app_env == "production":
            return SQLITE_PROD_DB
        return SQLITE_DEV_DB

    @property
    def host(self) -> str:
        host, _, _ = self.server_address.rpartition(":")
        return host or "127.0.0.1"

    @property
    def port(self) -> int:
        _, _, port = self.server_address.rpartition(":")
        return int(port)

@lru_cache()
def get_settings() -> Settings:
    """获取配置"""
    return Settings()
