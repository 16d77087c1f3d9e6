from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # MySQL connection used by dbquery.core.connect.connect()
    MYSQL_HOST: str = "localhost"
    MYSQL_PORT: int = 3306
    MYSQL_USER: str = "root"
    MYSQL_PASSWORD: str = ""
    MYSQL_DATABASE: str = "test"
    MYSQL_CHARSET: str = "utf8mb4"

    EXTERNAL_DB_CONNECT_TIMEOUT: int = 10  # seconds


settings = Settings()  # type: ignore
