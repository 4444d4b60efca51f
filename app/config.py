from typing import List, Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    postgres_user: str = "postgres"
    postgres_password: str = ""
    postgres_db: str = "storefront"
    postgres_host: str = "localhost"
    postgres_port: str = "5432"

    # full URL wins over the postgres_* parts (sqlite for local runs and tests)
    DATABASE_URL: Optional[str] = None

    secret_key: str = "change-me"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    ENV: str = "local"
    admin_email: Optional[str] = None

    # pricing policy
    flat_shipping_usd: float = 5.0
    order_number_prefix: str = "CD-"
    order_number_width: int = 7

    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    @property
    def database_url(self):
        if self.DATABASE_URL:
            return self.DATABASE_URL

        encoded_password = quote_plus(self.postgres_password)
        return (
            f"postgresql+psycopg2://{self.postgres_user}:"
            f"{encoded_password}@{self.postgres_host}:"
            f"{self.postgres_port}/{self.postgres_db}"
        )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "allow"

settings = Settings()
