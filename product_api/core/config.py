from typing import Any, List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field, field_validator
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    DB_USER: str = Field(default="root", validation_alias=AliasChoices("DB_USER"))
    DB_PASS: str = Field(default="", validation_alias=AliasChoices("DB_PASS"))
    DB_HOST: str = Field(default="localhost", validation_alias=AliasChoices("DB_HOST"))
    DB_PORT: int = Field(default=3306, validation_alias=AliasChoices("DB_PORT"))
    DB_NAME: str = Field(default="wec_product", validation_alias=AliasChoices("DB_NAME"))
    # Asia/Jakarta
    DB_TIMEZONE: str = Field(default="+07:00", validation_alias=AliasChoices("DB_TIMEZONE"))
    DB_CONNECT_TIMEOUT: int = Field(
        default=60, validation_alias=AliasChoices("DB_CONNECT_TIMEOUT")
    )
    DB_POOL_SIZE: int = Field(default=50, ge=1, validation_alias=AliasChoices("DB_POOL_SIZE"))
    DB_POOL_RECYCLE: int = Field(
        default=600, validation_alias=AliasChoices("DB_POOL_RECYCLE")
    )
    DATABASE_URL: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("DATABASE_URL")
    )

    DB_CREATE_SCHEMA: bool = Field(
        default=False, validation_alias=AliasChoices("DB_CREATE_SCHEMA")
    )
    # startup aborts once these pings all fail
    DB_STARTUP_ATTEMPTS: int = Field(
        default=1, ge=1, validation_alias=AliasChoices("DB_STARTUP_ATTEMPTS")
    )

    QUERY_TIMEOUT_SECONDS: float = Field(
        default=5.0, gt=0, validation_alias=AliasChoices("QUERY_TIMEOUT_SECONDS")
    )

    APP_PORT: int = Field(default=8080, validation_alias=AliasChoices("APP_PORT"))
    APP_ENV: str = Field(default="development", validation_alias=AliasChoices("APP_ENV"))

    CORS_ORIGINS: List[str] = Field(
        default=["*"],
        validation_alias=AliasChoices("CORS_ORIGINS"),
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=True,
        validation_alias=AliasChoices("CORS_ALLOW_CREDENTIALS"),
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _coerce_cors(cls, v: Any) -> List[str]:
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("["):  # JSON
                import json

                try:
                    arr = json.loads(s)
                    if isinstance(arr, list):
                        return [str(x) for x in arr]
                except ValueError:
                    pass
            # CSV
            return [p.strip() for p in s.split(",") if p.strip()]
        return v

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.strip().lower() == "production"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        url = URL.create(
            "mysql+aiomysql",
            username=self.DB_USER,
            password=self.DB_PASS or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )
        return url.render_as_string(hide_password=False)


settings = Settings()
