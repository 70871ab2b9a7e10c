from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices, model_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Financas API"
    ENV: str = Field(default="lab", validation_alias=AliasChoices("FINANCAS_ENV","ENV"))  # lab|prod
    DATABASE_URL: str = Field(default="sqlite:///./lab.db", validation_alias=AliasChoices("FINANCAS_DATABASE_URL","DATABASE_URL"))
    DB_ECHO: bool = Field(default=False, validation_alias=AliasChoices("FINANCAS_DB_ECHO","DB_ECHO"))
    # tempo que um writer SQLite espera pelo lock antes de desistir
    DB_BUSY_TIMEOUT_S: int = Field(default=15, validation_alias=AliasChoices("FINANCAS_DB_BUSY_TIMEOUT_S","DB_BUSY_TIMEOUT_S"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("FINANCAS_LOG_LEVEL","LOG_LEVEL"))

    @model_validator(mode="after")
    def _invariants(self):
        # Fail-fast (contrato de settings)
        self.ENV = (self.ENV or "lab").strip().lower()
        if self.ENV not in ("lab", "prod"):
            raise ValueError(f"ENV invalido: {self.ENV!r} (use lab|prod)")

        if self.ENV == "prod" and self.DATABASE_URL.startswith("sqlite"):
            raise ValueError("ENV=prod requer banco com lock de linha (DATABASE_URL sqlite nao suportado)")

        if self.DB_BUSY_TIMEOUT_S < 1:
            raise ValueError("DB_BUSY_TIMEOUT_S deve ser >= 1")

        self.LOG_LEVEL = (self.LOG_LEVEL or "INFO").strip().upper()
        return self

settings = Settings()
