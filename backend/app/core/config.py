from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./encargos.db"

    # CORS origins, as a JSON list in the environment
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # Payment follow-up checkpoints, in days after the order date
    FIRST_DUE_DAYS: int = 15
    SECOND_DUE_DAYS: int = 30

    # Due dates are calendar dates; they start at local midnight in this zone
    TIMEZONE: str = "UTC"

    DEFAULT_LANGUAGE: str = "es"
    LOG_LEVEL: str = "INFO"


settings = Settings()
