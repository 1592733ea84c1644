from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL_CHAT: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE_CHAT: float = 0.4

    ASSISTANT_NAME: str = "Plannerly"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    DATA_DIR: str = "./data/threads"
    HISTORY_LIMIT: int = 50


settings = Settings()
