from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://insights:insights@db:5432/insights"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    # Sentiment analysis
    SENTIMENT_MAX_CHARS: int = 2000

    # Journal aggregate window
    JOURNAL_WINDOW_DAYS: int = 30
    JOURNAL_WINDOW_LIMIT: int = 50

    # Event recommendations
    EVENT_CANDIDATE_LIMIT: int = 100
    RECOMMENDATION_COUNT: int = 5
    RECOMMENDATION_FALLBACK_LIMIT: int = 10
    RECOMMEND_APPROVED_ONLY: bool = False

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
