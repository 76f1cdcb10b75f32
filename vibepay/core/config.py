from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_ENV: str = "prod"
    APP_NAME: str = "Vibe Hackathon Payment API"
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]

    FLW_SECRET_KEY: str = ""
    FLW_PAYMENTS_URL: str = "https://api.flutterwave.com/v3/payments"
    FLW_CURRENCY: str = "KES"
    FLW_REDIRECT_URL: str = "https://your-site.com/callback"
    FLW_PAYMENT_OPTIONS: str = "card,mpesa,ussd"
    FLW_TIMEOUT_SECONDS: int = 30

    # .env is optional; process environment wins
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra='ignore'
    )

settings = Settings()
