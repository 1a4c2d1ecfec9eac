"""Runtime settings.

Built once at process start (see ``create_app``) and handed to the pieces that
talk to the outside world: the payment gateway, the mailer, the order
lifecycle and the checkout bridge. Nothing below the HTTP layer reads the
environment directly.
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WELW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"
    api_prefix: str = "/api/v1"
    # Public origin of this API; checkout success/cancel URLs are built from it
    public_url: str = "http://localhost:8000"
    cors_origins: list[str] = ["http://localhost", "http://127.0.0.1:5500"]

    jwt_secret: SecretStr = SecretStr("dev-secret-change-me-before-deploying-welwexpress")
    jwt_algorithm: str = "HS256"
    jwt_lifetime: timedelta = timedelta(days=30)

    # Prices are kept in Kwanza; the provider settles in euro cents
    settlement_currency: str = "eur"
    exchange_rate: float = Field(default=900.0, gt=0)
    delivery_window_days: int = 3

    stripe_secret_key: SecretStr | None = None
    resend_api_key: SecretStr | None = None
    mail_sender: str = "WelwExpress <no-reply@welwexpress.ao>"

    @property
    def success_url(self) -> str:
        return f"{self.public_url}{self.api_prefix}/success?session_id={{CHECKOUT_SESSION_ID}}"

    @property
    def cancel_url(self) -> str:
        return f"{self.public_url}{self.api_prefix}/cancel"


@lru_cache
def get_settings() -> Settings:
    return Settings()
