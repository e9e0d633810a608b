from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_upload_bytes: int = 10 * 1024 * 1024
    max_image_width: int = 1024
    max_image_height: int = 1024

    staging_provider: str = "local"
    staging_local_dir: str = "./data/staged"
    staging_timeout_seconds: int = 30
    cloudflare_account_id: str = ""
    cloudflare_api_token: str = ""

    payment_provider: str = "example"
    payment_intent_url: str = "http://localhost:3000/api/create-payment-intent"
    payment_amount: int = 500
    payment_timeout_seconds: int = 30
    stripe_secret_key: str = ""
    stripe_payment_method: str = "pm_card_visa"
    stripe_return_url: str = ""

    processing_url: str = "http://0.0.0.0:5000/outpaint"
    processing_tourist_spot: str = "Eiffel Tower"
    processing_timeout_seconds: int = 300

    default_location: str = "Eiffel Tower (Paris, France)"
    result_filename: str = "result.png"
