from pathlib import Path

from outpaint.config.settings import Settings
from outpaint.staging.base import BaseImageStager
from outpaint.staging.cloudflare_adapter import CloudflareImagesAdapter
from outpaint.staging.local_adapter import LocalStagerAdapter


class StagerFactory:
    """Creates the configured upload staging adapter."""

    PROVIDERS = ("local", "cloudflare")

    @classmethod
    def create(cls, settings: Settings) -> BaseImageStager:
        provider = settings.staging_provider.lower()
        if provider == "local":
            return LocalStagerAdapter(root=Path(settings.staging_local_dir))
        if provider == "cloudflare":
            return CloudflareImagesAdapter(
                account_id=settings.cloudflare_account_id,
                api_token=settings.cloudflare_api_token,
                timeout_seconds=settings.staging_timeout_seconds,
            )
        raise ValueError(
            f"Unknown staging provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
