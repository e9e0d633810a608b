from typing import Any

import httpx

from outpaint.imaging.models import NormalizedImage
from outpaint.logging.logger import Log
from outpaint.staging.base import BaseImageStager
from outpaint.staging.exceptions import UploadError
from outpaint.staging.models import StagedImageReference


class CloudflareImagesAdapter(BaseImageStager):
    """Uploads to Cloudflare Images and returns the first delivery variant URL."""

    API_BASE_URL = "https://api.cloudflare.com/client/v4"

    def __init__(
        self,
        *,
        account_id: str,
        api_token: str,
        timeout_seconds: int = 30,
        client: httpx.Client | None = None,
    ) -> None:
        if not account_id or not api_token:
            raise ValueError(
                "cloudflare_account_id and cloudflare_api_token are required for "
                "staging_provider=cloudflare"
            )
        self._upload_url = f"{self.API_BASE_URL}/accounts/{account_id}/images/v1"
        self._api_token = api_token
        self._client = client or httpx.Client(timeout=timeout_seconds)

    def stage(self, image: NormalizedImage) -> StagedImageReference:
        try:
            response = self._client.post(
                self._upload_url,
                headers={"Authorization": f"Bearer {self._api_token}"},
                files={"file": (image.filename, image.png_bytes, image.mime_type)},
            )
        except httpx.HTTPError as exc:
            raise UploadError() from exc

        if not response.is_success:
            Log.warning(
                f"Cloudflare upload rejected: {response.status_code} {response.reason_phrase}"
            )
            raise UploadError()
        return StagedImageReference(url=self._variant_url(response))

    @staticmethod
    def _variant_url(response: httpx.Response) -> str:
        try:
            payload: dict[str, Any] = response.json()
        except ValueError as exc:
            raise UploadError() from exc
        if not payload.get("success"):
            Log.warning(f"Cloudflare upload failed: {payload.get('errors')}")
            raise UploadError()
        variants = (payload.get("result") or {}).get("variants") or []
        if not variants or not isinstance(variants[0], str):
            raise UploadError()
        return variants[0]
