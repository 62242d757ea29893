"""Image upload service configs per entity."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable


ImageConfigFactory = Callable[[], Dict[str, Any]]

IMGUR_UPLOAD_URL = "https://api.imgur.com/3/image"
IMGUR_MASHAPE_UPLOAD_URL = "https://imgur-apiv3.p.mashape.com/3/image"


class ImgurService:
    def __init__(self, client_id: str = "", mashape_key: str = "") -> None:
        self.client_id = client_id
        self.mashape_key = mashape_key

    def get_service_config(self) -> Dict[str, Any]:
        headers = {"Authorization": f"Client-ID {self.client_id}"}
        upload_url = IMGUR_UPLOAD_URL
        if self.mashape_key:
            headers["X-Mashape-Key"] = self.mashape_key
            upload_url = IMGUR_MASHAPE_UPLOAD_URL
        return {"service_name": "imgur", "upload_url": upload_url, "headers": headers}


def distribute_image_configs(
    keys: Iterable[str],
    factory: ImageConfigFactory,
    overrides: Dict[str, Dict[str, Any]] | None = None,
) -> Dict[str, Dict[str, Any]]:
    """Generate a default config per key, then replace per key with overrides."""
    configs = {key: factory() for key in keys}
    configs.update(overrides or {})
    return configs
