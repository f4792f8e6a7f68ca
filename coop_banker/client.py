from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from .errors import FeedError
from .models import Profile, ProfileResponse


log = logging.getLogger(__name__)

HYPIXEL_BASE_URL = "https://api.hypixel.net/v2"


class HypixelClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = HYPIXEL_BASE_URL,
        timeout: int = 40,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def get(self, endpoint: str, params: Dict[str, Any]) -> Any:
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        try:
            response = self.session.get(
                url,
                params=params,
                headers={"API-Key": self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise FeedError(f"Hypixel GET {endpoint} failed: {exc}") from exc
        if response.status_code != 200:
            raise FeedError(
                f"Hypixel GET {endpoint} failed ({response.status_code}): {response.text[:280]}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise FeedError(f"Hypixel GET {endpoint} returned a non-JSON body: {exc}") from exc

    def profile(self, profile_id: str) -> Profile:
        log.info("Fetching fresh information for profile %s", profile_id)
        payload = self.get("skyblock/profile", {"profile": profile_id})
        try:
            parsed = ProfileResponse.model_validate(payload)
        except ValidationError as exc:
            raise FeedError(f"unexpected profile payload: {exc}") from exc
        if not parsed.success or parsed.profile is None:
            raise FeedError(f"Hypixel refused profile {profile_id}: {parsed.cause or 'no profile'}")
        log.info("Got fresh information for profile %s", profile_id)
        return parsed.profile
