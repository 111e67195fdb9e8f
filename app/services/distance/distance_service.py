"""Drive distance/duration lookups against the Google Distance Matrix API."""
from typing import Optional

import httpx
import redis.asyncio as redis

from app.core.cache import RedisCache
from app.core.config import settings
from app.core.exceptions import RouteUnavailable, UpstreamRateLimited
from app.core.logger import logger
from app.schemas.itineraries.route import DistanceResult

RATE_LIMIT_STATUSES = {"OVER_QUERY_LIMIT", "OVER_DAILY_LIMIT"}


class DistanceService:
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = settings.GOOGLE_DISTANCE_BASE_URL,
        client: Optional[httpx.AsyncClient] = None,
        cache: Optional[RedisCache] = None,
        timeout: float = settings.DISTANCE_TIMEOUT_SECONDS,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.client = client
        self.cache = cache
        self.timeout = timeout

    async def get_route(self, origin: str, destination: str, mode: str = "driving") -> DistanceResult:
        """
        Distance and duration from origin to destination.

        Args:
            origin: address, place name, airport code or ``place_id:...``
            destination: same forms as origin
            mode: Distance Matrix travel mode

        Raises:
            RouteUnavailable: the service answered with a non-OK status or could not be reached
            UpstreamRateLimited: the service refused the request because of quota
        """
        cache_key = None
        if self.cache:
            cache_key = self.cache.build_key("distance", mode, origin, destination)
            cached = await self._cache_get(cache_key)
            if cached:
                logger.info(f"Distance {origin} -> {destination} retrieved from cache")
                return DistanceResult(**cached)

        if not self.api_key:
            raise RouteUnavailable("Google API key not configured", upstream_status="REQUEST_DENIED")

        data = await self._fetch(origin, destination, mode)
        result = self._parse(data)

        if cache_key:
            await self._cache_set(cache_key, result.model_dump())

        logger.info(f"Distance {origin} -> {destination} ({mode}): {result.distance}, {result.duration}")
        return result

    # Redis is best effort here: a broken cache degrades to uncached lookups
    async def _cache_get(self, key: str) -> Optional[dict]:
        try:
            return await self.cache.get(key)
        except redis.RedisError as exc:
            logger.warning(f"Distance cache read failed for {key}: {exc}")
            return None

    async def _cache_set(self, key: str, value: dict) -> None:
        try:
            await self.cache.set(key, value, expire=settings.DISTANCE_CACHE_TTL_SECONDS)
        except redis.RedisError as exc:
            logger.warning(f"Distance cache write failed for {key}: {exc}")

    async def _fetch(self, origin: str, destination: str, mode: str) -> dict:
        params = {
            "origins": origin,
            "destinations": destination,
            "mode": mode,
            "key": self.api_key,
            "language": "en",
            "units": "metric",
        }

        close_client = False
        client = self.client
        if client is None:
            client = httpx.AsyncClient(timeout=self.timeout)
            close_client = True

        try:
            response = await client.get(self.base_url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            code = exc.response.status_code
            logger.error(f"Distance Matrix HTTP {code} for {origin} -> {destination}")
            if code == 429:
                raise UpstreamRateLimited("Distance service rate limit reached", upstream_status="HTTP_429") from exc
            raise RouteUnavailable("Failed to calculate distance and duration", upstream_status=f"HTTP_{code}") from exc
        except httpx.HTTPError as exc:
            logger.error(f"Distance Matrix request failed: {exc}")
            raise RouteUnavailable("Distance service unreachable", upstream_status="UNREACHABLE") from exc
        finally:
            if close_client:
                await client.aclose()

    @staticmethod
    def _parse(data: dict) -> DistanceResult:
        status = data.get("status", "UNKNOWN_ERROR")
        if status in RATE_LIMIT_STATUSES:
            raise UpstreamRateLimited("Distance service rate limit reached", upstream_status=status)
        if status != "OK":
            raise RouteUnavailable(f"Google Distance Matrix API error: {status}", upstream_status=status)

        try:
            element = data["rows"][0]["elements"][0]
        except (KeyError, IndexError, TypeError):
            raise RouteUnavailable("Could not calculate route", upstream_status="UNKNOWN_ERROR") from None

        element_status = element.get("status", "UNKNOWN_ERROR")
        if element_status != "OK":
            raise RouteUnavailable("Could not calculate route", upstream_status=element_status)

        origins = data.get("origin_addresses") or [None]
        destinations = data.get("destination_addresses") or [None]
        return DistanceResult(
            distance=element["distance"]["text"],
            duration=element["duration"]["text"],
            distance_meters=element["distance"]["value"],
            duration_seconds=element["duration"]["value"],
            origin_address=origins[0],
            destination_address=destinations[0],
        )
