"""Location name to provider ID resolution."""

from __future__ import annotations

import logging
from typing import Final

from .errors import LocationLookupError, LocationNotFoundError, WeatherAPIError
from .fetcher import RetryingFetcher
from .models import LocationLookupResponse

logger: Final = logging.getLogger(__name__)

LOOKUP_PATH: Final = "/geo/v2/city/lookup"

# Frequently used cities; exact names only
CITY_IDS: Final[dict[str, str]] = {
    "北京": "101010100",
    "上海": "101020100",
    "广州": "101280101",
    "深圳": "101280601",
    "杭州": "101210101",
    "南京": "101190101",
    "武汉": "101200101",
    "成都": "101270101",
    "重庆": "101040100",
    "西安": "101110101",
    "天津": "101030100",
    "苏州": "101190401",
    "长沙": "101250101",
    "郑州": "101180101",
    "济南": "101120101",
    "长春": "101060101",
    "哈尔滨": "101050101",
    "沈阳": "101070101",
    "大连": "101070201",
    "青岛": "101120201",
    "昆明": "101290101",
    "南宁": "101300101",
    "贵阳": "101260101",
    "太原": "101100101",
    "合肥": "101220101",
    "南昌": "101240101",
    "福州": "101230101",
    "厦门": "101230201",
    "石家庄": "101090101",
    "呼和浩特": "101080101",
    "银川": "101170101",
    "西宁": "101150101",
    "拉萨": "101140101",
    "乌鲁木齐": "101130101",
    "兰州": "101160101",
    "海口": "101310101",
    "三亚": "101310201",
    "台北": "101340101",
    "香港": "101320101",
    "澳门": "101330101",
}


class LocationResolver:
    """Resolve a place name to the provider's location ID.

    The static ``CITY_IDS`` table is consulted first; a miss falls back to
    the provider's city lookup, whose first candidate wins. Remote answers
    are not cached.
    """

    def __init__(
        self,
        fetcher: RetryingFetcher,
        api_host: str,
        api_key: str,
        table: dict[str, str] | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.api_host = api_host
        self.api_key = api_key
        self.table = CITY_IDS if table is None else table

    def resolve(self, name: str) -> str:
        """Return the location ID for ``name``.

        Raises:
            LocationNotFoundError: The provider knows no such location
            LocationLookupError: The remote lookup failed for any other reason
        """
        location_id = self.table.get(name)
        if location_id is not None:
            logger.info("Found location ID in static table: %s -> %s", name, location_id)
            return location_id

        logger.info("Location %s not in static table, querying provider", name)
        return self._lookup(name)

    def _lookup(self, name: str) -> str:
        url = f"https://{self.api_host}{LOOKUP_PATH}"
        try:
            resp = self.fetcher.fetch(
                url,
                LocationLookupResponse,
                params={"location": name, "key": self.api_key},
            )
        except WeatherAPIError as exc:
            raise LocationLookupError(name, exc.message, exc, exc.code) from exc

        if not resp.location:
            raise LocationNotFoundError(name)

        candidate = resp.location[0]
        logger.info(
            "Provider resolved %s -> %s (%s, %s)",
            name,
            candidate.id,
            candidate.adm1 or "?",
            candidate.country or "?",
        )
        return candidate.id
