"""
Geocoding Module
--------------
Handles forward geocoding operations to convert postal addresses into structured camp locations.
Uses OpenStreetMap's Nominatim search API. Only the first candidate returned by the provider is used.
"""
import requests
import logging
from dataclasses import dataclass
from typing import Optional, List

from src.config import NOMINATIM_URL, GEOCODER_USER_AGENT, GEOCODER_TIMEOUT
from src.errors import UpstreamFailure
from src.models.camp import Location

# Get logger
logger = logging.getLogger(__name__)


@dataclass
class GeocodeCandidate:
    longitude: float
    latitude: float
    formatted_address: Optional[str] = None
    street_name: Optional[str] = None
    city: Optional[str] = None
    zipcode: Optional[str] = None
    country_code: Optional[str] = None


class NominatimGeocoder:
    """Geocoding provider backed by the Nominatim /search endpoint."""

    def __init__(self, base_url=NOMINATIM_URL, user_agent=GEOCODER_USER_AGENT, timeout=GEOCODER_TIMEOUT):
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout = timeout

    def geocode(self, address: str) -> List[GeocodeCandidate]:
        params = {
            "q": address,
            "format": "json",
            "addressdetails": 1,
            "limit": 1,
        }

        headers = {
            "User-Agent": self.user_agent
        }

        try:
            response = requests.get(
                self.base_url,
                params=params,
                headers=headers,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise UpstreamFailure(f"network error: {e}") from e

        if response.status_code != 200:
            raise UpstreamFailure(f"HTTP {response.status_code} from geocoding provider")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamFailure("malformed response from geocoding provider") from e

        return [self._to_candidate(item) for item in data]

    @staticmethod
    def _to_candidate(item) -> GeocodeCandidate:
        details = item.get("address", {})
        # Nominatim files a locality under city, town or village depending on its size
        city = details.get("city") or details.get("town") or details.get("village")
        country_code = details.get("country_code")

        return GeocodeCandidate(
            longitude=float(item["lon"]),
            latitude=float(item["lat"]),
            formatted_address=item.get("display_name"),
            street_name=details.get("road"),
            city=city,
            zipcode=details.get("postcode"),
            country_code=country_code.upper() if country_code else None
        )


def resolve_location(address: Optional[str], geocoder) -> Location:
    """
    Resolve a postal address into a camp location.

    An empty address means the camp is remote and gets the sentinel location.
    Otherwise the first candidate from the geocoder wins. A provider error or
    an empty candidate list raises UpstreamFailure and nothing is synthesized.
    """
    if not address:
        return Location.remote()

    try:
        candidates = geocoder.geocode(address)
    except UpstreamFailure:
        logger.error(f"Geocoding provider failed for address '{address}'")
        raise
    except Exception as e:
        logger.error(f"Unexpected error during geocoding of '{address}': {e}")
        raise UpstreamFailure(str(e)) from e

    if not candidates:
        logger.error(f"No geocoding candidates found for address '{address}'")
        raise UpstreamFailure(f"no results for address '{address}'")

    first = candidates[0]
    logger.info(f"Successfully geocoded address '{address}' to ({first.latitude}, {first.longitude})")

    return Location(
        type="Point",
        coordinates=[first.longitude, first.latitude],
        formatted_address=first.formatted_address or address,
        street=first.street_name,
        city=first.city,
        zipcode=first.zipcode,
        country=first.country_code
    )
