"""
Places Router
Proxies Google Places / Geocoding so the Maps key never reaches the browser
"""

import math
from typing import Any

import httpx
from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from mappr.core import config

router = APIRouter(prefix="/api/places", tags=["Places"])

DETAILS_FIELDS = [
    "name",
    "formatted_address",
    "rating",
    "user_ratings_total",
    "opening_hours",
    "formatted_phone_number",
    "international_phone_number",
    "website",
    "photos",
    "geometry",
    "types",
    "price_level",
    "reviews",
]

ACCESS_DENIED_MSG = "API access denied. Check API key and billing."


class PlacesError(Exception):
    """
    A failure that is reported to the caller as a JSON error body.
    `upstream_status` is echoed as `status` so callers can branch on it.
    """

    def __init__(self, status_code: int, error: str, upstream_status: str | None = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.upstream_status = upstream_status

    def to_response(self) -> JSONResponse:
        body: dict[str, Any] = {"error": self.error}
        if self.upstream_status:
            body["status"] = self.upstream_status
        return JSONResponse(status_code=self.status_code, content=body)


def _require_api_key() -> str:
    api_key = config.get_google_maps_api_key()
    if not api_key:
        raise PlacesError(500, "Google Maps API key not configured")
    return api_key


async def _get_upstream_json(url: str, params: dict[str, Any]) -> dict[str, Any]:
    """Single GET against the Maps API; no retries."""
    async with httpx.AsyncClient(timeout=config.UPSTREAM_TIMEOUT_SECONDS) as client:
        response = await client.get(url, params=params)

    if response.status_code != 200:
        print(f"[places] Upstream HTTP {response.status_code}: {response.text[:200]}")
        response.raise_for_status()

    return response.json()


def _parse_coordinate(lat: str, lng: str) -> tuple[float, float] | None:
    """Decimal degrees within range, else None."""
    try:
        lat_value, lng_value = float(lat), float(lng)
    except ValueError:
        return None
    if not (math.isfinite(lat_value) and math.isfinite(lng_value)):
        return None
    if not (-90 <= lat_value <= 90 and -180 <= lng_value <= 180):
        return None
    return lat_value, lng_value


def _shape_prediction(prediction: dict[str, Any]) -> dict[str, Any]:
    formatting = prediction.get("structured_formatting") or {}
    return {
        "place_id": prediction.get("place_id"),
        "description": prediction.get("description"),
        "structured_formatting": {
            "main_text": formatting.get("main_text"),
            "secondary_text": formatting.get("secondary_text"),
        },
    }


@router.get("/search")
async def search_places(query: str | None = Query(None, description="Free-text place search")):
    """
    Autocomplete a free-text query into place predictions.
    ZERO_RESULTS is a successful empty list.
    """
    if not query:
        return JSONResponse(status_code=400, content={"error": "Query parameter is required"})

    try:
        api_key = _require_api_key()
        data = await _get_upstream_json(
            config.GOOGLE_PLACES_AUTOCOMPLETE_URL,
            {"input": query, "types": "establishment|geocode", "key": api_key},
        )

        status = data.get("status")
        if status == "ZERO_RESULTS":
            return []
        if status != "OK":
            print(f"[places] Autocomplete status={status} message={data.get('error_message')}")
            raise PlacesError(400, f"Google Places API error: {status}", status)

        return [_shape_prediction(p) for p in data.get("predictions") or []]

    except PlacesError as e:
        return e.to_response()
    except Exception as e:
        print(f"[places] Error fetching places: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch places"})


@router.get("/details")
async def place_details(
    place_id: str | None = Query(None, alias="placeId", description="Google Place ID"),
):
    """
    Fetch details for a place.

    INVALID_REQUEST usually means the id came from the Geocoding API rather
    than Places; it is tagged so callers can fall back to coordinates.
    """
    if not place_id:
        return JSONResponse(status_code=400, content={"error": "placeId parameter is required"})

    try:
        api_key = _require_api_key()
        data = await _get_upstream_json(
            config.GOOGLE_PLACES_DETAILS_URL,
            {"place_id": place_id, "fields": ",".join(DETAILS_FIELDS), "key": api_key},
        )

        status = data.get("status")
        if status == "REQUEST_DENIED":
            print(f"[places] Details denied: {data.get('error_message')}")
            raise PlacesError(403, ACCESS_DENIED_MSG)
        if status == "INVALID_REQUEST":
            print(f"[places] Details invalid request: {data.get('error_message')}")
            raise PlacesError(
                400,
                "Invalid place ID. This location may not have detailed place information available.",
                "INVALID_REQUEST",
            )
        if status != "OK":
            print(f"[places] Details status={status} message={data.get('error_message')}")
            raise PlacesError(
                400, data.get("error_message") or f"Google Places API error: {status}", status
            )

        return data.get("result") or {}

    except PlacesError as e:
        return e.to_response()
    except Exception as e:
        print(f"[places] Error fetching place details: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch place details"})


@router.get("/nearby")
async def nearby_places(
    lat: str | None = Query(None, description="Latitude in decimal degrees"),
    lng: str | None = Query(None, description="Longitude in decimal degrees"),
):
    """
    Reverse-geocode a coordinate to its best match, as a 0/1 element list.
    """
    if not (lat or "").strip() or not (lng or "").strip():
        return JSONResponse(
            status_code=400, content={"error": "lat and lng parameters are required"}
        )

    coordinate = _parse_coordinate(lat, lng)
    if coordinate is None:
        return JSONResponse(
            status_code=400, content={"error": "lat and lng must be valid coordinates"}
        )
    lat_value, lng_value = coordinate

    try:
        api_key = _require_api_key()
        data = await _get_upstream_json(
            config.GOOGLE_GEOCODE_URL, {"latlng": f"{lat_value},{lng_value}", "key": api_key}
        )

        status = data.get("status")
        if status == "REQUEST_DENIED":
            print(f"[places] Geocoding denied: {data.get('error_message')}")
            raise PlacesError(403, ACCESS_DENIED_MSG)

        results = data.get("results") or []
        if status != "OK" or not results:
            return []

        best = results[0]
        return [
            {
                "place_id": best.get("place_id"),
                "formatted_address": best.get("formatted_address"),
                "geometry": best.get("geometry"),
                "types": best.get("types"),
                "address_components": best.get("address_components"),
            }
        ]

    except PlacesError as e:
        return e.to_response()
    except Exception as e:
        print(f"[places] Error fetching nearby places: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch nearby places"})
