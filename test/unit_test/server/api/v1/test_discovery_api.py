import pytest
from httpx import AsyncClient

from leadsync.integrations.places import PlacesClient
from leadsync.server.main import app
from leadsync.server.services import deps

DISCOVERY_URL = "/api/v1/discovery/places"
GEOCODE_PATH = "/maps/api/geocode/json"
SEARCH_PATH = "/v1/places:searchText"

GEOCODE_OK = {"results": [{"geometry": {"location": {"lat": 38.2527, "lng": -85.7585}}}]}

PLACES = {
    "places": [
        {
            "id": "place-hope",
            "displayName": {"text": "Hope Food Pantry"},
            "formattedAddress": "1200 Main St, Louisville, KY 40202, USA",
            "nationalPhoneNumber": "(502) 555-0100",
            "rating": 4.6,
            "userRatingCount": 35,
            "types": ["housing_authority"],
        },
        {
            "id": "place-far",
            "displayName": {"text": "Faraway Club"},
            "formattedAddress": "9 Elm St, Austin, TX 73301, USA",
            "rating": 3.1,
            "userRatingCount": 2,
            "types": ["club"],
        },
    ]
}


@pytest.fixture
def places_api(google_api):
    google_api.add("GET", GEOCODE_PATH, GEOCODE_OK)
    google_api.add("POST", SEARCH_PATH, PLACES)
    return google_api


async def test_discover_saves_leads(client: AsyncClient, places_api):
    response = await client.post(DISCOVERY_URL, json={"min_score": 55})

    assert response.status_code == 200
    result = response.json()
    assert result["success"] is True
    assert (result["total_found"], result["saved"], result["skipped_low_score"]) == (2, 2, 0)
    assert [p["name"] for p in result["prospects"]] == ["Hope Food Pantry", "Faraway Club"]

    leads = (await client.get("/api/v1/leads")).json()
    assert [lead["name"] for lead in leads] == ["Hope Food Pantry", "Faraway Club"]
    assert leads[0]["source"] == "GOOGLE_PLACES"


async def test_rediscovery_skips_existing(client: AsyncClient, places_api):
    await client.post(DISCOVERY_URL, json={})

    response = await client.post(DISCOVERY_URL, json={})

    result = response.json()
    assert result["saved"] == 0
    assert result["skipped_existing"] == 2
    assert {p["status"] for p in result["prospects"]} == {"existing"}


async def test_preview_does_not_save(client: AsyncClient, places_api):
    response = await client.post(DISCOVERY_URL, json={"save": False, "radius": 80000})

    assert response.status_code == 200
    assert response.json()["saved"] == 0
    assert (await client.get("/api/v1/leads")).json() == []
    body = places_api.json_bodies(SEARCH_PATH)[0]
    assert body["locationBias"]["circle"]["radius"] == 50000


async def test_invalid_request(client: AsyncClient):
    response = await client.post(DISCOVERY_URL, json={"min_score": 150})
    assert response.status_code == 422


async def test_geocoding_failure_is_bad_gateway(client: AsyncClient, google_api):
    google_api.add("GET", GEOCODE_PATH, {"results": [], "status": "ZERO_RESULTS"})

    response = await client.post(DISCOVERY_URL, json={"location": "Nowhere"})

    assert response.status_code == 502
    assert response.json()["error_type"] == "GeocodingError"


async def test_missing_api_key_is_unavailable(client: AsyncClient, google_api):
    unconfigured = PlacesClient(
        None,
        client=google_api.client(),
        places_base_url="http://mock-places",
        geocode_base_url="http://mock-geocode",
    )
    app.dependency_overrides[deps.get_places_client] = lambda: unconfigured

    response = await client.post(DISCOVERY_URL, json={})

    assert response.status_code == 503
    assert response.json() == {"detail": "GOOGLE_MAPS_API_KEY environment variable is not set"}
    assert google_api.requests == []
