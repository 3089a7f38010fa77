import pytest

from leadsync.integrations import IntegrationNotConfiguredError, StripeApiError
from leadsync.integrations.stripe import StripeClient

CHARGES_PATH = "/v1/charges"


async def test_list_charges(stripe_client: StripeClient, stripe_api) -> None:
    stripe_api.add("GET", CHARGES_PATH, {"object": "list", "data": [{"id": "ch_1"}, {"id": "ch_2"}]})

    charges = await stripe_client.list_charges(limit=500, customer="cus_42")

    assert [c["id"] for c in charges] == ["ch_1", "ch_2"]
    request = stripe_api.requests[0]
    assert request.headers["Authorization"] == "Bearer sk_test_123"
    assert request.url.params["limit"] == "100"
    assert request.url.params["customer"] == "cus_42"


async def test_list_charges_without_customer(stripe_client: StripeClient, stripe_api) -> None:
    stripe_api.add("GET", CHARGES_PATH, {"data": []})

    assert await stripe_client.list_charges(limit=0) == []
    params = stripe_api.requests[0].url.params
    assert params["limit"] == "1"
    assert "customer" not in params


async def test_error_status_raises(stripe_client: StripeClient, stripe_api) -> None:
    stripe_api.add("GET", CHARGES_PATH, {"error": {"message": "Invalid API Key"}}, status_code=401)

    with pytest.raises(StripeApiError) as excinfo:
        await stripe_client.list_charges()
    assert excinfo.value.status_code == 401
    assert "Invalid API Key" in excinfo.value.details


async def test_unexpected_shape_raises(stripe_client: StripeClient, stripe_api) -> None:
    stripe_api.add("GET", CHARGES_PATH, {"object": "list"})

    with pytest.raises(StripeApiError, match="Unexpected response shape"):
        await stripe_client.list_charges()


async def test_missing_secret_key(stripe_api) -> None:
    client = StripeClient(None, client=stripe_api.client(), base_url="http://mock-stripe")
    try:
        with pytest.raises(IntegrationNotConfiguredError) as excinfo:
            await client.list_charges()
    finally:
        await client.aclose()
    assert excinfo.value.setting == "STRIPE_SECRET_KEY"
    assert str(excinfo.value) == "STRIPE_SECRET_KEY environment variable is not set"
    assert stripe_api.requests == []
