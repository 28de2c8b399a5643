import asyncio
import json
from datetime import timedelta

import httpx
import pytest

from epic_free_games import config
from epic_free_games.errors import Err, Ok, ParseError, TransportError
from epic_free_games.main import scrape
from tests.feed_factory import NOW, document, element, offer

YESTERDAY = NOW - timedelta(days=1)
TOMORROW = NOW + timedelta(days=1)


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _json_handler(payload, requests=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return httpx.Response(200, json=payload)
    return handler


@pytest.mark.anyio
async def test_scrape_returns_the_active_free_game() -> None:
    requests = []
    payload = document(
        element(title="Free Now", offers=[offer(start=YESTERDAY, end=TOMORROW)]),
        element(title="Paid", discount_price=1999, offers=[offer(start=YESTERDAY, end=TOMORROW)]),
        element(title="Coming Soon", offers=[offer(start=TOMORROW, end=TOMORROW + timedelta(days=7))]),
        element(title="Half Off", offers=[offer(discount=50, start=YESTERDAY, end=TOMORROW)]),
    )

    async with _client(_json_handler(payload, requests)) as client:
        result = await scrape(client=client, now=NOW)

    assert isinstance(result, Ok)
    [game] = result.value
    assert game.title == "Free Now"
    assert game.start_date == YESTERDAY
    assert game.end_date == TOMORROW
    assert game.store_url == "https://www.epicgames.com/store/en-US/p/free-game"
    assert game.image_url == "https://cdn.example.com/wide.jpg"

    [request] = requests
    assert request.method == "GET"
    assert str(request.url) == config.FEED_URL


@pytest.mark.anyio
async def test_scrape_leaves_injected_client_open() -> None:
    async with _client(_json_handler(document())) as client:
        await scrape(client=client, now=NOW)
        assert not client.is_closed


@pytest.mark.anyio
async def test_document_without_elements_is_an_empty_success() -> None:
    async with _client(_json_handler({"data": {"catalog": {}}})) as client:
        result = await scrape(client=client, now=NOW)

    assert result == Ok([])


@pytest.mark.anyio
async def test_non_json_body_is_a_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    async with _client(handler) as client:
        result = await scrape(client=client, now=NOW)

    assert isinstance(result, Err)
    assert isinstance(result.error, ParseError)


@pytest.mark.anyio
async def test_http_error_status_is_a_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    async with _client(handler) as client:
        result = await scrape(client=client, now=NOW)

    assert isinstance(result, Err)
    assert isinstance(result.error, TransportError)
    assert isinstance(result.error.cause, httpx.HTTPStatusError)
    assert result.error.cause.response.status_code == 503


@pytest.mark.anyio
async def test_network_error_is_a_transport_error_without_retry() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        result = await scrape(client=client, now=NOW)

    assert isinstance(result, Err)
    assert isinstance(result.error, TransportError)
    assert isinstance(result.error.cause, httpx.ConnectError)
    assert len(calls) == 1


@pytest.mark.anyio
async def test_cancellation_propagates_instead_of_failing() -> None:
    started = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.Event().wait()
        return httpx.Response(200, json=document())

    async with _client(handler) as client:
        task = asyncio.create_task(scrape(client=client, now=NOW))
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task


@pytest.mark.anyio
async def test_concurrent_scrapes_are_independent() -> None:
    free = document(element(title="Free", offers=[offer(start=YESTERDAY)]))
    empty = document()

    async with _client(_json_handler(free)) as free_client, _client(_json_handler(empty)) as empty_client:
        free_result, empty_result = await asyncio.gather(
            scrape(client=free_client, now=NOW),
            scrape(client=empty_client, now=NOW),
        )

    assert [game.title for game in free_result.value] == ["Free"]
    assert empty_result.value == []


@pytest.mark.anyio
async def test_real_feed_shape_is_understood() -> None:
    payload = {
        "data": {"Catalog": None, "catalog": {"searchStore": {
            "elements": [{
                "title": "Mystery Game",
                "id": "abc",
                "productSlug": None,
                "offerMappings": [],
                "catalogNs": {"mappings": [{"pageSlug": "mystery-game", "pageType": "productHome"}]},
                "keyImages": [{"type": "OfferImageWide", "url": "https://cdn.example.com/offer.jpg"}],
                "price": {"totalPrice": {"discountPrice": 0, "originalPrice": 2999, "currencyCode": "USD"}},
                "promotions": {"promotionalOffers": [], "upcomingPromotionalOffers": []},
            }, {
                "title": "Giveaway",
                "productSlug": "giveaway",
                "keyImages": [],
                "price": {"totalPrice": {"discountPrice": 0}},
                "promotions": {"promotionalOffers": [{"promotionalOffers": [{
                    "startDate": "2026-10-16T15:00:00.000Z",
                    "endDate": "2026-10-23T15:00:00.000Z",
                    "discountSetting": {"discountType": "PERCENTAGE", "discountPercentage": 0},
                }]}], "upcomingPromotionalOffers": []},
            }],
            "paging": {"count": 1000, "total": 2},
        }}},
        "extensions": {},
    }

    async with _client(_json_handler(payload)) as client:
        result = await scrape(client=client, now=NOW)

    assert [game.to_dict() for game in result.value] == [{
        "title": "Giveaway",
        "imageUrl": "",
        "storeUrl": "https://www.epicgames.com/store/en-US/p/giveaway",
        "startDate": "2026-10-16T15:00:00+00:00",
        "endDate": "2026-10-23T15:00:00+00:00",
    }]
    assert json.dumps(result.value[0].to_dict())


@pytest.mark.anyio
async def test_naive_now_is_read_as_utc() -> None:
    payload = document(element(title="Free Now", offers=[offer(start=YESTERDAY, end=TOMORROW)]))

    async with _client(_json_handler(payload)) as client:
        result = await scrape(client=client, now=NOW.replace(tzinfo=None))

    assert isinstance(result, Ok)
    assert [game.title for game in result.value] == ["Free Now"]


@pytest.mark.anyio
async def test_free_game_survives_a_null_title_neighbour() -> None:
    untitled = element(title="ignored", offers=[offer(start=YESTERDAY, end=TOMORROW)])
    untitled["title"] = None
    payload = document(element(title="Free Now", offers=[offer(start=YESTERDAY, end=TOMORROW)]), untitled)

    async with _client(_json_handler(payload)) as client:
        result = await scrape(client=client, now=NOW)

    assert isinstance(result, Ok)
    assert [game.title for game in result.value] == ["Free Now", ""]


@pytest.mark.anyio
async def test_injected_client_keeps_its_own_headers() -> None:
    requests = []

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(_json_handler(document(), requests)),
        headers={"User-Agent": "custom-agent/1.0"},
    ) as client:
        await scrape(client=client, now=NOW, timeout=1.0)

    assert requests[0].headers["User-Agent"] == "custom-agent/1.0"
