import pytest

from leadsync.integrations.places import PlaceDetails, filter_places, parse_us_address


def _place(place_id: str, **kwargs) -> PlaceDetails:
    return PlaceDetails(place_id=place_id, name=place_id, **kwargs)


@pytest.fixture
def places():
    return [
        _place("a", website="https://a.example", rating=4.8, total_ratings=120),
        _place("b", rating=3.9, total_ratings=4),
        _place("c", website="https://c.example"),
        _place("d", rating=4.5, total_ratings=40),
    ]


def test_no_website_places_come_first(places) -> None:
    result = filter_places(places)
    assert [p.place_id for p in result] == ["b", "d", "a", "c"]


def test_keeps_order_when_not_prioritizing(places) -> None:
    result = filter_places(places, prioritize_no_website=False)
    assert [p.place_id for p in result] == ["a", "b", "c", "d"]


def test_has_website_filters(places) -> None:
    assert [p.place_id for p in filter_places(places, has_website=True)] == ["a", "c"]
    assert [p.place_id for p in filter_places(places, has_website=False)] == ["b", "d"]


def test_rating_and_review_minimums(places) -> None:
    assert [p.place_id for p in filter_places(places, min_rating=4.0)] == ["d", "a"]
    assert [p.place_id for p in filter_places(places, min_reviews=10)] == ["d", "a"]


def test_zero_minimums_are_ignored(places) -> None:
    assert len(filter_places(places, min_rating=0, min_reviews=0)) == 4


@pytest.mark.parametrize(
    "address, expected",
    [
        ("123 Main St, Louisville, KY 40202, USA", ("Louisville", "KY", "40202")),
        ("Louisville, KY 40202, USA", ("Louisville", "KY", "40202")),
        ("KY, USA", ("", "KY", "")),
        ("", ("", "", "")),
    ],
)
def test_parse_us_address(address, expected) -> None:
    assert parse_us_address(address) == expected
