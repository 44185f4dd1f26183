import pytest

from local_careers.geo import distance_in_miles, filter_by_radius, group_by_location
from local_careers.models import Source
from local_careers.normalize import normalize_job

SRC = Source(id="s", name="s")


def _job(title, lat, lng, address="1 Main St"):
    return normalize_job(
        {"title": title, "company": "Acme", "address": address, "url": "u", "latitude": lat, "longitude": lng},
        SRC,
    ).to_public()


# one degree of latitude is ~69.09 miles with R = 3958.8
NEAR = _job("near", 35.0 + 0.1 / 69.09, -79.0)
FAR = _job("far", 35.0 + 50 / 69.09, -79.0)


def test_distance_in_miles():
    assert distance_in_miles(35.0, -79.0, 35.0, -79.0) == 0
    assert distance_in_miles(0, 0, 1, 0) == pytest.approx(69.09, abs=0.01)
    # Durham NC -> Raleigh NC
    assert distance_in_miles(35.994, -78.8986, 35.7796, -78.6382) == pytest.approx(20.8, abs=0.5)


def test_radius_filter_includes_near_excludes_far():
    out = filter_by_radius([NEAR, FAR], 35.0, -79.0, 1)
    assert [j.title for j in out] == ["near"]


def test_radius_boundary_is_inclusive():
    job = _job("edge", 36.0, -79.0)
    exact = distance_in_miles(35.0, -79.0, 36.0, -79.0)

    assert filter_by_radius([job], 35.0, -79.0, exact) == [job]


@pytest.mark.parametrize(
    "lat,lng,radius",
    [(None, None, None), (35.0, -79.0, None), ("abc", -79.0, 5), (35.0, float("nan"), 5), ("", "", "")],
)
def test_filter_fails_open(lat, lng, radius):
    assert filter_by_radius([NEAR, FAR], lat, lng, radius) == [NEAR, FAR]


def test_filter_accepts_query_string_values():
    assert [j.title for j in filter_by_radius([NEAR, FAR], "35.0", "-79.0", "1")] == ["near"]


def test_group_by_location_collapses_exact_matches_in_order():
    a = _job("a", 35.0, -79.0)
    b = _job("b", 36.0, -79.0)
    c = _job("c", 35.0, -79.0)
    d = _job("d", 35.0, -79.0, address="2 Oak Ave")

    groups = group_by_location([a, b, c, d])

    assert [(g.label, g.count) for g in groups] == [("1 Main St", 2), ("1 Main St", 1), ("2 Oak Ave", 1)]
    assert [j.title for j in groups[0].jobs] == ["a", "c"]
    assert groups[0].to_json_dict()["count"] == 2
