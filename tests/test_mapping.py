from local_careers.mapping import FieldPath, is_complete, map_item, missing_fields, read_categories
from local_careers.models import SourceConfig


def test_field_path_walks_nested_mappings_and_lists():
    item = {"employer": {"name": "Acme", "offices": [{"street": "1 Main St"}]}}

    assert FieldPath.parse("employer.name").resolve(item) == "Acme"
    assert FieldPath.parse("employer.offices.0.street").resolve(item) == "1 Main St"


def test_field_path_absent_segments_resolve_to_none():
    item = {"employer": {"name": "Acme", "offices": []}}

    assert FieldPath.parse("employer.missing.deeper").resolve(item) is None
    assert FieldPath.parse("employer.name.first").resolve(item) is None
    assert FieldPath.parse("employer.offices.3").resolve(item) is None
    assert FieldPath.parse("").resolve(item) is None


def test_map_item_uses_field_map_then_defaults():
    config = SourceConfig(
        url="https://feed.example.com",
        name="County",
        fieldMap={"title": "position", "company": "employer.name", "postalCode": "zip"},
        defaults={"state": "NC", "company": "Fallback Co"},
    )
    item = {"position": "Welder", "employer": {"name": "Acme"}, "zip": 27701, "address": "5 Elm"}

    job = map_item(item, config)

    assert job["title"] == "Welder"
    assert job["company"] == "Acme"
    assert job["postal_code"] == 27701
    assert job["state"] == "NC"
    assert job["city"] is None
    assert job["source"] == {"name": "County", "type": "remote-feed", "url": "https://feed.example.com"}


def test_map_item_falls_back_to_default_when_path_missing():
    config = SourceConfig(url="u", fieldMap={"company": "employer.name"}, defaults={"company": "Fallback Co"})

    job = map_item({"title": "Cook"}, config)

    assert job["company"] == "Fallback Co"


def test_fixed_categories_win_over_feed_value():
    config = SourceConfig(url="u", categories=["Health"])

    job = map_item({"categories": "a, b"}, config)

    assert job["categories"] == ["Health"]


def test_read_categories_shapes():
    assert read_categories({"c": ["Retail", "Food"]}, "c") == ["Retail", "Food"]
    assert read_categories({"c": " Retail , Food,, "}, "c") == ["Retail", "Food"]
    assert read_categories({"c": 7}, "c") == []
    assert read_categories({}, "c") == []


def test_map_item_reads_categories_through_field_map():
    config = SourceConfig(url="u", fieldMap={"categories": "meta.tags"})

    job = map_item({"meta": {"tags": "Nights,Weekends"}}, config)

    assert job["categories"] == ["Nights", "Weekends"]


def test_completeness_gate():
    complete = {"title": "Cook", "company": "Diner", "address": "1 Main", "url": "https://x"}
    assert is_complete(complete)

    blank_url = dict(complete, url="   ")
    assert not is_complete(blank_url)
    assert missing_fields(blank_url) == ["url"]

    assert missing_fields({}) == ["title", "company", "address", "url"]
