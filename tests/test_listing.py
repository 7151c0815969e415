from datetime import datetime, timezone

import pytest

from covid_threat_feed.errors import FeedParseError, FeedTransportError
from covid_threat_feed.listing import ListingEntry, parse_listing, resolve_latest, select_latest

URL = "https://feed.example/"


def _entry(name: str, day: int) -> ListingEntry:
    return ListingEntry(name=name, last_modified=datetime(2020, 4, day, tzinfo=timezone.utc))


def test_resolver_picks_newest_matching_file(fake_session, make_listing):
    xml = make_listing(
        ("covid_a", "2020-01-01"),
        ("covid_b", "2020-02-01"),
        ("other", "2020-03-01"),
    )
    session = fake_session({URL: (200, xml)})
    assert resolve_latest(URL, "covid_", session=session) == "covid_b"
    assert session.calls == [URL]


def test_resolver_returns_none_without_match(fake_session, make_listing):
    xml = make_listing(("other", "2020-03-01T10:00:00.000Z"))
    assert resolve_latest(URL, "covid_", session=fake_session({URL: (200, xml)})) is None


def test_parse_listing_reads_s3_timestamps(make_listing):
    entries = parse_listing(make_listing(("covid_2020-04-01.csv", "2020-04-01T06:12:44.000Z")))
    assert entries == [
        ListingEntry(
            name="covid_2020-04-01.csv",
            last_modified=datetime(2020, 4, 1, 6, 12, 44, tzinfo=timezone.utc),
        )
    ]


def test_parse_listing_skips_bad_timestamps(make_listing):
    entries = parse_listing(make_listing(("covid_x", "yesterday"), ("covid_y", "2020-04-02T00:00:00Z")))
    assert [e.name for e in entries] == ["covid_y"]


def test_parse_listing_rejects_empty_payload():
    with pytest.raises(FeedParseError):
        parse_listing(b"")


def test_select_latest_tie_goes_to_last_seen():
    entries = [_entry("covid_first", 5), _entry("covid_second", 5), _entry("covid_old", 1)]
    assert select_latest(entries, "covid_").name == "covid_second"


def test_select_latest_prefix_is_case_sensitive():
    assert select_latest([_entry("COVID_upper", 9)], "covid_") is None


def test_transport_errors_propagate(fake_session):
    with pytest.raises(FeedTransportError) as exc:
        resolve_latest(URL, "covid_", session=fake_session({URL: (503, b"Slow Down")}))
    assert exc.value.status_code == 503
    assert exc.value.url == URL

    with pytest.raises(FeedTransportError) as exc:
        resolve_latest(URL, "covid_", session=fake_session({}))
    assert exc.value.status_code is None
    assert exc.value.__cause__ is not None


def test_truncated_listing_warns_and_keeps_complete_entries(capsys):
    xml = (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<ListBucketResult xmlns="http://s3.amazonaws.com/doc/2006-03-01/">'
        "<IsTruncated>true</IsTruncated>"
        "<Contents><Key>covid_a</Key><LastModified>2020-01-01T00:00:00.000Z</LastModified></Contents>"
        "<Contents><LastModified>2020-02-01T00:00:00.000Z</LastModified></Contents>"
        "<Contents><Key>covid_c</Key></Contents>"
        "</ListBucketResult>"
    )
    entries = parse_listing(xml)

    assert [e.name for e in entries] == ["covid_a"]
    err = capsys.readouterr().err
    assert "WARN: Bucket listing is truncated" in err
    assert err.count("Skipping listing entry without Key/LastModified") == 2


def test_untruncated_listing_does_not_warn(make_listing, capsys):
    parse_listing(make_listing(("covid_a", "2020-01-01")))
    assert "truncated" not in capsys.readouterr().err


def test_html_error_page_is_a_parse_error(fake_session):
    page = b"<html><body><h1>Service Unavailable</h1></body></html>"
    with pytest.raises(FeedParseError, match="ListBucketResult"):
        resolve_latest(URL, "covid_", session=fake_session({URL: (200, page)}))
