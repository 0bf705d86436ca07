"""Tests for timestamp conversion helpers."""

from datetime import datetime, timezone

import pytest
import pytz
from rdflib import Literal, URIRef
from rdflib.namespace import XSD

from ldes_snapshot.utils import ensure_utc, from_datetime_literal, get_current_timestamp, to_datetime_literal


class TestFromDatetimeLiteral:
    """Parsing xsd:dateTime literals into aware UTC datetimes."""

    def test_utc_literal(self):
        value = Literal("2021-12-15T10:00:00.000Z", datatype=XSD.dateTime)
        assert from_datetime_literal(value) == datetime(2021, 12, 15, 10, tzinfo=timezone.utc)

    def test_offset_literal_is_converted(self):
        value = Literal("2021-12-15T11:00:00+01:00", datatype=XSD.dateTime)
        assert from_datetime_literal(value) == datetime(2021, 12, 15, 10, tzinfo=timezone.utc)

    def test_naive_literal_uses_given_timezone(self):
        value = Literal("2021-12-15T10:00:00", datatype=XSD.dateTime)
        parsed = from_datetime_literal(value, pytz.timezone("Europe/Brussels"))
        assert parsed == datetime(2021, 12, 15, 9, tzinfo=timezone.utc)

    def test_plain_string_literal(self):
        assert from_datetime_literal(Literal("2021-12-15T10:00:00Z")) == datetime(
            2021, 12, 15, 10, tzinfo=timezone.utc
        )

    @pytest.mark.parametrize(
        "value",
        [
            Literal("not a date"),
            Literal(5),
            Literal("not a date", datatype=XSD.dateTime),
            URIRef("http://example.org/x"),
        ],
    )
    def test_rejects_non_datetimes(self, value):
        with pytest.raises(ValueError):
            from_datetime_literal(value)


class TestConversions:
    def test_to_datetime_literal_is_parsed_back(self):
        moment = datetime(2021, 12, 15, 10, 0, 1, tzinfo=timezone.utc)
        literal = to_datetime_literal(moment)
        assert literal.datatype == XSD.dateTime
        assert from_datetime_literal(literal) == moment

    def test_ensure_utc_keeps_aware_instant(self):
        moment = pytz.timezone("Europe/Brussels").localize(datetime(2021, 7, 1, 12))
        assert ensure_utc(moment) == datetime(2021, 7, 1, 10, tzinfo=timezone.utc)

    def test_current_timestamp_is_aware(self):
        assert get_current_timestamp().tzinfo is not None
