"""
Unit tests for event request models.
"""
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from services.event_management.models.event import EventCreate, EventUpdate, PriceTierIn, GalleryItemIn


class TestEventCreate:
    def test_date_only_strings_are_midnight_utc(self):
        event = EventCreate(title="Launch", description="d", start_date="2030-01-01", end_date="2030-01-02")
        assert event.start_date == datetime(2030, 1, 1, tzinfo=timezone.utc)
        assert event.end_date == datetime(2030, 1, 2, tzinfo=timezone.utc)

    def test_end_date_has_no_default(self):
        event = EventCreate(title="Launch", description="d", start_date="2030-01-01T10:00:00Z")
        assert event.end_date is None

    @pytest.mark.parametrize("missing", ["title", "description", "start_date"])
    def test_required_fields(self, missing):
        data = {"title": "Launch", "description": "d", "start_date": "2030-01-01"}
        del data[missing]
        with pytest.raises(ValidationError):
            EventCreate(**data)


class TestExtensibleRecords:
    def test_unknown_price_fields_go_to_attributes(self):
        tier = PriceTierIn(tier="vip", amount="49.90", perks=["lounge"], seats=20)
        assert tier.tier == "vip"
        assert tier.amount == Decimal("49.90")
        assert tier.attributes == {"perks": ["lounge"], "seats": 20}

    def test_known_fields_only_keep_empty_attributes(self):
        item = GalleryItemIn(url="a.png")
        assert item.url == "a.png"
        assert item.attributes == {}

    @pytest.mark.parametrize("attributes", [["oops"], "text", 3])
    def test_non_object_attributes_with_extra_fields_is_validation_error(self, attributes):
        with pytest.raises(ValidationError):
            PriceTierIn(tier="vip", perks="x", attributes=attributes)

    def test_non_object_attributes_without_extra_fields_is_validation_error(self):
        with pytest.raises(ValidationError):
            GalleryItemIn(url="a.png", attributes=["oops"])


class TestEventUpdate:
    def test_only_sent_fields_are_set(self):
        update = EventUpdate(title="New title")
        assert update.model_dump(exclude_unset=True) == {"title": "New title"}

    def test_required_columns_cannot_be_nulled(self):
        with pytest.raises(ValidationError):
            EventUpdate(title=None)

    def test_end_date_can_be_cleared(self):
        update = EventUpdate(end_date=None)
        assert update.model_dump(exclude_unset=True) == {"end_date": None}
