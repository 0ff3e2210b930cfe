"""Tests for wire model parsing and encoding."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from pycriticalmaps.exceptions import EncodingError
from pycriticalmaps.models import (
    ApiResponse,
    ChatMessage,
    Location,
    MessageBatch,
    PositionReport,
    SendChatMessage,
    encode_body,
)


class TestLocation:
    def test_from_degrees_rounds_to_microdegrees(self) -> None:
        loc = Location.from_degrees(52.520008, 13.404954, timestamp=10.0)
        assert loc.latitude == 52520008
        assert loc.longitude == 13404954
        assert loc.latitude_degrees == pytest.approx(52.520008)
        assert loc.longitude_degrees == pytest.approx(13.404954)

    def test_string_coordinates_are_coerced(self) -> None:
        loc = Location.model_validate({"longitude": "13405000", "latitude": 52520000.0, "timestamp": 1})
        assert loc.longitude == 13405000
        assert loc.latitude == 52520000

    def test_out_of_range_latitude_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Location(longitude=0, latitude=91_000_000, timestamp=0.0)

    def test_out_of_range_longitude_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Location(longitude=-181_000_000, latitude=0, timestamp=0.0)

    def test_blank_optional_fields_fall_back_to_none(self) -> None:
        loc = Location.model_validate({"longitude": 1, "latitude": 2, "timestamp": 3, "name": " ", "color": ""})
        assert loc.name is None
        assert loc.color is None


class TestApiResponse:
    SAMPLE_PAYLOAD: dict = {
        "locations": {
            "A1": {"longitude": 13405000, "latitude": 52520000, "timestamp": 1700000000},
            "B2": {"longitude": -74006000, "latitude": 40712800, "timestamp": 1700000001, "color": "#ff0000"},
        },
        "chatMessages": {
            "M1": {"message": "meet at the fountain", "timestamp": 1700000002},
        },
        "unknownField": True,
    }

    def test_parses_sample_payload(self) -> None:
        response = ApiResponse.model_validate(self.SAMPLE_PAYLOAD)
        assert set(response.locations) == {"A1", "B2"}
        assert response.locations["B2"].color == "#ff0000"
        assert response.chat_messages["M1"] == ChatMessage(message="meet at the fountain", timestamp=1700000002)

    def test_missing_sections_default_to_empty(self) -> None:
        response = ApiResponse.model_validate({})
        assert response.locations == {}
        assert response.chat_messages == {}

    def test_null_sections_default_to_empty(self) -> None:
        response = ApiResponse.model_validate({"locations": None, "chatMessages": None})
        assert response.locations == {}
        assert response.chat_messages == {}

    def test_is_frozen(self) -> None:
        response = ApiResponse()
        with pytest.raises(ValidationError):
            response.locations = {}  # type: ignore[misc]


class TestEncoding:
    def test_position_report_omits_unset_optionals(self) -> None:
        report = PositionReport(device="DEV", location=Location(longitude=1, latitude=2, timestamp=3.0))
        assert json.loads(encode_body(report)) == {
            "device": "DEV",
            "location": {"longitude": 1, "latitude": 2, "timestamp": 3.0},
        }

    def test_message_batch_uses_wire_keys(self) -> None:
        batch = MessageBatch(
            device="DEV",
            messages=[SendChatMessage(text="hi", timestamp=1.0, identifier="X")],
        )
        assert json.loads(encode_body(batch)) == {
            "device": "DEV",
            "messages": [{"text": "hi", "timestamp": 1.0, "identifier": "X"}],
        }

    def test_unserializable_body_raises_encoding_error(self) -> None:
        class _Broken(PositionReport):
            def model_dump_json(self, **_kwargs: object) -> str:  # type: ignore[override]
                raise ValueError("nope")

        broken = _Broken(device="DEV", location=Location(longitude=1, latitude=2, timestamp=3.0))
        with pytest.raises(EncodingError):
            encode_body(broken)


def test_send_chat_message_create_fills_identifier_and_timestamp() -> None:
    first = SendChatMessage.create("hello")
    second = SendChatMessage.create("hello")
    assert first.text == "hello"
    assert len(first.identifier) == 32
    assert first.identifier != second.identifier
    assert first.timestamp > 0
