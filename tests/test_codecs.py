"""Tests for codecs."""

import asyncio
from datetime import datetime, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

import vld
from vld import Codec, ValidationError
from vld.codecs import (
    base64_to_bytes,
    base64url_to_bytes,
    bytes_to_utf8,
    epoch_millis_to_date,
    epoch_seconds_to_date,
    hex_to_bytes,
    iso_datetime_to_date,
    json_codec,
    number_to_bigint,
    string_to_bigint,
    string_to_boolean,
    string_to_int,
    string_to_number,
    uri_component,
    utf8_to_bytes,
)
from vld.errors import IssueCode


class TestCodecContract:
    """Tests for the decode/encode pipeline."""

    def test_decode_and_encode(self):
        codec = Codec(vld.string(), vld.number().int(), decode=int, encode=str)
        assert codec.parse("42") == 42
        assert codec.encode(42) == "42"

    def test_input_validated_before_decode(self):
        calls = []
        codec = Codec(vld.string().min(1), vld.number(), decode=lambda s: calls.append(s) or 1, encode=str)
        assert codec.safe_parse("").issues[0].code == IssueCode.TOO_SMALL
        assert calls == []

    def test_output_validated_after_decode(self):
        codec = Codec(vld.string(), vld.number().positive(), decode=int, encode=str)
        assert codec.safe_parse("-1").issues[0].code == IssueCode.TOO_SMALL

    def test_encode_validates_output_side_first(self):
        codec = Codec(vld.string(), vld.number().positive(), decode=int, encode=str)
        with pytest.raises(ValidationError):
            codec.encode(-1)

    def test_decode_error_becomes_issue(self):
        codec = Codec(vld.string(), vld.number(), decode=int, encode=str)
        issue = codec.safe_parse("x").issues[0]
        assert issue.code == IssueCode.TRANSFORM_FAILED
        assert issue.message.startswith("Codec decode failed: ")

    def test_encode_error_becomes_issue(self):
        def explode(value):
            raise ValueError("nope")

        codec = Codec(vld.string(), vld.number(), decode=int, encode=explode)
        issue = codec.safe_encode(1).issues[0]
        assert issue.message == "Codec encode failed: nope"

    def test_codec_inside_object(self):
        schema = vld.object_({"when": iso_datetime_to_date})
        issue = schema.safe_parse({"when": "not a date"}).issues[0]
        assert issue.path == ("when",)

    def test_requires_validators(self):
        with pytest.raises(TypeError):
            Codec("string", vld.number(), decode=int, encode=str)


class TestAsyncCodecs:
    """Tests for async decode/encode functions."""

    @pytest.fixture
    def codec(self):
        async def decode(text):
            await asyncio.sleep(0)
            return int(text)

        async def encode(value):
            return str(value)

        return Codec(vld.string(), vld.number(), decode=decode, encode=encode)

    def test_async_methods(self, codec):
        assert asyncio.run(codec.parse_async("5")) == 5
        assert asyncio.run(codec.encode_async(5)) == "5"

    def test_sync_methods_refuse_async_functions(self, codec):
        issue = codec.safe_parse("5").issues[0]
        assert issue.code == IssueCode.CUSTOM
        assert "parse_async" in issue.message
        assert "encode_async" in codec.safe_encode(5).issues[0].message

    def test_async_decode_error(self, codec):
        result = asyncio.run(codec.safe_parse_async("x"))
        assert result.issues[0].code == IssueCode.TRANSFORM_FAILED

    def test_async_methods_accept_sync_functions(self):
        codec = Codec(vld.string(), vld.number(), decode=int, encode=str)
        assert asyncio.run(codec.parse_async("3")) == 3
        assert asyncio.run(codec.safe_encode_async(3)).data == "3"


class TestPredefinedCodecs:
    """Tests for the ready-made codecs."""

    def test_string_to_number(self):
        assert string_to_number.parse(" 2.5 ") == 2.5
        assert string_to_number.encode(2.0) == "2"
        assert not string_to_number.is_valid("abc")

    def test_string_to_int(self):
        assert string_to_int.parse("42") == 42
        assert string_to_int.parse("4.9") == 4
        assert string_to_int.encode(7) == "7"

    def test_bigint_codecs(self):
        assert string_to_bigint.parse("12345678901234567890") == 12345678901234567890
        assert number_to_bigint.parse(3.7) == 3
        assert number_to_bigint.encode(3) == 3

    def test_string_to_boolean(self):
        assert string_to_boolean.parse("Yes") is True
        assert string_to_boolean.encode(False) == "false"
        assert not string_to_boolean.is_valid("maybe")

    def test_iso_datetime(self):
        value = iso_datetime_to_date.parse("2024-01-15T10:30:00Z")
        assert value == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
        assert iso_datetime_to_date.encode(value) == "2024-01-15T10:30:00Z"

    def test_epoch_codecs(self):
        moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert epoch_seconds_to_date.parse(1704067200) == moment
        assert epoch_seconds_to_date.encode(moment) == 1704067200
        assert epoch_millis_to_date.parse(1704067200000) == moment
        assert epoch_millis_to_date.encode(moment) == 1704067200000

    def test_text_and_bytes(self):
        assert utf8_to_bytes.parse("é") == b"\xc3\xa9"
        assert utf8_to_bytes.encode(b"\xc3\xa9") == "é"
        assert bytes_to_utf8.parse(b"ok") == "ok"
        assert not bytes_to_utf8.is_valid(b"\xff")

    def test_base64(self):
        assert base64_to_bytes.parse("aGVsbG8=") == b"hello"
        assert base64_to_bytes.encode(b"hello") == "aGVsbG8="
        assert not base64_to_bytes.is_valid("not base64!")

    def test_base64url(self):
        assert base64url_to_bytes.parse("aGVsbG8") == b"hello"
        assert base64url_to_bytes.encode(b"\xfb\xff") == "-_8"

    def test_hex(self):
        assert hex_to_bytes.parse("DEADbeef") == b"\xde\xad\xbe\xef"
        assert hex_to_bytes.encode(b"\xde\xad") == "dead"
        assert not hex_to_bytes.is_valid("xyz")

    def test_uri_component(self):
        assert uri_component.parse("a%20b%2Fc") == "a b/c"
        assert uri_component.encode("a b/c") == "a%20b%2Fc"

    def test_json_codec(self):
        codec = json_codec(vld.object_({"a": vld.number()}))
        assert codec.parse('{"a": 1}') == {"a": 1}
        assert codec.encode({"a": 1}) == '{"a":1}'
        assert codec.safe_parse("{").issues[0].code == IssueCode.TRANSFORM_FAILED
        assert json_codec().parse("[1, 2]") == [1, 2]


class TestRoundTrip:
    """Encoding a decoded value yields input the codec accepts again."""

    @settings(max_examples=50)
    @given(st.integers(min_value=-(10**12), max_value=10**12))
    def test_string_to_int(self, number):
        text = str(number)
        again = string_to_int.encode(string_to_int.parse(text))
        assert string_to_int.parse(again) == number

    @settings(max_examples=50)
    @given(st.binary(max_size=32))
    def test_bytes_codecs(self, data):
        for codec in (base64_to_bytes, base64url_to_bytes, hex_to_bytes):
            assert codec.parse(codec.encode(data)) == data
