"""Tests for endpoint classification, query encoding and HMAC signing."""

from urllib.parse import parse_qsl

import pytest

from binance_relay.core.signing import (
    build_query_string,
    build_upstream_url,
    generate_signature,
    is_authenticated_endpoint,
    render_param_value,
    sign_parameters,
)

# Example published in the Binance API documentation
DOC_SECRET = "NhqPtmdSJYdKjVHjA7PZj4Mge3R5YNiP1e3UZjInClVN65XAbvqqM6A7H5fATj0j"
DOC_QUERY = (
    "symbol=LTCBTC&side=BUY&type=LIMIT&timeInForce=GTC&quantity=1"
    "&price=0.1&recvWindow=5000&timestamp=1499827319559"
)
DOC_SIGNATURE = "c8db56825ae71d6d79447849e617115f4a920fa2acdcab2b053c4b2838bd6b71"


class TestEndpointClassification:
    """Test authenticated vs public endpoint detection."""

    @pytest.mark.parametrize("endpoint", [
        "/api/v3/account",
        "/api/v3/allOrders",
        "/api/v3/myTrades",
        "/sapi/v1/sub-account/list",
        "/api/v3/somethingmyTradesX",
    ])
    def test_authenticated_endpoints(self, endpoint):
        assert is_authenticated_endpoint(endpoint) is True

    @pytest.mark.parametrize("endpoint", [
        "/api/v3/ticker/price",
        "/api/v3/depth",
        "/api/v3/exchangeInfo",
        "/api/v3/Account",
        "/api/v3/allorders",
    ])
    def test_public_endpoints(self, endpoint):
        assert is_authenticated_endpoint(endpoint) is False


class TestQueryString:
    """Test canonical query string construction."""

    def test_insertion_order_preserved(self):
        params = {"symbol": "BTCUSDT", "limit": 5, "fromId": 10}

        assert build_query_string(params) == "symbol=BTCUSDT&limit=5&fromId=10"

    def test_empty_params(self):
        assert build_query_string({}) == ""

    def test_form_encoding(self):
        params = {"note": "a b&c=d", "path": "/x?y", "star": "*", "tilde": "~"}

        assert build_query_string(params) == (
            "note=a+b%26c%3Dd&path=%2Fx%3Fy&star=*&tilde=%7E"
        )

    def test_small_floats_stay_positional(self):
        assert build_query_string({"quantity": 0.00001}) == "quantity=0.00001"

    def test_unicode_values_are_utf8_percent_encoded(self):
        assert build_query_string({"q": "ñ"}) == "q=%C3%B1"

    def test_encoded_string_decodes_back(self):
        params = {"symbol": "BTC USDT", "weird": "&=?#"}

        assert dict(parse_qsl(build_query_string(params))) == params

    @pytest.mark.parametrize("value, expected", [
        ("BTCUSDT", "BTCUSDT"),
        (5, "5"),
        (0.1, "0.1"),
        (5000.0, "5000"),
        (0.00001, "0.00001"),
        (0.000005, "0.000005"),
        (-0.00012345, "-0.00012345"),
        (0.000001, "0.000001"),
        (1.5e-7, "1.5e-7"),
        (1e-7, "1e-7"),
        (2.5e-8, "2.5e-8"),
        (1e20, "100000000000000000000"),
        (1e21, "1e+21"),
        (1.5e22, "1.5e+22"),
        (0.0, "0"),
        (-0.0, "0"),
        (True, "true"),
        (False, "false"),
        (None, "null"),
        (["BTCUSDT", "ETHUSDT"], '["BTCUSDT","ETHUSDT"]'),
    ])
    def test_render_param_value(self, value, expected):
        assert render_param_value(value) == expected


class TestSignature:
    """Test HMAC-SHA256 signature generation."""

    def test_matches_documented_example(self):
        assert generate_signature(DOC_QUERY, DOC_SECRET) == DOC_SIGNATURE

    def test_deterministic(self):
        first = generate_signature("timestamp=1700000000000", "S")
        second = generate_signature("timestamp=1700000000000", "S")

        assert first == second
        assert first == "9831094698748824c68b873b7fe9451f930c30ee4ba83b895628a72c4d8f4ead"

    def test_lowercase_hex(self):
        signature = generate_signature("a=1", "secret")

        assert len(signature) == 64
        assert signature == signature.lower()
        int(signature, 16)

    def test_key_changes_signature(self):
        assert generate_signature("a=1", "k1") != generate_signature("a=1", "k2")


class TestSignParameters:
    """Test timestamp and signature injection."""

    def test_documented_example(self):
        params = {
            "symbol": "LTCBTC",
            "side": "BUY",
            "type": "LIMIT",
            "timeInForce": "GTC",
            "quantity": 1,
            "price": 0.1,
            "recvWindow": 5000,
        }

        signed = sign_parameters(params, DOC_SECRET, timestamp=1499827319559)

        assert signed["signature"] == DOC_SIGNATURE
        assert build_query_string(signed) == f"{DOC_QUERY}&signature={DOC_SIGNATURE}"

    def test_timestamp_then_signature_appended_last(self):
        signed = sign_parameters({"symbol": "BTCUSDT"}, "S", timestamp=1700000000000)

        assert list(signed) == ["symbol", "timestamp", "signature"]
        assert signed["timestamp"] == 1700000000000

    def test_signature_covers_timestamp_but_not_itself(self):
        signed = sign_parameters({"symbol": "BTCUSDT"}, "S", timestamp=1700000000000)

        assert signed["signature"] == generate_signature(
            "symbol=BTCUSDT&timestamp=1700000000000", "S"
        )
        assert signed["signature"] == (
            "42a85207bef0fdbf1548f7e7ae19ebe060351d8ceeee9ea0d22356cadcb79d3a"
        )

    def test_input_params_not_mutated(self):
        params = {"symbol": "BTCUSDT"}

        sign_parameters(params, "S", timestamp=1)

        assert params == {"symbol": "BTCUSDT"}

    def test_uses_current_time_by_default(self, monkeypatch):
        monkeypatch.setattr("binance_relay.core.signing.time.time", lambda: 1700000000.5)

        signed = sign_parameters({}, "S")

        assert signed["timestamp"] == 1700000000500


class TestUpstreamUrl:
    """Test final URL construction."""

    def test_no_query_string_without_params(self):
        url = build_upstream_url("https://api.binance.com", "/api/v3/time", {})

        assert url == "https://api.binance.com/api/v3/time"

    def test_query_string_appended(self):
        url = build_upstream_url(
            "https://api.binance.com", "/api/v3/ticker/price", {"symbol": "BTCUSDT"}
        )

        assert url == "https://api.binance.com/api/v3/ticker/price?symbol=BTCUSDT"
