"""Tests for the Tencent response parser — primary pattern, fallback, skips."""

from decimal import Decimal

from conftest import quote_line

from ministock.models.quote import Direction, ParsedQuote
from ministock.parser import MIN_FIELDS, parse_fields, parse_response


class TestParseWellFormed:
    def test_single_quote(self):
        parsed = parse_response(quote_line("sh600000", "Name", "10.50", "10.00"))
        quote = parsed["sh600000"]
        assert isinstance(quote, ParsedQuote)
        assert quote.name == "Name"
        assert quote.price_text == "10.50"
        assert quote.price == Decimal("10.50")
        assert quote.previous_close == Decimal("10.00")
        assert quote.change_text == "5.00%"
        assert quote.direction == Direction.UP

    def test_multiple_quotes(self, sample_response):
        parsed = parse_response(sample_response)
        assert set(parsed) == {"sh600000", "sz000001"}
        assert parsed["sh600000"].name == "浦发银行"
        assert parsed["sz000001"].direction == Direction.DOWN
        assert parsed["sz000001"].change_text == "-4.35%"

    def test_flat(self):
        parsed = parse_response(quote_line("sh600000", price="10.00", previous_close="10.00"))
        assert parsed["sh600000"].direction == Direction.FLAT
        assert parsed["sh600000"].change_text == "0.00%"

    def test_separator_independent(self):
        statements = [
            quote_line("sh600000").rstrip(";"),
            quote_line("sz000001").rstrip(";"),
            quote_line("hk00700").rstrip(";"),
        ]
        newline = parse_response("\n".join(statements))
        semicolon = parse_response(";".join(statements))
        padded = parse_response("  " + " ;\r\n  ".join(statements) + "\n")
        assert set(newline) == {"sh600000", "sz000001", "hk00700"}
        assert newline == semicolon == padded

    def test_us_symbol_with_uppercase(self):
        parsed = parse_response(quote_line("usAAPL", "Apple", "190.00", "200.00"))
        assert parsed["usAAPL"].change_text == "-5.00%"

    def test_exactly_min_fields(self):
        parsed = parse_response(quote_line("sh600000", n_fields=MIN_FIELDS))
        assert "sh600000" in parsed

    def test_empty_fields_keep_their_index(self):
        fields = ["1", "Name", "", "10.50", "10.00"] + [""] * 28
        parsed = parse_response(f'v_sh600000="{"~".join(fields)}";')
        assert parsed["sh600000"].price_text == "10.50"


class TestParseSkips:
    def test_too_few_fields_skipped(self):
        text = "\n".join([
            quote_line("sh600000", n_fields=MIN_FIELDS - 1),
            quote_line("sz000001"),
        ])
        parsed = parse_response(text)
        assert "sh600000" not in parsed
        assert "sz000001" in parsed

    def test_non_numeric_price_skipped(self):
        text = quote_line("sh600000", price="abc") + quote_line("sz000001")
        parsed = parse_response(text)
        assert list(parsed) == ["sz000001"]

    def test_empty_previous_close_skipped(self):
        assert parse_response(quote_line("sh600000", previous_close="")) == {}

    def test_zero_previous_close_does_not_raise(self):
        parsed = parse_response(quote_line("sh600000", previous_close="0"))
        assert "sh600000" not in parsed

    def test_non_finite_price_skipped(self):
        assert parse_response(quote_line("sh600000", price="NaN")) == {}

    def test_garbage_text(self):
        assert parse_response("") == {}
        assert parse_response('v_pv_none_match="1";') == {}
        assert parse_response("<html>Service unavailable</html>") == {}

    def test_parse_fields_short_list(self):
        assert parse_fields(["1", "Name", "x", "10"]) is None


class TestParseFallback:
    def test_fallback_when_primary_finds_nothing(self):
        good = ";".join([quote_line("sh600000"), quote_line("sz000001", price="9.00")])
        # A space before '=' defeats the primary pattern.
        spaced = good.replace('="', ' ="')
        assert parse_response(spaced) == parse_response(good)
        assert set(parse_response(spaced)) == {"sh600000", "sz000001"}

    def test_fallback_applies_same_skips(self):
        text = ";".join([
            quote_line("sh600000", n_fields=10),
            quote_line("sz000001", previous_close="0"),
            quote_line("sz000002"),
        ]).replace('="', ' ="')
        assert list(parse_response(text)) == ["sz000002"]

    def test_fallback_not_used_when_primary_matches(self):
        text = quote_line("sh600000") + quote_line("sz000001").replace('="', ' ="')
        assert list(parse_response(text)) == ["sh600000"]
