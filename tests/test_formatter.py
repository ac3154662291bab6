"""Tests for outcome rendering."""

from __future__ import annotations

import json

from console.formatter import as_renderable, format_local_error, format_outcome, pretty
from console.models import Action, CallOutcome, RawString, StructuredValue


class TestPretty:
    def test_object_and_its_json_string_render_identically(self) -> None:
        value = {"team": "frc254", "mu": 31.2, "sigma": [1, 2]}
        assert pretty(value) == pretty(json.dumps(value))

    def test_structured_value_is_indented(self) -> None:
        assert pretty({"a": [1]}) == '{\n    "a": [\n        1\n    ]\n}'

    def test_non_json_text_is_literal(self) -> None:
        assert pretty("Service Unavailable") == "Service Unavailable"

    def test_empty_string_stays_empty(self) -> None:
        assert pretty("") == ""

    def test_non_standard_constants_stay_literal(self) -> None:
        assert pretty("NaN") == "NaN"
        assert pretty("[Infinity]") == "[Infinity]"

    def test_tags_text_and_values(self) -> None:
        assert as_renderable("x") == RawString("x")
        assert as_renderable([1]) == StructuredValue([1])


class TestFormatLocalError:
    def test_styles_as_error_and_escapes(self) -> None:
        record = format_local_error(Action.UPDATE, "Bad <key> & \"stuff\"")
        assert record.style == "err"
        assert record.action is Action.UPDATE
        assert record.text == "Bad &lt;key&gt; &amp; &quot;stuff&quot;"


class TestFormatOutcome:
    def test_success_shows_pretty_body(self) -> None:
        outcome = CallOutcome(http_status=200, parsed_body={"ok": True}, raw_body='{"ok":true}')
        record = format_outcome(Action.TEAM_LOOKUP, outcome)

        assert record.style == "ok"
        assert record.text == "{\n    &quot;ok&quot;: true\n}"

    def test_http_error_leads_with_status(self) -> None:
        outcome = CallOutcome(http_status=404, parsed_body={"error": "unknown team"}, raw_body="")
        record = format_outcome(Action.TEAM_LOOKUP, outcome)

        assert record.style == "err"
        assert record.text.startswith("HTTP 404\n")
        assert "unknown team" in record.text

    def test_plain_text_200_is_error_with_raw_body(self) -> None:
        outcome = CallOutcome(http_status=200, raw_body="<h1>done</h1>")
        record = format_outcome(Action.UPDATE, outcome)

        assert record.style == "err"
        assert record.text == "HTTP 200\n&lt;h1&gt;done&lt;/h1&gt;"

    def test_transport_error_is_shown(self) -> None:
        outcome = CallOutcome(http_status=0, transport_error="Connection refused")
        record = format_outcome(Action.PREDICT_ONE, outcome)

        assert record.style == "err"
        assert record.text == "HTTP 0\nConnection refused"

    def test_single_quote_uses_numeric_entity(self) -> None:
        record = format_local_error(Action.TEAM_LOOKUP, "team 'frc254'")
        assert record.text == "team &#039;frc254&#039;"

    def test_to_html_wraps_escaped_text(self) -> None:
        record = format_local_error(Action.PUSH_RESULTS, "Invalid JSON array.")
        assert record.to_html() == '<div class="log err">Invalid JSON array.</div>'
