"""
Unit tests for field formatting, configuration and asset resolution.
"""

from datetime import datetime, timedelta, timezone

from resultsview.assets import FileAssetResolver, StaticAssetResolver
from resultsview.config import (
    PRETTY_PRINT_JSON_FIELDS,
    DictConfiguration,
    as_bool,
    pretty_print_json_fields,
)
from resultsview.formatting import format_field_value, format_interval, plain_field_value
from resultsview.models import FieldInfo


TEXT = FieldInfo("name", "text", "text")
JSONB = FieldInfo("meta", "jsonb", "jsonb")


class TestFormatFieldValue:
    """Test the HTML field formatter."""

    def test_null(self):
        """Test NULL gets the italic marker."""
        assert format_field_value(TEXT, None) == "<i>null</i>"

    def test_escapes_html(self):
        """Test markup in values is escaped."""
        assert format_field_value(TEXT, "<b>x</b>") == "&lt;b&gt;x&lt;/b&gt;"

    def test_long_text_truncated(self):
        """Test text over 150 characters is cut with an ellipsis."""
        formatted = format_field_value(TEXT, "x" * 200)
        assert formatted == "x" * 148 + "&hellip;"

    def test_truncation_keeps_entities_whole(self):
        """Test long text is cut before escaping."""
        formatted = format_field_value(TEXT, "&" * 200)
        assert formatted == "&amp;" * 148 + "&hellip;"

    def test_short_text_untouched(self):
        """Test text at the limit is kept whole."""
        assert format_field_value(TEXT, "y" * 150) == "y" * 150

    def test_json_compact(self):
        """Test JSON values are serialized on one line."""
        formatted = format_field_value(JSONB, {"a": 1})
        assert formatted == "{&#34;a&#34;: 1}"

    def test_json_pretty(self):
        """Test pretty mode indents JSON."""
        formatted = format_field_value(JSONB, {"a": 1}, True)
        assert "\n  &#34;a&#34;: 1\n" in formatted

    def test_boolean(self):
        """Test booleans use SQL spelling."""
        field = FieldInfo("done", "bool", "bool")
        assert format_field_value(field, True) == "true"
        assert format_field_value(field, False) == "false"

    def test_timestamptz(self):
        """Test timestamps are ISO formatted."""
        field = FieldInfo("at", "timestamptz", "timestamptz")
        value = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert format_field_value(field, value) == "2024-01-02T03:04:05+00:00"

    def test_zero_is_kept(self):
        """Test falsy numbers still render."""
        field = FieldInfo("n", "int4", "int4")
        assert format_field_value(field, 0) == "0"

    def test_plain_formatter(self):
        """Test the plain formatter skips escaping and spells NULL."""
        assert plain_field_value(TEXT, None) == "NULL"
        assert plain_field_value(TEXT, "<b>") == "<b>"
        assert plain_field_value(JSONB, {"a": 1}) == '{"a": 1}'


class TestFormatInterval:
    """Test interval rendering."""

    def test_time_only(self):
        """Test sub-day intervals."""
        assert format_interval(timedelta(hours=1, minutes=2, seconds=3)) == "01:02:03"

    def test_days_and_time(self):
        """Test day plus clock."""
        assert format_interval(timedelta(days=1, hours=2, minutes=3, seconds=4)) == "1 day 02:03:04"

    def test_whole_days(self):
        """Test whole days drop the clock."""
        assert format_interval(timedelta(days=3)) == "3 days"

    def test_mapping(self):
        """Test driver-style interval mappings."""
        assert format_interval({"days": 2, "hours": 5}) == "2 days 05:00:00"

    def test_years_and_months(self):
        """Test mapping intervals keep years and months."""
        assert format_interval({"years": 1, "months": 2}) == "1 year 2 mons"
        assert format_interval({"years": 2, "months": 1, "days": 3, "minutes": 4}) == "2 years 1 mon 3 days 00:04:00"

    def test_negative_timedelta(self):
        """Test negative spans carry a sign instead of borrowing a day."""
        assert format_interval(timedelta(hours=-1)) == "-01:00:00"
        assert format_interval(timedelta(days=-1, hours=-2)) == "-1 days -02:00:00"
        assert format_interval(timedelta(days=-3)) == "-3 days"

    def test_negative_mapping_parts(self):
        """Test mixed-sign mapping parts."""
        assert format_interval({"months": -1, "hours": -3}) == "-1 mons -03:00:00"

    def test_zero(self):
        """Test an empty interval."""
        assert format_interval(timedelta(0)) == "00:00:00"
        assert format_interval({}) == "00:00:00"

    def test_fallback(self):
        """Test unknown values pass through str()."""
        assert format_interval("1 mon") == "1 mon"


class TestConfiguration:
    """Test configuration providers."""

    def test_unset_option_is_falsy(self):
        """Test absent options default to off."""
        assert pretty_print_json_fields(DictConfiguration()) is False
        assert pretty_print_json_fields(None) is False

    def test_enabled_option(self):
        """Test the pretty print option is read."""
        config = DictConfiguration({PRETTY_PRINT_JSON_FIELDS: True})
        assert pretty_print_json_fields(config) is True

    def test_as_bool(self):
        """Test string settings are parsed."""
        assert as_bool("true") is True
        assert as_bool("ON") is True
        assert as_bool("1") is True
        assert as_bool("false") is False
        assert as_bool("") is False
        assert as_bool(0) is False

    def test_from_env(self):
        """Test options are read from prefixed environment variables."""
        config = DictConfiguration.from_env(environ={
            "RESULTSVIEW_PRETTYPRINTJSONFIELDS": "true",
            "RESULTSVIEW_UNKNOWN": "1",
            "OTHER": "x",
        })
        assert config.get(PRETTY_PRINT_JSON_FIELDS) == "true"
        assert config.get("UNKNOWN") is None
        assert pretty_print_json_fields(config) is True


class TestAssetResolvers:
    """Test asset path resolution."""

    def test_static_resolver(self):
        """Test media files are joined onto the base URL."""
        assert StaticAssetResolver("/static/").resolve("index.js") == "/static/media/index.js"
        assert StaticAssetResolver().resolve("index.js") == "/media/index.js"

    def test_file_resolver(self):
        """Test file URIs point into the media directory."""
        uri = FileAssetResolver("/opt/app/media").resolve("index.js")
        assert uri == "file:///opt/app/media/index.js"
