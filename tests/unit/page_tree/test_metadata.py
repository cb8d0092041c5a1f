"""Unit tests for page_tree.metadata module."""

import json

from src.page_tree.metadata import iter_metadata_values, maybe_deserialize


class TestMaybeDeserialize:
    """Test cases for maybe_deserialize function."""

    def test_decodes_json_object(self):
        """A JSON object stored as text is returned as a dict."""
        layout = {"rows": [{"modules": ["text", "image"]}], "width": 1080}
        assert maybe_deserialize(json.dumps(layout)) == layout

    def test_decodes_json_array(self):
        """A JSON array stored as text is returned as a list."""
        assert maybe_deserialize('[1, "two", {"three": 3}]') == [1, "two", {"three": 3}]

    def test_tolerates_surrounding_whitespace(self):
        """Leading and trailing whitespace does not prevent decoding."""
        assert maybe_deserialize('  {"a": 1}\n') == {"a": 1}

    def test_keeps_plain_strings(self):
        """Ordinary text is returned unchanged."""
        assert maybe_deserialize("full-width") == "full-width"

    def test_keeps_json_scalars_as_text(self):
        """Numbers, booleans and quoted strings stay text."""
        assert maybe_deserialize("42") == "42"
        assert maybe_deserialize("true") == "true"
        assert maybe_deserialize('"quoted"') == '"quoted"'

    def test_keeps_invalid_json(self):
        """Text that only looks like JSON is returned unchanged."""
        assert maybe_deserialize("{not json") == "{not json"
        assert maybe_deserialize("[section]") == "[section]"

    def test_passes_through_non_strings(self):
        """Values that are already structured are returned as they are."""
        value = {"already": "structured"}
        assert maybe_deserialize(value) is value
        assert maybe_deserialize(7) == 7
        assert maybe_deserialize(None) is None

    def test_empty_string(self):
        """An empty string is returned unchanged."""
        assert maybe_deserialize("") == ""


class TestIterMetadataValues:
    """Test cases for iter_metadata_values function."""

    def test_yields_every_value_of_every_key(self):
        """Multi-valued keys yield one pair per value."""
        metadata = {"owner": ["a", "b"], "layout": ["{}"]}

        assert list(iter_metadata_values(metadata)) == [
            ("layout", "{}"),
            ("owner", "a"),
            ("owner", "b"),
        ]

    def test_wraps_single_values(self):
        """A bare value is treated as a one-element list."""
        assert list(iter_metadata_values({"flag": "on"})) == [("flag", "on")]

    def test_empty_mapping(self):
        """No metadata yields nothing."""
        assert list(iter_metadata_values({})) == []
