"""Tests for the version-aware character escaping policy."""

import pytest

from fluent_xml.character.escaping import (
    DISCOURAGED_CHARS,
    XML10_DISCARDED_CHARS,
    XML11_DISCARDED_CHARS,
    XML11_RESTRICTED_CHARS,
    XmlVersion,
    escape,
    escape_value,
    escape_with_references,
)

RESERVED = "\"&<>'"


class TestReservedCharacters:
    """Named entity and character reference output for the reserved set."""

    @pytest.mark.parametrize("version", list(XmlVersion))
    def test_named_entities(self, version):
        """Test reserved characters become named entities under both versions."""
        assert escape(version, RESERVED) == "&quot;&amp;&lt;&gt;&apos;"

    def test_character_reference_mode(self):
        """Test reference mode maps reserved characters to decimal references."""
        assert escape_with_references(RESERVED) == "&#34;&#38;&#60;&#62;&#39;"

    @pytest.mark.parametrize("value", ["<<>>", "a & b", "'\"'", "x<y>z&\"'"])
    def test_no_literal_reserved_characters_remain(self, value):
        """Test no escaped output contains a literal reserved character."""
        outputs = [
            escape(XmlVersion.V10, value),
            escape(XmlVersion.V11, value),
            escape_with_references(value),
        ]
        for output in outputs:
            stripped = output.replace("&", "")
            assert not any(char in stripped for char in "<>\"'")
            # Every ampersand starts an entity or reference
            assert output.count("&") == output.count(";")

    def test_plain_text_passes_through(self):
        """Test ordinary text including whitespace is untouched."""
        text = "Hello,\tworld\r\nsecond line é中"
        assert escape(XmlVersion.V10, text) == text
        assert escape(XmlVersion.V11, text) == text


class TestXml10:
    """Discarded and referenced characters under XML 1.0."""

    @pytest.mark.parametrize(
        "code_point", [0x00, 0x01, 0x08, 0x0B, 0x0C, 0x0E, 0x1F, 0xFFFE, 0xFFFF, 0xD800, 0xDFFF]
    )
    def test_invalid_characters_are_dropped(self, code_point):
        """Test structurally invalid characters disappear from the output."""
        assert escape(XmlVersion.V10, f"a{chr(code_point)}b") == "ab"

    @pytest.mark.parametrize("code_point", [0x7F, 0x84, 0x86, 0x9F])
    def test_discouraged_characters_are_referenced(self, code_point):
        """Test C1 controls are written as decimal references."""
        assert escape(XmlVersion.V10, chr(code_point)) == f"&#{code_point};"

    def test_next_line_is_kept(self):
        """Test U+0085 is neither dropped nor referenced."""
        assert escape(XmlVersion.V10, "\u0085") == "\u0085"

    def test_astral_characters_pass_through(self):
        """Test characters outside the BMP are not treated as surrogates."""
        assert escape(XmlVersion.V10, "\U0001F600") == "\U0001F600"

    def test_discard_table_contents(self):
        """Test the discard set leaves tab, newline and carriage return alone."""
        assert 0x09 not in XML10_DISCARDED_CHARS
        assert 0x0A not in XML10_DISCARDED_CHARS
        assert 0x0D not in XML10_DISCARDED_CHARS
        assert 0x85 not in DISCOURAGED_CHARS


class TestXml11:
    """Discarded and referenced characters under XML 1.1."""

    @pytest.mark.parametrize("code_point", [0x00, 0xFFFE, 0xFFFF, 0xDABC])
    def test_invalid_characters_are_dropped(self, code_point):
        """Test only NUL, non-characters and surrogates are dropped."""
        assert escape(XmlVersion.V11, f"a{chr(code_point)}b") == "ab"

    @pytest.mark.parametrize("code_point", [0x01, 0x08, 0x0B, 0x0C, 0x0E, 0x1F, 0x7F, 0x9F])
    def test_restricted_characters_are_referenced(self, code_point):
        """Test restricted and discouraged characters use reference form."""
        assert escape(XmlVersion.V11, chr(code_point)) == f"&#{code_point};"

    def test_tables_are_disjoint(self):
        """Test no character is both dropped and referenced."""
        assert not XML11_DISCARDED_CHARS & XML11_RESTRICTED_CHARS
        assert not XML11_DISCARDED_CHARS & DISCOURAGED_CHARS


class TestEscapeValue:
    """The renderer-facing entry point."""

    def test_none_renders_as_null(self):
        """Test an absent value renders as the literal text null."""
        assert escape_value(None) == "null"
        assert escape_value(None, XmlVersion.V11, use_character_references=True) == "null"

    def test_non_string_values_are_converted(self):
        """Test numbers and other objects render through str()."""
        assert escape_value(42) == "42"
        assert escape_value(1.5) == "1.5"

    def test_reference_mode_ignores_version_table(self):
        """Test control characters survive in reference mode under any version."""
        value = "\x01<\x7f"
        assert escape_value(value, XmlVersion.V10, True) == "\x01&#60;\x7f"
        assert escape_value(value, XmlVersion.V11, True) == "\x01&#60;\x7f"

    def test_version_mode(self):
        """Test version-aware escaping when reference mode is off."""
        assert escape_value("\x01<", XmlVersion.V10) == "&lt;"
        assert escape_value("\x01<", XmlVersion.V11) == "&#1;&lt;"


class TestXmlVersion:
    """Version lookup helpers."""

    def test_version_numbers(self):
        """Test declaration strings."""
        assert XmlVersion.V10.version_number == "1.0"
        assert XmlVersion.V11.version_number == "1.1"

    @pytest.mark.parametrize(
        "value,expected",
        [("1.0", XmlVersion.V10), ("1.1", XmlVersion.V11), ("V11", XmlVersion.V11)],
    )
    def test_from_string(self, value, expected):
        """Test lookup by declaration string or member name."""
        assert XmlVersion.from_string(value) is expected

    def test_from_string_unknown(self):
        """Test unknown versions raise ValueError."""
        with pytest.raises(ValueError, match="Unknown XML version"):
            XmlVersion.from_string("2.0")
