"""
Test per CSVParser
"""
import pytest

from src.services.csv_import.csv_parser import CSVParser


class TestParseRow:

    def test_simple_row(self):
        assert CSVParser.parse_row("a,b,c") == ["a", "b", "c"]

    def test_fields_are_trimmed(self):
        assert CSVParser.parse_row("  a , b  ,c ") == ["a", "b", "c"]

    def test_quoted_field_keeps_commas(self):
        assert CSVParser.parse_row('Clean,"Wipe, mop, dry",daily') == ["Clean", "Wipe, mop, dry", "daily"]

    def test_quotes_are_not_emitted(self):
        assert CSVParser.parse_row('"title","description"') == ["title", "description"]

    def test_empty_line(self):
        assert CSVParser.parse_row("") == [""]

    def test_trailing_comma_gives_empty_field(self):
        assert CSVParser.parse_row("a,b,") == ["a", "b", ""]

    def test_unbalanced_quote_swallows_rest_of_line(self):
        assert CSVParser.parse_row('a,"b,c,d') == ["a", "b,c,d"]

    def test_doubled_quotes_are_not_unescaped(self):
        # "" alterna due volte la modalità quotata: nessuna virgoletta nel valore
        assert CSVParser.parse_row('"say ""hi"""') == ["say hi"]


class TestDecode:

    def test_utf8_bom_is_stripped(self):
        assert CSVParser.decode("\ufefftitle\nA".encode("utf-8")) == "title\nA"

    def test_latin1_fallback(self):
        assert CSVParser.decode("Pulizia riunito è".encode("latin-1")) == "Pulizia riunito è"

    def test_any_byte_sequence_decodes(self):
        content = bytes(range(256))
        assert CSVParser.decode(content) == content.decode("latin-1")

    def test_text_passthrough(self):
        assert CSVParser.decode("title") == "title"


class TestLinesAndHeaders:

    def test_blank_lines_are_dropped(self):
        assert CSVParser.split_lines("title\n\n  \nTask A\n") == ["title", "Task A"]

    def test_headers_are_lowercased(self):
        assert CSVParser.parse_headers('"Title", Due-Type ,OWNER_NOTES') == ["title", "due-type", "owner_notes"]

    @pytest.mark.parametrize("value,expected", [
        ('"quoted"', "quoted"),
        ("  padded  ", "padded"),
        ('mid"dle', "middle"),
    ])
    def test_clean_value(self, value, expected):
        assert CSVParser.clean_value(value) == expected
