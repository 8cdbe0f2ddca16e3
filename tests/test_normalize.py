"""Tests for text normalization of extracted text."""

from rsvp_reader.core.normalize import (
    clean_pdf_artifacts,
    fix_ocr_errors,
    normalize_quotes,
    normalize_special_chars,
    normalize_text,
    normalize_whitespace,
)
from rsvp_reader.core.tokenizer import tokenize


class TestQuotesAndSpecialChars:
    def test_curly_quotes(self):
        assert normalize_quotes("“It’s”") == "\"It's\""

    def test_dashes_and_ellipsis(self):
        assert normalize_special_chars("a—b–c…") == "a-b-c..."

    def test_zero_width_removed(self):
        assert normalize_special_chars("in\u200bvisible\ufeff") == "invisible"


class TestPdfAndOcr:
    def test_page_furniture(self):
        text = "First line\n12\nPage 3 of 10\n----------\n• Bullet"
        cleaned = clean_pdf_artifacts(text)
        assert "12" not in cleaned
        assert "Page 3 of 10" not in cleaned
        assert "-----" not in cleaned
        assert "Bullet" in cleaned
        assert "•" not in cleaned

    def test_ocr_fixes(self):
        assert fix_ocr_errors("l think | am") == "I think  am"
        assert fix_ocr_errors("the rn key") == "the m key"

    def test_ocr_leaves_words_alone(self):
        assert fix_ocr_errors("learn modern") == "learn modern"


class TestWhitespace:
    def test_collapses_runs(self):
        assert normalize_whitespace("a  \t b") == "a b"

    def test_keeps_paragraph_breaks(self):
        assert normalize_whitespace("one  \n\n\n\n  two") == "one\n\ntwo"

    def test_crlf(self):
        assert normalize_whitespace("one\r\n\r\ntwo") == "one\n\ntwo"


class TestNormalizeText:
    def test_empty(self):
        assert normalize_text("") == ""

    def test_pipeline_keeps_paragraphs_for_tokenizer(self):
        raw = "“Hello”   world.\r\n\r\n\r\nNext   part"
        tokens = tokenize(normalize_text(raw))
        assert [t.word for t in tokens] == ['"Hello"', "world.", "Next", "part"]
        assert tokens[1].is_end_of_paragraph is True

    def test_flags_opt_in(self):
        raw = "l saw it\n7\nend"
        assert normalize_text(raw) == raw
        assert normalize_text(raw, is_ocr=True, is_pdf=True) == "I saw it\n\nend"
