"""Tests for the ingest module."""

import pytest

from eijiro.errors import MalformedEntry
from eijiro.ingest import (
    FieldGrammar,
    default_grammar,
    iter_entries,
    parse_field,
    read_corpus,
    split_lines,
)
from conftest import new_field


class TestParseField:
    """Tests for the field grammar on real Eijiro lines."""

    def test_ident_and_complement(self):
        """Test a line with ident and one complement."""
        s = "■autocompletion {名} : 《コ》〔入力文字の〕自動補完、オートコンプリート◆【参考】autocomplete"
        headword, field = parse_field(s)
        assert headword == "autocompletion"
        assert field == new_field(
            "名",
            "《コ》〔入力文字の〕自動補完、オートコンプリート",
            ["【参考】autocomplete"],
        )

    def test_two_complements(self):
        """Test a line with two complements."""
        s = "■selfie {名} : 〈話〉セルフィー、自撮り（の）写真◆自分で撮影した自分の写真◆【複】selfies"
        headword, field = parse_field(s)
        assert headword == "selfie"
        assert field == new_field(
            "名",
            "〈話〉セルフィー、自撮り（の）写真",
            ["自分で撮影した自分の写真", "【複】selfies"],
        )

    def test_multiword_headword_with_examples(self):
        """Test a multi-word headword followed by two examples."""
        s = (
            "■awkward silence {1} : 《an ～》気まずい［ぎこちない］沈黙"
            "◆「会話が不自然に途切れた気まずい時間」を指す。1回・2回と数えられるので可算。"
            "■・There was an awkward silence for a few seconds. 数秒間の気まずい沈黙がありました。"
            "■・There was an awkward silence for a moment. ちょっとの間、気まずい沈黙がありました。／一瞬、微妙な空気が流れた。"
        )
        headword, field = parse_field(s)
        assert headword == "awkward silence"
        assert field == new_field(
            "1",
            "《an ～》気まずい［ぎこちない］沈黙",
            ["「会話が不自然に途切れた気まずい時間」を指す。1回・2回と数えられるので可算。"],
            [
                ("・There was an awkward silence for a few seconds. 数秒間の気まずい沈黙がありました。", []),
                ("・There was an awkward silence for a moment. ちょっとの間、気まずい沈黙がありました。／一瞬、微妙な空気が流れた。", []),
            ],
        )

    def test_example_complements(self):
        """Test complements attached to examples."""
        headword, field = parse_field("■xxx : aaa◆bbb◆ccc■ddd◆eee■fff")
        assert headword == "xxx"
        assert field == new_field(
            None, "aaa", ["bbb", "ccc"], [("ddd", ["eee"]), ("fff", [])]
        )

    def test_no_ident(self):
        """Test a line without ident."""
        headword, field = parse_field("■apple : リンゴ")
        assert headword == "apple"
        assert field.ident is None
        assert field.explanation.body == "リンゴ"
        assert field.explanation.complements == ()
        assert field.examples == ()

    def test_empty_explanation(self):
        """Test that the explanation body may be empty."""
        headword, field = parse_field("■xxx : ◆note")
        assert headword == "xxx"
        assert field.explanation.body == ""
        assert [c.body for c in field.explanation.complements] == ["note"]

    def test_examples_without_complements(self):
        """Test examples directly after the explanation."""
        _, field = parse_field("■go {動} : 行く■Go away.■Go home.")
        assert [e.sentence for e in field.examples] == ["Go away.", "Go home."]
        assert all(e.complements == () for e in field.examples)

    def test_counts_match_markers(self):
        """Test that counts follow marker occurrences."""
        _, field = parse_field("■w : e◆c1◆c2◆c3■s1◆x■s2■s3◆y◆z")
        assert len(field.explanation.complements) == 3
        assert len(field.examples) == 3
        assert [len(e.complements) for e in field.examples] == [1, 0, 2]

    @pytest.mark.parametrize("line", [
        "",
        "xxx : aaa",
        "■xxx aaa",
        "■xxx: aaa",
        "■ : aaa",
    ])
    def test_malformed(self, line):
        """Test lines that do not match the field grammar."""
        with pytest.raises(MalformedEntry) as exc:
            parse_field(line)
        assert exc.value.line is None
        assert exc.value.text == line


class TestFieldGrammar:
    """Tests for FieldGrammar construction."""

    def test_default_grammar_is_shared(self):
        """Test that the default grammar is built once."""
        assert default_grammar() is default_grammar()

    def test_custom_markers(self):
        """Test a grammar with other marker characters."""
        grammar = FieldGrammar(entry_marker="#", complement_marker="+")
        headword, field = grammar.parse_field("#xxx {n} : aaa+bbb#ddd+eee")
        assert headword == "xxx"
        assert field == new_field("n", "aaa", ["bbb"], [("ddd", ["eee"])])

    def test_custom_markers_passed_to_parse_field(self):
        """Test the grammar argument of parse_field."""
        grammar = FieldGrammar(entry_marker="*", complement_marker="|")
        headword, _ = parse_field("*abc : def", grammar)
        assert headword == "abc"

    def test_invalid_markers(self):
        """Test marker validation."""
        with pytest.raises(ValueError):
            FieldGrammar(entry_marker="■■")
        with pytest.raises(ValueError):
            FieldGrammar(entry_marker="■", complement_marker="■")


class TestCorpus:
    """Tests for corpus splitting and line annotation."""

    def test_split_lines(self):
        """Test line splitting rules."""
        assert split_lines("") == []
        assert split_lines("a\nb\n") == ["a", "b"]
        assert split_lines("a\r\nb\r\n") == ["a", "b"]
        assert split_lines("a\n\nb") == ["a", "", "b"]

    def test_iter_entries(self, sample_corpus):
        """Test that every line yields one entry in order."""
        entries = list(iter_entries(sample_corpus))
        assert len(entries) == 6
        assert [e.origin_order for e in entries] == list(range(6))
        assert entries[0].headword == "selfie"
        assert entries[-1].headword == "xxx"

    def test_malformed_line_number(self):
        """Test that errors carry the 1-based line number."""
        text = "■a : x\n■b : y\nnot an entry\n■c : z\n"
        with pytest.raises(MalformedEntry) as exc:
            list(iter_entries(text))
        assert exc.value.line == 3
        assert exc.value.text == "not an entry"
        assert "line 3" in str(exc.value)

    def test_blank_line_is_malformed(self):
        """Test that an empty line in the middle fails."""
        with pytest.raises(MalformedEntry) as exc:
            list(iter_entries("■a : x\n\n■b : y"))
        assert exc.value.line == 2

    def test_read_corpus(self, tmp_path, sample_corpus):
        """Test reading a corpus file."""
        path = tmp_path / "EIJIRO.txt"
        path.write_text(sample_corpus, encoding="utf-8")
        assert read_corpus(path) == sample_corpus

    def test_read_corpus_encoding(self, tmp_path):
        """Test reading a Shift_JIS corpus."""
        path = tmp_path / "EIJIRO.txt"
        path.write_bytes("■apple {名} : リンゴ\r\n".encode("cp932"))
        text = read_corpus(path, encoding="cp932")
        assert [e.headword for e in iter_entries(text)] == ["apple"]
