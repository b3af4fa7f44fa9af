"""Tests for the schema module."""

import pytest

from eijiro.fst import Map
from eijiro.schema import Complement, Dictionary, Example, Explanation, Field
from conftest import new_field


class TestComplement:
    """Tests for Complement dataclass."""

    def test_frozen(self):
        """Test that complements are immutable."""
        c = Complement("【参考】autocomplete")
        with pytest.raises(AttributeError):
            c.body = "other"

    def test_dict_roundtrip(self):
        """Test Complement to_dict/from_dict."""
        c = Complement("【複】selfies")
        assert Complement.from_dict(c.to_dict()) == c


class TestField:
    """Tests for Field ordering and serialization."""

    def test_absent_ident_sorts_first(self):
        """Test that a Field without ident sorts before any ident."""
        no_ident = new_field(None, "zzz")
        with_ident = new_field("1", "aaa")
        assert no_ident.sort_key() < with_ident.sort_key()

    def test_ident_before_explanation(self):
        """Test that ident is compared before explanation."""
        a = new_field("名", "aaa")
        b = new_field("動", "zzz")
        # 動 (U+52D5) < 名 (U+540D)
        assert b.sort_key() < a.sort_key()

    def test_explanation_before_examples(self):
        """Test that explanation is compared before examples."""
        a = new_field(None, "aaa", examples=[("zzz", [])])
        b = new_field(None, "bbb")
        assert a.sort_key() < b.sort_key()

    def test_complements_compared(self):
        """Test that complements break ties on equal bodies."""
        a = new_field(None, "aaa", ["x"])
        b = new_field(None, "aaa", ["y"])
        c = new_field(None, "aaa")
        assert c.sort_key() < a.sort_key() < b.sort_key()

    def test_structural_equality(self):
        """Test that equal content means equal Fields."""
        assert new_field("1", "a", ["b"], [("c", ["d"])]) == new_field(
            "1", "a", ["b"], [("c", ["d"])]
        )

    def test_to_dict(self):
        """Test Field serialization."""
        f = new_field("名", "リンゴ", ["fruit"], [("An apple.", ["ex"])])
        d = f.to_dict()
        assert d["ident"] == "名"
        assert d["explanation"] == {"body": "リンゴ", "complements": ["fruit"]}
        assert d["examples"] == [{"sentence": "An apple.", "complements": ["ex"]}]

    def test_from_dict(self):
        """Test Field deserialization."""
        data = {
            "ident": None,
            "explanation": {"body": "aaa", "complements": ["bbb", "ccc"]},
            "examples": [
                {"sentence": "ddd", "complements": ["eee"]},
                {"sentence": "fff"},
            ],
        }
        f = Field.from_dict(data)
        assert f.ident is None
        assert f.explanation == Explanation("aaa", (Complement("bbb"), Complement("ccc")))
        assert f.examples == (
            Example("ddd", (Complement("eee"),)),
            Example("fff"),
        )


class TestDictionary:
    """Tests for Dictionary accessors."""

    def make_dictionary(self):
        groups = (
            (new_field(None, "x"),),
            (new_field("1", "y"), new_field("2", "z")),
        )
        index = Map.from_items([("apple", 0), ("run", 1)])
        return Dictionary(index=index, groups=groups)

    def test_len_and_contains(self):
        """Test headword count and membership."""
        d = self.make_dictionary()
        assert len(d) == 2
        assert "run" in d
        assert "walk" not in d

    def test_get(self):
        """Test group retrieval by headword."""
        d = self.make_dictionary()
        assert [f.ident for f in d.get("run")] == ["1", "2"]
        assert d.get("walk") is None

    def test_items_sorted(self):
        """Test that items come in headword order."""
        d = self.make_dictionary()
        assert [h for h, _ in d.items()] == ["apple", "run"]
        assert d.headwords() == ["apple", "run"]

    def test_count_fields(self):
        """Test total field count."""
        assert self.make_dictionary().count_fields() == 3

    def test_to_dict(self):
        """Test Dictionary serialization."""
        data = self.make_dictionary().to_dict()
        assert data["headword_count"] == 2
        assert data["field_count"] == 3
        assert list(data["entries"]) == ["apple", "run"]
        assert data["entries"]["run"][1]["explanation"]["body"] == "z"
