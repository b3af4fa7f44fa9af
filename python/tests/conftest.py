"""Pytest configuration and fixtures."""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from eijiro.schema import Complement, Example, Explanation, Field


def new_field(ident, exp, exp_coms=(), examples=()):
    """Helper to build a Field from plain strings."""
    return Field(
        ident=ident,
        explanation=Explanation(exp, tuple(Complement(c) for c in exp_coms)),
        examples=tuple(
            Example(s, tuple(Complement(c) for c in coms))
            for s, coms in examples
        ),
    )


@pytest.fixture
def sample_corpus():
    """Small corpus with repeated headwords and examples."""
    return (
        "■selfie {名} : 〈話〉セルフィー、自撮り（の）写真◆自分で撮影した自分の写真◆【複】selfies\n"
        "■awkward silence {2} : 気まずい沈黙状態◆「誰もしゃべらない状態」を表す。不可算。■・We stared at each other in awkward silence. 私たちは、気まずいムードで黙って顔を見合わせました。\n"
        "■apple {名} : リンゴ\n"
        "■awkward silence {1} : 《an ～》気まずい［ぎこちない］沈黙\n"
        "■apply {動} : 申し込む■・Apply now. 今すぐ申し込んで。\n"
        "■xxx : aaa◆bbb◆ccc■ddd◆eee■fff\n"
    )


@pytest.fixture
def sample_words():
    """Headwords for fuzzy lookup tests."""
    return [
        "ape", "aple", "apple", "apple pie", "applet", "apply", "bapple",
        "maple", "Zebra", "日本", "日本語", "にほん",
    ]
