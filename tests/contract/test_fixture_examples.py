from __future__ import annotations

from pathlib import Path

from cukes.core import features
from cukes.core.text import is_palindrome, reverse

BASIC = Path(__file__).resolve().parents[2] / "specs" / "bdd" / "basic.feature"


def _scenario(name: str) -> features.ScenarioDoc:
    doc = features.load_feature(BASIC)
    (sc,) = [s for s in doc.scenarios if s.name == name]
    return sc


def test_fizz_examples_table_is_exactly_the_documented_rows() -> None:
    (table,) = _scenario("fizz").examples
    assert table.header == ["key", "reverse_key"]
    assert table.rows == [["name", "eman"], ["otto", "otto"]]


def test_every_reverse_key_is_the_reversal_of_its_key() -> None:
    for row in features.example_rows(_scenario("fizz")):
        assert reverse(row["key"]) == row["reverse_key"]


def test_otto_row_is_the_palindrome_boundary() -> None:
    rows = features.example_rows(_scenario("fizz"))
    assert [is_palindrome(r["key"]) for r in rows] == [False, True]


def test_fizz_docstring_is_templated_from_the_row() -> None:
    sc = _scenario("fizz")
    (doc_step,) = [s for s in sc.steps if s.docstring is not None]
    rendered = [features.interpolate(doc_step.docstring, r) for r in features.example_rows(sc)]
    assert rendered == ["the reverse of name is eman", "the reverse of otto is otto"]


def test_rule_groups_its_scenario() -> None:
    assert _scenario("a scenario inside a rule").rule == "A rule"
    assert {s.rule for s in features.load_feature(BASIC).scenarios if s.name in {"foo", "bar", "fizz"}} == {None}
