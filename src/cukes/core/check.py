from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from cukes.core import text
from cukes.core.features import FeatureDoc, ScenarioDoc, StepDoc, example_rows, interpolate

DEFAULT_KEY_COLUMN = "key"
DEFAULT_REVERSE_COLUMN = "reverse_key"
TABLE_STEP_SUFFIX = "makes sense:"


@dataclass
class CheckReport:
    checked: List[Dict[str, Any]] = field(default_factory=list)
    failures: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def merge(self, other: "CheckReport") -> None:
        self.checked.extend(other.checked)
        self.failures.extend(other.failures)


def _where(doc: FeatureDoc, sc: ScenarioDoc | None) -> Dict[str, Any]:
    if sc is None:
        return {"feature": doc.name, "path": str(doc.path), "rule": None, "scenario": None, "background": True}
    return {"feature": doc.name, "path": str(doc.path), "rule": sc.rule, "scenario": sc.name}


def _check_docstring(report: CheckReport, where: Dict[str, Any], step: StepDoc, rendered: str) -> None:
    try:
        subject, stated = text.parse_reverse_sentence(rendered)
    except ValueError:
        return
    entry = {**where, "step": step.text, "subject": subject, "claimed": stated}
    report.checked.append(entry)
    if text.reverse(subject) != stated:
        report.failures.append({**entry, "reason": f"docstring claims reverse of {subject!r} is {stated!r}"})


def _check_outline(doc: FeatureDoc, sc: ScenarioDoc, key_column: str, reverse_column: str) -> CheckReport:
    report = CheckReport()
    for i, row in enumerate(example_rows(sc)):
        if key_column not in row or reverse_column not in row:
            continue
        key, claimed = row[key_column], row[reverse_column]
        entry = {**_where(doc, sc), "row": i, "key": key, "reverse_key": claimed}
        report.checked.append({**entry, "palindrome": text.is_palindrome(key)})
        if text.reverse(key) != claimed:
            report.failures.append({**entry, "reason": f"reverse of {key!r} is {text.reverse(key)!r}"})

        for step in sc.steps:
            if step.docstring is not None:
                _check_docstring(report, {**_where(doc, sc), "row": i}, step, interpolate(step.docstring, row))
    return report


def _check_steps(doc: FeatureDoc, sc: ScenarioDoc | None, steps: Iterable[StepDoc]) -> CheckReport:
    report = CheckReport()
    for step in steps:
        if step.docstring is not None:
            _check_docstring(report, _where(doc, sc), step, step.docstring)
    return report


def _check_tables(doc: FeatureDoc, sc: ScenarioDoc) -> CheckReport:
    report = CheckReport()
    for step in sc.steps:
        if step.table is None or not step.text.endswith(TABLE_STEP_SUFFIX):
            continue
        for miss in text.table_mismatches(step.table):
            report.failures.append({**_where(doc, sc), "step": step.text, **miss})
        report.checked.append({**_where(doc, sc), "step": step.text, "rows": len(step.table)})
    return report


def check_feature(
    doc: FeatureDoc,
    scenarios: Iterable[ScenarioDoc] | None = None,
    *,
    key_column: str = DEFAULT_KEY_COLUMN,
    reverse_column: str = DEFAULT_REVERSE_COLUMN,
) -> CheckReport:
    """Verify reversal claims in a feature's example rows, docstrings and tables.

    Background steps are checked once per feature, and only when at least one scenario is selected.
    """
    selected = list(doc.scenarios if scenarios is None else scenarios)
    report = CheckReport()
    if selected:
        report.merge(_check_steps(doc, None, doc.background))
    for sc in selected:
        if sc.is_outline:
            report.merge(_check_outline(doc, sc, key_column, reverse_column))
        else:
            report.merge(_check_steps(doc, sc, sc.steps))
        report.merge(_check_tables(doc, sc))
    return report
