from __future__ import annotations

import re
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from gherkin.errors import ParserError
from gherkin.parser import Parser
from gherkin.token_scanner import TokenScanner

from cukes.core.hooks import tag_rule_applies

_PLACEHOLDER_RE = re.compile(r"<([^<>]+)>")


class FeatureParseError(ValueError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot parse feature file {path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class StepDoc:
    keyword: str
    text: str
    docstring: Optional[str] = None
    table: Optional[List[List[str]]] = None


@dataclass(frozen=True)
class ExampleTable:
    header: List[str]
    rows: List[List[str]]
    tags: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ScenarioDoc:
    name: str
    keyword: str
    line: int
    steps: List[StepDoc]
    tags: List[str] = field(default_factory=list)
    rule: Optional[str] = None
    examples: List[ExampleTable] = field(default_factory=list)

    @property
    def is_outline(self) -> bool:
        return bool(self.examples)


@dataclass(frozen=True)
class FeatureDoc:
    path: Path
    name: str
    tags: List[str]
    background: List[StepDoc]
    scenarios: List[ScenarioDoc]
    rules: List[str] = field(default_factory=list)


def discover(root: Path, pattern: str = "*.feature") -> List[Path]:
    """Return feature files under `root`, recursively, sorted.

    File names are matched case-insensitively.
    """
    if not root.is_dir():
        raise FileNotFoundError(f"Feature directory not found: {root}")
    lowered = pattern.lower()
    return sorted(p for p in root.rglob("*") if p.is_file() and fnmatch(p.name.lower(), lowered))


def _tag_names(node: Dict[str, Any]) -> List[str]:
    return [t["name"] for t in node.get("tags", [])]


def _cells(row: Dict[str, Any]) -> List[str]:
    return [c["value"] for c in row.get("cells", [])]


def _step(node: Dict[str, Any]) -> StepDoc:
    doc = node.get("docString")
    table = node.get("dataTable")
    return StepDoc(
        keyword=node["keyword"].strip(),
        text=node["text"],
        docstring=doc["content"] if doc else None,
        table=[_cells(r) for r in table["rows"]] if table else None,
    )


def _examples(node: Dict[str, Any]) -> List[ExampleTable]:
    out: List[ExampleTable] = []
    for ex in node.get("examples", []):
        header = ex.get("tableHeader")
        if not header:
            continue
        out.append(
            ExampleTable(
                header=_cells(header),
                rows=[_cells(r) for r in ex.get("tableBody", [])],
                tags=_tag_names(ex),
            )
        )
    return out


def _scenario(node: Dict[str, Any], *, inherited: List[str], rule: Optional[str]) -> ScenarioDoc:
    return ScenarioDoc(
        name=node["name"],
        keyword=node["keyword"],
        line=node["location"]["line"],
        steps=[_step(s) for s in node.get("steps", [])],
        tags=inherited + [t for t in _tag_names(node) if t not in inherited],
        rule=rule,
        examples=_examples(node),
    )


def parse_feature(text: str, path: Path) -> FeatureDoc:
    try:
        doc = Parser().parse(TokenScanner(text))
    except ParserError as exc:
        raise FeatureParseError(path, str(exc)) from exc
    feature = doc.get("feature")
    if not feature:
        raise FeatureParseError(path, "no Feature block")

    feature_tags = _tag_names(feature)
    background: List[StepDoc] = []
    top: List[ScenarioDoc] = []
    ruled: List[ScenarioDoc] = []
    rules: List[str] = []

    for child in feature.get("children", []):
        if "background" in child:
            background.extend(_step(s) for s in child["background"].get("steps", []))
        elif "scenario" in child:
            top.append(_scenario(child["scenario"], inherited=feature_tags, rule=None))
        elif "rule" in child:
            rule = child["rule"]
            rules.append(rule["name"])
            rule_tags = feature_tags + [t for t in _tag_names(rule) if t not in feature_tags]
            for sub in rule.get("children", []):
                if "scenario" in sub:
                    ruled.append(_scenario(sub["scenario"], inherited=rule_tags, rule=rule["name"]))

    return FeatureDoc(
        path=path,
        name=feature["name"],
        tags=feature_tags,
        background=background,
        scenarios=top + ruled,
        rules=rules,
    )


def load_feature(path: Path) -> FeatureDoc:
    return parse_feature(path.read_text(encoding="utf-8"), path)


def interpolate(text: str, row: Dict[str, str]) -> str:
    """Substitute `<column>` placeholders with values from an example row.

    Placeholders without a matching column are left untouched.
    """
    return _PLACEHOLDER_RE.sub(lambda m: row.get(m.group(1), m.group(0)), text)


def example_rows(scenario: ScenarioDoc) -> List[Dict[str, str]]:
    rows: List[Dict[str, str]] = []
    for table in scenario.examples:
        rows.extend(dict(zip(table.header, r)) for r in table.rows)
    return rows


def select(
    scenarios: Iterable[ScenarioDoc],
    *,
    tag: str | None = None,
    name_filter: str | None = None,
) -> List[ScenarioDoc]:
    pattern = re.compile(name_filter) if name_filter else None
    out: List[ScenarioDoc] = []
    for sc in scenarios:
        if tag and not tag_rule_applies(sc.tags, tag):
            continue
        if pattern and not pattern.search(sc.name):
            continue
        out.append(sc)
    return out
