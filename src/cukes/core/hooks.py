from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List

HookFn = Callable[[str, set[str], Any], None]


def _norm(tag: str) -> str:
    return tag.strip().lstrip("@")


def _parse_rule(rule: str) -> List[List[tuple[str, bool]]]:
    """Split a tag rule into OR-groups of (tag, negated) terms.

    `and` binds tighter than `or`; adjacent tags without an operator are and-ed.
    """
    groups: List[List[tuple[str, bool]]] = [[]]
    negate = False
    expect_term = True
    for token in rule.split():
        word = token.lower()
        if word in {"and", "or"}:
            if expect_term:
                raise ValueError(f"Dangling operator in tag rule: {rule!r}")
            if word == "or":
                groups.append([])
            expect_term = True
        elif word == "not":
            negate = not negate
            expect_term = True
        else:
            if "(" in token or ")" in token:
                raise ValueError(f"Parentheses are not supported in tag rules: {rule!r}")
            name = _norm(token)
            if not name:
                raise ValueError(f"Empty tag in rule: {rule!r}")
            groups[-1].append((name, negate))
            negate = False
            expect_term = False
    if expect_term:
        raise ValueError(f"Dangling operator in tag rule: {rule!r}")
    return groups


def _validate_rule(rule: str) -> None:
    if rule.strip():
        _parse_rule(rule)


def tag_rule_applies(tags: Iterable[str], rule: str) -> bool:
    if not rule.strip():
        return True
    present = {_norm(t) for t in tags}
    for group in _parse_rule(rule):
        if all((name in present) != negated for name, negated in group):
            return True
    return False


@dataclass(frozen=True)
class Hook:
    rule: str
    fn: HookFn


class HookRegistry:
    """Before/after scenario callbacks filtered by tag rule."""

    def __init__(self) -> None:
        self._before: List[Hook] = []
        self._after: List[Hook] = []

    def before(self, rule: str = "") -> Callable[[HookFn], HookFn]:
        _validate_rule(rule)

        def register(fn: HookFn) -> HookFn:
            self._before.append(Hook(rule=rule, fn=fn))
            return fn

        return register

    def after(self, rule: str = "") -> Callable[[HookFn], HookFn]:
        _validate_rule(rule)

        def register(fn: HookFn) -> HookFn:
            self._after.append(Hook(rule=rule, fn=fn))
            return fn

        return register

    def run_before(self, scenario_name: str, tags: Iterable[str], world: Any) -> int:
        return self._run(self._before, scenario_name, tags, world)

    def run_after(self, scenario_name: str, tags: Iterable[str], world: Any) -> int:
        return self._run(self._after, scenario_name, tags, world)

    @staticmethod
    def _run(hooks: List[Hook], scenario_name: str, tags: Iterable[str], world: Any) -> int:
        tag_set = {_norm(t) for t in tags}
        ran = 0
        for hook in hooks:
            if tag_rule_applies(tag_set, hook.rule):
                hook.fn(scenario_name, tag_set, world)
                ran += 1
        return ran
