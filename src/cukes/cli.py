from __future__ import annotations

import re
from typing import List

import typer

from cukes.core import check as check_core, config as config_core, envelope, features, paths, text
from cukes.core.jsonio import dumps

__version__ = "0.1.0"

app = typer.Typer(add_completion=False, help="cukes - reversal feature suite tools")


def _emit(out: dict) -> None:
    typer.echo(dumps(out))
    if out.get("ok") is True:
        raise typer.Exit(code=0)
    raise typer.Exit(code=1)


# ---- Sub-apps (public CLI contract) ----
features_app = typer.Typer(add_completion=False, help="Inspect and check feature files")

app.add_typer(features_app, name="features")


# ---- Global commands ----
@app.command()
def version(json_output: bool = typer.Option(False, "--json", help="Output JSON envelope")):
    if json_output:
        _emit(envelope.ok(command="version", data={"version": __version__}))
    typer.echo(f"cukes {__version__}")


@app.command()
def reverse(
    value: str = typer.Argument(..., help="Text to reverse"),
    json_output: bool = typer.Option(True, "--json"),
):
    reversed_value = text.reverse(value)
    _emit(
        envelope.ok(
            command="reverse",
            data={"text": value, "reverse": reversed_value, "palindrome": reversed_value == value},
        )
    )


# -------------- features --------------
def _load_selected(
    command: str,
    *,
    directory: str | None,
    feature: str | None,
    tag: str | None,
    name_filter: str | None,
) -> List[tuple[features.FeatureDoc, List[features.ScenarioDoc]]]:
    """Load feature files and apply the tag/name filters.

    Emits an error envelope (and exits) on any failure.
    """
    details = {"dir": directory, "feature": feature, "tag": tag, "filter": name_filter}
    try:
        root = paths.features_dir(directory)
        details["dir"] = str(root)
        if name_filter:
            re.compile(name_filter)
        files = features.discover(root, paths.feature_pattern(feature))
        loaded = []
        for path in files:
            doc = features.load_feature(path)
            loaded.append((doc, features.select(doc.scenarios, tag=tag, name_filter=name_filter)))
    except re.error as exc:
        _emit(envelope.err(command=command, error_type="INVALID_ARGUMENT", message=f"Invalid --filter regex: {exc}", details=details))
    except FileNotFoundError as exc:
        _emit(envelope.err(command=command, error_type="NOT_FOUND", message=str(exc), details=details))
    except features.FeatureParseError as exc:
        _emit(
            envelope.err(
                command=command,
                error_type="PARSE_FAILED",
                message=str(exc),
                details={**details, "path": str(exc.path)},
            )
        )
    except ValueError as exc:
        _emit(envelope.err(command=command, error_type="INVALID_ARGUMENT", message=str(exc), details=details))
    return loaded


@features_app.command("list")
def features_list(
    directory: str | None = typer.Option(None, "--dir", help="Feature directory (default: specs/bdd)"),
    feature: str | None = typer.Option(None, "--feature", help="File name glob, e.g. basic*.feature"),
    tag: str | None = typer.Option(None, "--tag", help="Tag rule, e.g. '@hooked and not @xfail'"),
    name_filter: str | None = typer.Option(None, "--filter", help="Regex matched against scenario names"),
    json_output: bool = typer.Option(True, "--json"),
):
    loaded = _load_selected("features.list", directory=directory, feature=feature, tag=tag, name_filter=name_filter)
    out_features = []
    for doc, scenarios in loaded:
        out_features.append(
            {
                "name": doc.name,
                "path": str(doc.path),
                "tags": doc.tags,
                "rules": doc.rules,
                "background_steps": len(doc.background),
                "scenarios": [
                    {
                        "name": sc.name,
                        "keyword": sc.keyword,
                        "line": sc.line,
                        "rule": sc.rule,
                        "tags": sc.tags,
                        "steps": len(sc.steps),
                        "examples": len(features.example_rows(sc)),
                    }
                    for sc in scenarios
                ],
            }
        )
    _emit(
        envelope.ok(
            command="features.list",
            data={"features": out_features, "scenario_count": sum(len(f["scenarios"]) for f in out_features)},
        )
    )


@features_app.command("check")
def features_check(
    directory: str | None = typer.Option(None, "--dir", help="Feature directory (default: specs/bdd)"),
    feature: str | None = typer.Option(None, "--feature", help="File name glob, e.g. basic*.feature"),
    tag: str | None = typer.Option(None, "--tag", help="Tag rule, e.g. '@hooked and not @xfail'"),
    name_filter: str | None = typer.Option(None, "--filter", help="Regex matched against scenario names"),
    key_column: str | None = typer.Option(None, "--key-column"),
    reverse_column: str | None = typer.Option(None, "--reverse-column"),
    json_output: bool = typer.Option(True, "--json"),
):
    """Verify that every reversal claim in the example tables holds."""
    loaded = _load_selected("features.check", directory=directory, feature=feature, tag=tag, name_filter=name_filter)
    try:
        key_column = key_column or config_core.get_config_str(
            "check", "key_column", default=check_core.DEFAULT_KEY_COLUMN
        )
        reverse_column = reverse_column or config_core.get_config_str(
            "check", "reverse_column", default=check_core.DEFAULT_REVERSE_COLUMN
        )
    except ValueError as exc:
        _emit(
            envelope.err(
                command="features.check",
                error_type="INVALID_ARGUMENT",
                message=str(exc),
                details={"config_path": str(config_core.config_path())},
            )
        )

    report = check_core.CheckReport()
    for doc, scenarios in loaded:
        report.merge(check_core.check_feature(doc, scenarios, key_column=key_column, reverse_column=reverse_column))

    columns = {"key_column": key_column, "reverse_column": reverse_column}
    if report.ok:
        _emit(
            envelope.ok(
                command="features.check",
                data={"features": len(loaded), "checked": report.checked, **columns},
            )
        )
    _emit(
        envelope.err(
            command="features.check",
            error_type="CHECK_FAILED",
            message=f"{len(report.failures)} reversal claim(s) do not hold",
            details={"failures": report.failures, "checked": report.checked, **columns},
        )
    )


if __name__ == "__main__":
    app()
