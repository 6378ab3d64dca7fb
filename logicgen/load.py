"""Loading rule documents from JSON/YAML text, files and directories."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Literal

import yaml

from logicgen.analysis import RuleSetAnalysis, analyze_ruleset
from logicgen.ast import Rule, RuleSet
from logicgen.decode import WRAPPED_RULESET_VERSION, DocumentSyntaxError, decode_document
from logicgen.diagnostics import (
    LOAD_NO_RULE_FILES,
    Diagnostic,
    collect_diagnostics,
    diagnostic_from_spec,
    has_errors,
)
from logicgen.lint import LintRunResult, run_lint
from logicgen.options import LoadOptions

logger = logging.getLogger(__name__)

type DocumentFormat = Literal["json", "yaml"]

MEMORY_SOURCE = "<memory>"

_FORMAT_BY_SUFFIX: dict[str, DocumentFormat] = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


@dataclass(frozen=True, slots=True)
class LoadedRuleFile:
    path: str
    ruleset: RuleSet


@dataclass(frozen=True, slots=True)
class LoadRulesResult:
    """Decoded rules plus the results of the optional lint and analysis passes."""

    ruleset: RuleSet
    files: tuple[LoadedRuleFile, ...]
    lint: LintRunResult | None
    analysis: RuleSetAnalysis | None
    diagnostics: list[Diagnostic]

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)


def parse_document_text(text: str, document_format: DocumentFormat, source_path: str = MEMORY_SOURCE) -> object:
    """Parse raw text into plain document values without decoding rules."""
    if document_format == "yaml":
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as error:
            raise DocumentSyntaxError(f"invalid YAML: {error}", source_path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        raise DocumentSyntaxError(
            f"invalid JSON: {error.msg} (line {error.lineno}, column {error.colno})",
            source_path,
        )


def load_rules_text(
    text: str,
    *,
    source_path: str = MEMORY_SOURCE,
    format: DocumentFormat | None = None,
    options: LoadOptions | None = None,
) -> LoadRulesResult:
    ruleset = _decode_text(text, source_path=source_path, document_format=format)
    return _finish(ruleset, (LoadedRuleFile(path=source_path, ruleset=ruleset),), options=options, extra=[])


def load_rules_file(path: str | Path, *, options: LoadOptions | None = None) -> LoadRulesResult:
    loaded = _load_file(Path(path))
    return _finish(loaded.ruleset, (loaded,), options=options, extra=[])


def load_rules_directory(
    root: str | Path,
    *,
    pattern: str = "**/*.json",
    options: LoadOptions | None = None,
) -> LoadRulesResult:
    root_path = Path(root)
    paths = sorted(path for path in root_path.glob(pattern) if path.is_file())
    return load_rules_paths(paths, options=options, source=str(root_path))


def load_rules_paths(
    paths: Iterable[str | Path],
    *,
    options: LoadOptions | None = None,
    source: str = "<paths>",
) -> LoadRulesResult:
    """Load every file and merge their rules, in sorted path order, into one rule set."""
    files = tuple(_load_file(path) for path in sorted(Path(path_like) for path_like in paths))
    extra: list[Diagnostic] = []
    if not files:
        logger.warning("No rule files found under %s", source)
        extra.append(diagnostic_from_spec(LOAD_NO_RULE_FILES, source))
    return _finish(merge_rulesets(loaded.ruleset for loaded in files), files, options=options, extra=extra)


def merge_rulesets(rulesets: Iterable[RuleSet]) -> RuleSet:
    """Concatenate rules; keeps the first package and the union of imports."""
    package = ""
    imports: list[str] = []
    rules: list[Rule] = []
    for ruleset in rulesets:
        if not package:
            package = ruleset.package
        for name in ruleset.imports:
            if name not in imports:
                imports.append(name)
        rules.extend(ruleset.rules)
    return RuleSet(
        version=WRAPPED_RULESET_VERSION,
        package=package,
        imports=tuple(imports),
        rules=tuple(rules),
    )


def _load_file(path: Path) -> LoadedRuleFile:
    document_format = _FORMAT_BY_SUFFIX.get(path.suffix.lower())
    if document_format is None:
        raise ValueError(f"Unsupported rule file `{path}`; expected one of {sorted(_FORMAT_BY_SUFFIX)}")
    logger.info("Loading rules from %s", path)
    text = path.read_text(encoding="utf-8")
    ruleset = _decode_text(text, source_path=str(path), document_format=document_format)
    logger.debug("Decoded %d rules from %s", len(ruleset.rules), path)
    return LoadedRuleFile(path=str(path), ruleset=ruleset)


def _decode_text(text: str, *, source_path: str, document_format: DocumentFormat | None) -> RuleSet:
    resolved_format = document_format or _FORMAT_BY_SUFFIX.get(Path(source_path).suffix.lower(), "json")
    document = parse_document_text(text, resolved_format, source_path)
    return decode_document(document)


def _finish(
    ruleset: RuleSet,
    files: tuple[LoadedRuleFile, ...],
    *,
    options: LoadOptions | None,
    extra: list[Diagnostic],
) -> LoadRulesResult:
    resolved = options if options is not None else LoadOptions()
    lint = run_lint(ruleset, options=resolved) if resolved.run_lint else None
    analysis = analyze_ruleset(ruleset) if resolved.run_analysis else None
    diagnostics = collect_diagnostics(
        extra,
        lint.diagnostics if lint is not None else (),
        analysis.diagnostics if analysis is not None else (),
    )
    return LoadRulesResult(
        ruleset=ruleset,
        files=files,
        lint=lint,
        analysis=analysis,
        diagnostics=diagnostics,
    )
