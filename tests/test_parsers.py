# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for stdout parsing and stderr failure classification."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from ansible_lint_adapter.models import Range
from ansible_lint_adapter.parsers import (
    DEFAULT_MATCHER_TABLE,
    ClassificationKind,
    FailureMatcher,
    LintContext,
    MatcherTable,
    classify_failure,
    parse_stdout,
)
from ansible_lint_adapter.parsers.stderr import (
    ANSIBLE_SYNTAX_MESSAGE,
    STDIN_FILE_LABEL,
    STDIN_MESSAGE,
    VAULT_MESSAGE,
    YAML_SYNTAX_MESSAGE,
)
from ansible_lint_adapter.severity import Severity

CONTEXT = LintContext(target_file=Path("/work/site.yml"), working_directory=Path("/work"))


def test_stdout_finding_on_target_file() -> None:
    stdout = "/work/site.yml:3: [E301] Commands should not change things if nothing needs doing\n"
    (diagnostic,) = parse_stdout(stdout, CONTEXT)
    assert diagnostic.severity is Severity.WARNING
    assert diagnostic.file == "/work/site.yml"
    assert diagnostic.code == "E301"
    assert diagnostic.excerpt == "Commands should not change things if nothing needs doing"
    assert diagnostic.range.as_list() == [[2, 0], [2, 1]]


def test_stdout_included_file_is_resolved_against_working_directory() -> None:
    stdout = "roles/web/tasks/main.yml:7: [E403] Package installs should not use latest"
    (diagnostic,) = parse_stdout(stdout, CONTEXT)
    assert diagnostic.file == "/work/roles/web/tasks/main.yml"
    assert diagnostic.range.start.line == 6


def test_stdout_line_containing_target_path_stays_on_target() -> None:
    (diagnostic,) = parse_stdout("./work/site.yml:3: [E301] Commands should not change things", CONTEXT)
    assert diagnostic.file == "/work/site.yml"
    assert diagnostic.range.start.line == 2


def test_stdout_ignores_unrecognised_lines_and_handles_crlf() -> None:
    stdout = (
        "Loading custom rules\r\n"
        "/work/site.yml:1: [E101] first\r\n"
        "\r\n"
        "Couldn't find anything useful here\r\n"
        "/work/site.yml:9: [E201] second\r\n"
    )
    diagnostics = parse_stdout(stdout, CONTEXT)
    assert [d.excerpt for d in diagnostics] == ["first", "second"]
    assert [d.range.start.line for d in diagnostics] == [0, 8]


def test_stdout_rule_names_and_severity_tags() -> None:
    stdout = (
        "/work/site.yml:4: [risky-file-permissions] File permissions unset or incorrect\n"
        "/work/site.yml:5: [E301] [HIGH] Commands should not change things\n"
    )
    first, second = parse_stdout(stdout, CONTEXT)
    assert first.code == "risky-file-permissions"
    assert second.code == "E301"
    assert second.excerpt == "[HIGH] Commands should not change things"


def test_stdout_parse_is_repeatable() -> None:
    stdout = "/work/site.yml:2: [E502] All tasks should be named"
    assert parse_stdout(stdout, CONTEXT) == parse_stdout(stdout, CONTEXT)


def test_empty_stdout_has_no_findings() -> None:
    assert parse_stdout("", CONTEXT) == []


def test_missing_file() -> None:
    result = classify_failure("WARNING: Couldn't open /a/b.yml - No such file or directory", CONTEXT)
    assert result.kind is ClassificationKind.DIAGNOSTIC
    assert result.rule == "missing-file"
    (diagnostic,) = result.diagnostics
    assert diagnostic.severity is Severity.ERROR
    assert diagnostic.excerpt == "Missing file /a/b.yml. Please fix before continuing linter use."
    assert diagnostic.file == "/work/site.yml"
    assert diagnostic.range == Range.file_start()


@pytest.mark.parametrize(
    ("text", "path"),
    [
        ("ERROR! the file_name /a/vars.yml does not exist, or is not readable", "/a/vars.yml"),
        ("ERROR! Could not find or access 'roles/web/tasks/main.yml'", "roles/web/tasks/main.yml"),
        ("ERROR! An error occurred while trying to read the file '/a/inc.yml': denied", "/a/inc.yml"),
    ],
)
def test_unreadable_file_variants(text: str, path: str) -> None:
    (diagnostic,) = classify_failure(text, CONTEXT).diagnostics
    assert diagnostic.excerpt == f"{path} is unreadable or not a file. Please fix before continuing linter use."
    assert diagnostic.severity is Severity.ERROR
    assert diagnostic.file == "/work/site.yml"


def test_yaml_syntax_error_location() -> None:
    text = (
        "Syntax Error while loading YAML.\n"
        "  did not find expected key\n\n"
        "The error appears to be in '/work/roles/web/tasks/main.yml': line 3, column 5, but may\n"
    )
    result = classify_failure(text, CONTEXT)
    assert result.rule == "yaml-syntax"
    (diagnostic,) = result.diagnostics
    assert diagnostic.excerpt == YAML_SYNTAX_MESSAGE
    assert diagnostic.file == "/work/roles/web/tasks/main.yml"
    assert diagnostic.range.as_list() == [[2, 4], [2, 5]]


def test_yaml_syntax_error_without_location_falls_back_to_target() -> None:
    (diagnostic,) = classify_failure("Syntax Error while loading YAML.", CONTEXT).diagnostics
    assert diagnostic.file == "/work/site.yml"
    assert diagnostic.range == Range.file_start()


def test_yaml_error_takes_priority_over_vault() -> None:
    text = "Syntax Error while loading YAML.\nA vault password must be specified to decrypt data"
    assert classify_failure(text, CONTEXT).rule == "yaml-syntax"


def test_ansible_syntax_error_uses_task_message() -> None:
    text = "ERROR! Couldn't parse task at /work/tasks/main.yml:12 (no action detected in task)"
    (diagnostic,) = classify_failure(text, CONTEXT).diagnostics
    assert diagnostic.excerpt == "(no action detected in task)"
    assert diagnostic.file == "/work/site.yml"
    assert diagnostic.range.as_list() == [[0, 0], [0, 1]]


def test_ansible_syntax_error_generic_message() -> None:
    text = "Traceback (most recent call last):\nAttributeError: 'NoneType' object has no attribute 'get'"
    result = classify_failure(text, CONTEXT)
    assert result.rule == "ansible-syntax"
    assert result.diagnostics[0].excerpt == ANSIBLE_SYNTAX_MESSAGE


def test_vault_encrypted_file_is_informational() -> None:
    (diagnostic,) = classify_failure("ERROR! A vault password must be specified to decrypt data", CONTEXT).diagnostics
    assert diagnostic.severity is Severity.INFO
    assert diagnostic.excerpt == VAULT_MESSAGE
    assert diagnostic.file == "/work/site.yml"


def test_stdin_lint_is_reported_against_label() -> None:
    text = "  File \"/usr/lib/python3/site-packages/ansiblelint/__init__.py\"\n    os.path.dirname(playbook)\n"
    (diagnostic,) = classify_failure(text, CONTEXT).diagnostics
    assert diagnostic.severity is Severity.INFO
    assert diagnostic.file == STDIN_FILE_LABEL
    assert diagnostic.excerpt == STDIN_MESSAGE


def test_skip_rules_hint_is_benign() -> None:
    text = "You can skip specific rules or tags by adding them to your configuration file:"
    result = classify_failure(text, CONTEXT)
    assert result.kind is ClassificationKind.BENIGN
    assert result.diagnostics == []
    assert not result.needs_escalation


def test_blank_error_text_is_empty() -> None:
    result = classify_failure("  \n", CONTEXT)
    assert result.kind is ClassificationKind.EMPTY
    assert not result.needs_escalation


def test_unknown_error_needs_escalation() -> None:
    text = "Traceback (most recent call last):\nKeyError: 'hosts'"
    result = classify_failure(text, CONTEXT)
    assert result.kind is ClassificationKind.UNCLASSIFIED
    assert result.needs_escalation
    assert result.detail == text
    assert result.diagnostics == []


def test_custom_table_rows_extend_classification() -> None:
    table = MatcherTable(
        version="test",
        matchers=(FailureMatcher("deprecation", re.compile(r"DEPRECATION WARNING")), *DEFAULT_MATCHER_TABLE.matchers),
    )
    result = classify_failure("[DEPRECATION WARNING]: old syntax", CONTEXT, table=table)
    assert result.kind is ClassificationKind.BENIGN
    assert result.rule == "deprecation"
