# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line tests driving a stand-in ansible-lint script."""

from __future__ import annotations

import json
import stat
from pathlib import Path

from typer.testing import CliRunner

from ansible_lint_adapter.cli import app

runner = CliRunner()

FINDING_SCRIPT = """#!/bin/sh
if [ "$1" = "-T" ]; then
  echo "repeatability"
  exit 0
fi
for last; do :; done
echo "$last:2: [E502] All tasks should be named"
exit 2
"""

MISSING_FILE_SCRIPT = """#!/bin/sh
echo "WARNING: Couldn't open /missing/tasks.yml - No such file or directory" >&2
exit 1
"""

UNDECODABLE_SCRIPT = r"""#!/bin/sh
for last; do :; done
printf '%s:2: [E502] name \377 task\n' "$last"
exit 2
"""

OLD_RELEASE_SCRIPT = """#!/bin/sh
echo "behaviour"
echo "bug"
"""


def _script(directory: Path, body: str) -> Path:
    path = directory / "fake-ansible-lint"
    path.write_text(body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def test_lint_json_output(isolated_home: Path, playbook: Path) -> None:
    executable = _script(isolated_home, FINDING_SCRIPT)
    result = runner.invoke(
        app,
        ["lint", str(playbook), "--executable", str(executable), "--output", "json", "--no-emoji"],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout.strip().splitlines()[0])
    assert payload == {
        "severity": "warning",
        "excerpt": "All tasks should be named",
        "location": {"file": str(playbook.resolve()), "position": [[1, 0], [1, 1]]},
        "code": "E502",
    }


def test_lint_concise_output(isolated_home: Path, playbook: Path) -> None:
    executable = _script(isolated_home, FINDING_SCRIPT)
    result = runner.invoke(app, ["lint", str(playbook), "--executable", str(executable), "--no-color"])
    assert result.exit_code == 0, result.output
    assert f"{playbook.resolve()}:2:1: warning [E502] All tasks should be named" in result.output


def test_min_severity_filters_findings(isolated_home: Path, playbook: Path) -> None:
    executable = _script(isolated_home, FINDING_SCRIPT)
    result = runner.invoke(
        app,
        ["lint", str(playbook), "--executable", str(executable), "--min-severity", "error"],
    )
    assert result.exit_code == 0
    assert "E502" not in result.output


def test_error_diagnostic_sets_exit_code(isolated_home: Path, playbook: Path) -> None:
    executable = _script(isolated_home, MISSING_FILE_SCRIPT)
    result = runner.invoke(app, ["lint", str(playbook), "--executable", str(executable), "--no-color"])
    assert result.exit_code == 1
    assert "Missing file /missing/tasks.yml" in result.output


def test_blacklisted_file_prints_nothing(isolated_home: Path, playbook: Path) -> None:
    executable = _script(isolated_home, MISSING_FILE_SCRIPT)
    result = runner.invoke(
        app,
        ["lint", str(playbook), "--executable", str(executable), "--blacklist", r"site\.yml"],
    )
    assert result.exit_code == 0
    assert result.output == ""


def test_invalid_configuration_exit_code(isolated_home: Path, playbook: Path) -> None:
    (isolated_home / ".ansible-lint-adapter.toml").write_text('blacklist = "(unclosed"\n', encoding="utf-8")
    result = runner.invoke(app, ["lint", str(playbook), "--no-emoji", "--no-color"])
    assert result.exit_code == 2
    assert "Invalid configuration" in result.output


def test_check_version_passes(isolated_home: Path) -> None:
    executable = _script(isolated_home, FINDING_SCRIPT)
    result = runner.invoke(app, ["check-version", "--executable", str(executable), "--no-emoji", "--no-color"])
    assert result.exit_code == 0
    assert "ansible-lint version check passed." in result.output


def test_check_version_warns_for_old_release(isolated_home: Path) -> None:
    executable = _script(isolated_home, OLD_RELEASE_SCRIPT)
    result = runner.invoke(app, ["check-version", "--executable", str(executable), "--no-emoji", "--no-color"])
    assert result.exit_code == 1
    assert "ansible-lint < 3.5 is unsupported" in result.output
    assert "Please upgrade your version of ansible-lint to >= 3.5." in result.output


def test_check_version_fails_when_executable_is_missing(isolated_home: Path) -> None:
    result = runner.invoke(
        app,
        ["check-version", "--executable", "no-such-ansible-lint", "--no-emoji", "--no-color"],
    )
    assert result.exit_code == 1
    assert "Unable to run ansible-lint" in result.output
    assert "no-such-ansible-lint" in result.output
    assert "version check passed" not in result.output


def test_undecodable_output_keeps_findings(isolated_home: Path, playbook: Path) -> None:
    executable = _script(isolated_home, UNDECODABLE_SCRIPT)
    result = runner.invoke(
        app,
        ["lint", str(playbook), "--executable", str(executable), "--output", "json", "--no-emoji"],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout.strip().splitlines()[0])
    assert payload["excerpt"] == "name \ufffd task"
    assert payload["code"] == "E502"
