"""Root pytest configuration.

Collects ``*_test.sh`` scripts under tests/ as test items.  Each script runs
with ``$PYTHON`` pointing at the interpreter running pytest, so
``"$PYTHON" -m lsdir`` exercises the installed package, and with the
LSDIR_* variables cleared.
"""

import os
import subprocess
import sys

import pytest


class ShellScriptError(Exception):
    def __init__(self, result):
        self.result = result


def _script_env() -> dict[str, str]:
    env = {k: v for k, v in os.environ.items() if not k.startswith("LSDIR_")}
    env["PYTHON"] = sys.executable
    return env


class ShellScriptItem(pytest.Item):
    def runtest(self):
        result = subprocess.run(
            ["bash", str(self.path)],
            capture_output=True,
            text=True,
            env=_script_env(),
            cwd=self.path.parent,
        )
        if result.stdout.strip():
            self.add_report_section("call", "stdout", result.stdout.rstrip())
        if result.stderr.strip():
            self.add_report_section("call", "stderr", result.stderr.rstrip())
        if result.returncode != 0:
            raise ShellScriptError(result)

    def repr_failure(self, excinfo):
        r = excinfo.value.result
        lines = [f"lsdir script failed (exit {r.returncode}): {self.path.name}"]
        if r.stderr.strip():
            lines += ["--- stderr ---", r.stderr.rstrip()]
        return "\n".join(lines)

    def reportinfo(self):
        return self.path, None, f"shell: {self.path.name}"


class ShellScriptFile(pytest.File):
    def collect(self):
        yield ShellScriptItem.from_parent(self, name=self.path.name)


def pytest_collect_file(parent, file_path):
    """Collect *_test.sh files as shell-script test items."""
    if file_path.suffix == ".sh" and file_path.name.endswith("_test.sh"):
        return ShellScriptFile.from_parent(parent, path=file_path)
