"""shell.py 单元测试"""

from __future__ import annotations

import pytest

from bendpm.core.exceptions import InfrastructureError
from bendpm.utils.shell import CommandResult, get_executor, run_cmd, set_executor


class _RecordingExecutor:
    def __init__(self, result: CommandResult) -> None:
        self.result = result
        self.calls: list[list[str]] = []

    def execute(self, cmd, *, cwd=".", env=None) -> CommandResult:
        self.calls.append(list(cmd))
        return self.result


class TestRunCmd:
    def test_success(self, tmp_path) -> None:
        r = run_cmd("echo hello", cwd=str(tmp_path), label="test")
        assert r.returncode == 0
        assert "hello" in r.stdout

    def test_failure_raises_infrastructure_error(self, tmp_path) -> None:
        with pytest.raises(InfrastructureError, match="cmd失败"):
            run_cmd("false", cwd=str(tmp_path))

    def test_custom_label_in_error(self, tmp_path) -> None:
        with pytest.raises(InfrastructureError, match="git fetch失败"):
            run_cmd("false", cwd=str(tmp_path), label="git fetch")

    def test_missing_binary(self, tmp_path) -> None:
        with pytest.raises(InfrastructureError):
            run_cmd(["definitely-not-a-real-binary-bendpm"], cwd=str(tmp_path))

    def test_stderr_in_message(self) -> None:
        ex = _RecordingExecutor(CommandResult(128, "", "fatal: repository not found\n"))
        with pytest.raises(InfrastructureError, match="rc=128.*repository not found"):
            run_cmd(["git", "fetch"], executor=ex)


class TestExecutorSwap:
    def test_set_executor(self) -> None:
        original = get_executor()
        ex = _RecordingExecutor(CommandResult(0, "ok", ""))
        set_executor(ex)
        try:
            assert run_cmd(["git", "status"]).stdout == "ok"
            assert ex.calls == [["git", "status"]]
        finally:
            set_executor(original)
