"""Shell 命令执行工具 — 统一子进程调用

通过 CommandExecutor 协议抽象子进程执行，方便测试替换。
git 操作全部经由这里发出。
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Protocol

from bendpm.core.exceptions import InfrastructureError

logger = logging.getLogger(__name__)


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


# =========================================================================
# 命令执行器协议
# =========================================================================

class CommandExecutor(Protocol):
    """命令执行器协议 — 抽象子进程调用

    测试时可注入 mock 实现，无需 patch subprocess。
    """

    def execute(
        self,
        cmd: str | list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        """执行命令并返回结果"""
        ...


class LocalExecutor:
    """本地子进程执行器（默认实现）"""

    def execute(
        self,
        cmd: str | list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        args = shlex.split(cmd) if isinstance(cmd, str) else cmd
        r = subprocess.run(
            args, capture_output=True, text=True,
            cwd=cwd, env=env, check=False,
        )
        return CommandResult(
            returncode=r.returncode,
            stdout=r.stdout,
            stderr=r.stderr,
        )


# =========================================================================
# 全局默认执行器（可替换）
# =========================================================================

_default_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    """获取全局默认命令执行器"""
    return _default_executor


def set_executor(executor: CommandExecutor) -> None:
    """替换全局默认命令执行器（用于测试）"""
    global _default_executor  # noqa: PLW0603
    _default_executor = executor


def run_cmd(
    cmd: str | list[str], *, cwd: str = ".",
    env: dict[str, str] | None = None,
    label: str = "cmd",
    executor: CommandExecutor | None = None,
) -> CommandResult:
    """执行命令，失败抛 InfrastructureError

    Args:
        cmd: 命令字符串或参数列表
        cwd: 工作目录
        env: 环境变量（不传则继承当前进程）
        label: 日志标签，同时出现在错误信息中
        executor: 命令执行器，默认使用全局执行器
    """
    executor = executor or get_executor()
    logger.debug("  %s: %s (cwd=%s)", label, cmd, cwd)
    try:
        r = executor.execute(cmd, cwd=cwd, env=env)
    except OSError as e:
        raise InfrastructureError(f"{label}失败: {e}") from e
    if not r.success:
        raise InfrastructureError(
            f"{label}失败 (rc={r.returncode}): {r.stderr.strip()[:500]}"
        )
    return r
