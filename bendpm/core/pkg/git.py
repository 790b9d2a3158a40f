"""本地镜像仓库的 git 操作封装

所有命令以 `git -C <path>` 形式发出，经由 CommandExecutor 执行，
测试时可替换执行器。非零退出码统一转为 InfrastructureError，
只有 resolve() 会把“引用不存在”作为正常结果返回。
"""

from __future__ import annotations

import logging
from pathlib import Path

from bendpm.core.exceptions import InfrastructureError
from bendpm.utils.shell import CommandExecutor, CommandResult, get_executor, run_cmd

logger = logging.getLogger(__name__)

TAG_REFSPEC = "refs/tags/*:refs/tags/*"


class GitRepo:
    """单个本地镜像仓库"""

    def __init__(self, path: Path, executor: CommandExecutor | None = None) -> None:
        self.path = Path(path)
        self._executor = executor

    @property
    def executor(self) -> CommandExecutor:
        return self._executor or get_executor()

    def _git(self, *args: str, label: str = "git") -> CommandResult:
        return run_cmd(
            ["git", "-C", str(self.path), *args],
            label=label, executor=self.executor,
        )

    def _try(self, *args: str) -> CommandResult:
        """执行 git 命令但不检查退出码"""
        cmd = ["git", "-C", str(self.path), *args]
        logger.debug("  git: %s", cmd)
        try:
            return self.executor.execute(cmd)
        except OSError as e:
            raise InfrastructureError(f"git 执行失败: {e}") from e

    # ---- 仓库 ----

    def exists(self) -> bool:
        """是否已是独立的 git 仓库（不向上查找父目录的仓库）"""
        return (self.path / ".git").exists()

    def init(self) -> None:
        self.path.mkdir(parents=True, exist_ok=True)
        self._git("init", "--quiet", label="git init")
        logger.info("已初始化空镜像: %s", self.path)

    # ---- 远程 ----

    def remote_url(self, name: str) -> str | None:
        """返回远程地址，远程不存在时返回 None"""
        r = self._try("remote", "get-url", name)
        if not r.success:
            return None
        return r.stdout.strip()

    def add_remote(self, name: str, url: str) -> None:
        self._git("remote", "add", name, url, label="git remote add")

    def set_remote_url(self, name: str, url: str) -> None:
        self._git("remote", "set-url", name, url, label="git remote set-url")

    # ---- tag ----

    def tag_names(self) -> list[str]:
        r = self._git("tag", "--list", label="git tag")
        return [line.strip() for line in r.stdout.splitlines() if line.strip()]

    def delete_tags(self, names: list[str]) -> None:
        if names:
            self._git("tag", "--delete", *names, label="git tag --delete")

    def fetch(self, remote: str, refspec: str = TAG_REFSPEC) -> None:
        self._git("fetch", "--no-tags", remote, refspec, label=f"git fetch {remote}")

    # ---- checkout ----

    def resolve(self, rev: str) -> tuple[str, str | None] | None:
        """将版本解析为 (commit, 完整引用名)

        完整引用名如 refs/tags/1.0.0、refs/heads/main；裸 commit 时为 None。
        无法解析时返回 None。
        """
        r = self._try("rev-parse", "--verify", "--quiet", f"{rev}^{{commit}}")
        if not r.success or not r.stdout.strip():
            return None
        commit = r.stdout.strip()
        sym = self._try("rev-parse", "--symbolic-full-name", rev)
        full_ref = sym.stdout.strip() if sym.success else ""
        return commit, (full_ref or None)

    def checkout_branch(self, branch: str) -> None:
        self._git("checkout", "--quiet", "--force", branch, label="git checkout")

    def checkout_detached(self, commit: str) -> None:
        self._git("checkout", "--quiet", "--force", "--detach", commit, label="git checkout")
