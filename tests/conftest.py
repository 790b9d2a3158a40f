"""测试共享 fixture：在 tmp_path 中构造真实的 git 远程仓库"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

import pytest

from bendpm.core.config import Config, reset_config
from bendpm.core.models import Workspace
from bendpm.utils.logger import reset_logging

# 固定提交者信息，避免依赖宿主机的 git 配置
_GIT_ENV = {
    **os.environ,
    "GIT_AUTHOR_NAME": "bendpm-test",
    "GIT_AUTHOR_EMAIL": "bendpm-test@example.invalid",
    "GIT_COMMITTER_NAME": "bendpm-test",
    "GIT_COMMITTER_EMAIL": "bendpm-test@example.invalid",
    "GIT_CONFIG_NOSYSTEM": "1",
}


def git(cwd: Path, *args: str) -> str:
    r = subprocess.run(
        ["git", *args], cwd=str(cwd), env=_GIT_ENV,
        capture_output=True, text=True, check=True,
    )
    return r.stdout.strip()


def make_source_repo(path: Path, tags: list[str]) -> Path:
    """每个 tag 一次提交，VERSION 文件内容为 tag 名"""
    path.mkdir(parents=True, exist_ok=True)
    git(path, "init", "--quiet")
    (path / "README").write_text("source\n")
    git(path, "add", "README")
    git(path, "commit", "--quiet", "-m", "initial")
    for tag in tags:
        (path / "VERSION").write_text(tag)
        git(path, "add", "VERSION")
        git(path, "commit", "--quiet", "-m", f"release {tag}")
        git(path, "tag", tag)
    return path


@pytest.fixture(autouse=True)
def _fresh_state():
    reset_config()
    yield
    reset_config()
    # CLI 会配置根日志器，测试间清理
    reset_logging()


@pytest.fixture()
def remotes(tmp_path: Path) -> Path:
    """本地“远程”根目录：依赖名 example.com/org/foo 对应 remotes/example.com/org/foo"""
    root = tmp_path / "remotes"
    root.mkdir()
    return root


@pytest.fixture()
def workspace(tmp_path: Path, remotes: Path) -> Workspace:
    root = tmp_path / "project"
    root.mkdir()
    return Workspace(root, Config(url_template=f"{remotes}/{{name}}"))


@pytest.fixture()
def run_git():
    return git


@pytest.fixture()
def make_remote(remotes: Path):
    """按依赖名创建带 tag 的远程仓库"""
    def _make(name: str, tags: list[str]) -> Path:
        return make_source_repo(remotes / name, tags)
    return _make
