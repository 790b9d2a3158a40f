"""依赖仓库本地镜像

materialize() 是 get 命令的核心：
  1. 打开已有镜像，不存在则初始化空仓库（此时不访问网络）
  2. 登记远程并同步 tag
  3. 确定目标版本：显式版本原样使用，否则取最高的语义化版本 tag
  4. 检出目标版本：本地分支直接切换，tag 或裸 commit 以分离 HEAD 检出

中途失败时已完成的部分保留在磁盘上，重新执行会复用已有镜像。
"""

from __future__ import annotations

import logging
from pathlib import Path

from bendpm.core.exceptions import NoTagsFoundError, VersionNotFoundError
from bendpm.core.models import validate_ref
from bendpm.core.pkg.git import GitRepo
from bendpm.core.pkg.remote import ensure_remote
from bendpm.core.pkg.version import latest_tag
from bendpm.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


def open_or_init(local_path: Path, executor: CommandExecutor | None = None) -> GitRepo:
    """打开镜像，不存在则初始化一个空仓库"""
    repo = GitRepo(local_path, executor=executor)
    if repo.exists():
        logger.info("复用已有镜像: %s", local_path)
    else:
        repo.init()
    return repo


def checkout_version(repo: GitRepo, version: str, url: str) -> str:
    """检出指定版本，返回检出后的 commit"""
    resolved = repo.resolve(version)
    if resolved is None:
        raise VersionNotFoundError(version, url)
    commit, full_ref = resolved

    # 同步只拉取 tag，refs/heads 仅在镜像中手工建立分支时出现
    if full_ref and full_ref.startswith("refs/heads/"):
        repo.checkout_branch(full_ref[len("refs/heads/"):])
    else:
        repo.checkout_detached(commit)
    logger.info("已检出 %s -> %s (%s)", version, commit[:12], full_ref or "detached")
    return commit


def materialize(
    local_path: Path,
    url: str,
    requested_version: str | None = None,
    *,
    remote: str = "origin",
    executor: CommandExecutor | None = None,
) -> str:
    """准备镜像并检出版本，返回实际使用的版本号"""
    if requested_version is not None:
        validate_ref(requested_version)

    repo = open_or_init(local_path, executor=executor)
    ensure_remote(repo, url, remote)

    if requested_version is not None:
        version = requested_version
    else:
        try:
            version = latest_tag(repo.tag_names())
        except NoTagsFoundError:
            raise NoTagsFoundError(url) from None
        logger.info("未指定版本，使用最新 tag: %s", version)

    checkout_version(repo, version, url)
    return version
