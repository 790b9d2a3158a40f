"""远程登记

确保镜像中的远程指向当前依赖地址：不存在则创建，地址不同则改指，
相同则复用。无论哪种情况最后都重新同步 tag。
"""

from __future__ import annotations

import logging
from enum import Enum

from bendpm.core.pkg.git import GitRepo
from bendpm.core.pkg.tags import sync_tags

logger = logging.getLogger(__name__)


class RemoteAction(str, Enum):
    CREATED = "created"
    REPOINTED = "repointed"
    REUSED = "reused"


def ensure_remote(repo: GitRepo, url: str, name: str = "origin") -> RemoteAction:
    """登记远程并同步 tag，返回对远程所做的操作"""
    current = repo.remote_url(name)
    if current is None:
        repo.add_remote(name, url)
        action = RemoteAction.CREATED
    elif current != url:
        logger.info("远程 %s 地址变更: %s -> %s", name, current, url)
        repo.set_remote_url(name, url)
        action = RemoteAction.REPOINTED
    else:
        action = RemoteAction.REUSED
    logger.debug("远程 %s: %s (%s)", name, url, action.value)

    sync_tags(repo, name)
    return action
