"""本地 tag 与远程同步

先删除全部本地 tag，再按 refs/tags/*:refs/tags/* 拉取远程 tag，
保证远程已删除或被移动的 tag 不会残留在本地。

两步之间不是原子的：中途失败会留下部分或空的 tag 集合，重新执行即可恢复。
"""

from __future__ import annotations

import logging

from bendpm.core.pkg.git import TAG_REFSPEC, GitRepo

logger = logging.getLogger(__name__)


def sync_tags(repo: GitRepo, remote: str = "origin") -> list[str]:
    """同步 tag 并返回同步后的 tag 列表"""
    stale = repo.tag_names()
    if stale:
        logger.debug("删除 %d 个本地 tag: %s", len(stale), repo.path)
    repo.delete_tags(stale)

    logger.info("拉取远程 tag: %s (%s)", remote, repo.path)
    repo.fetch(remote, TAG_REFSPEC)

    tags = repo.tag_names()
    logger.debug("同步后共 %d 个 tag", len(tags))
    return tags
