"""依赖仓库镜像与版本解析

- version.py: 语义化版本选择
- git.py: git 命令封装
- tags.py: tag 同步
- remote.py: 远程登记
- mirror.py: 镜像准备与检出
"""

from bendpm.core.pkg.git import GitRepo
from bendpm.core.pkg.mirror import materialize
from bendpm.core.pkg.remote import RemoteAction, ensure_remote
from bendpm.core.pkg.tags import sync_tags
from bendpm.core.pkg.version import latest_tag, select_latest

__all__ = [
    "GitRepo",
    "RemoteAction",
    "ensure_remote",
    "latest_tag",
    "materialize",
    "select_latest",
    "sync_tags",
]
