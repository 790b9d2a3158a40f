"""包管理器：组合镜像准备与清单编辑

用法:
    from bendpm.core.manager import PackageManager
    from bendpm.core.models import Workspace

    pm = PackageManager(Workspace(Path.cwd()))
    pm.init("my-module")
    pm.add("github.com/org/foo")                 # 最新语义化版本
    pm.add("github.com/org/bar", "0.3.1", alias="baz")
    pm.remove("github.com/org/foo")

约定:
  - add() 先加载清单、再准备镜像、最后写清单；
    镜像阶段失败时清单保持不变
  - remove() 先删清单条目，成功后才删除镜像目录
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from bendpm.core.config import Config
from bendpm.core.exceptions import NotSupportedError, ValidationError
from bendpm.core.manifest import Manifest
from bendpm.core.models import (
    DependencySpec,
    ResolvedDependency,
    Workspace,
    validate_alias,
    validate_name,
)
from bendpm.core.pkg.mirror import materialize
from bendpm.utils.fs_io import remove_tree
from bendpm.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


@dataclass
class InstalledDependency:
    """list 输出的单行：清单声明 + 本地镜像是否存在"""

    spec: DependencySpec
    path: Path | None
    present: bool


class PackageManager:
    """单个工作区的依赖管理入口"""

    def __init__(self, workspace: Workspace, executor: CommandExecutor | None = None) -> None:
        self.workspace = workspace
        self.executor = executor

    @property
    def config(self) -> Config:
        return self.workspace.config

    def init(self, module: str) -> Manifest:
        """初始化模块清单"""
        return Manifest.create(self.workspace.manifest_path, module)

    def add(
        self, name: str, version: str | None = None, alias: str | None = None,
    ) -> ResolvedDependency:
        """获取依赖并记录到清单，返回实际解析出的版本"""
        default = validate_name(name)
        if alias is not None:
            validate_alias(alias)

        # 先加载清单：清单无效时不做任何网络操作
        manifest = Manifest.load(self.workspace.manifest_path)

        url = self.config.repo_url(name)
        local_path = self.workspace.mirror_path(alias or default)
        logger.info("获取依赖: %s@%s -> %s", name, version or "latest", local_path)

        resolved = materialize(
            local_path, url, version,
            remote=self.config.remote_name, executor=self.executor,
        )
        manifest.upsert(name, resolved, alias)
        return ResolvedDependency(
            name=name, version=resolved, url=url, path=local_path, alias=alias,
        )

    def remove(self, name: str) -> Path | None:
        """移除依赖：清单条目删除成功后才删除镜像目录

        返回被删除的镜像目录，目录本不存在时返回 None。
        """
        manifest = Manifest.load(self.workspace.manifest_path)
        removed = manifest.remove(name)

        try:
            local_name = validate_alias(removed.local_name)
        except ValidationError as e:
            logger.warning("清单条目无法对应镜像目录，跳过删除: %s", e)
            return None

        local_path = self.workspace.mirror_path(local_name)
        if remove_tree(local_path):
            return local_path
        logger.info("镜像目录不存在，跳过删除: %s", local_path)
        return None

    def list_dependencies(self) -> list[InstalledDependency]:
        """列出清单中的依赖及本地镜像状态"""
        manifest = Manifest.load(self.workspace.manifest_path)
        result = []
        for spec in manifest.dependencies().values():
            try:
                local_name = validate_alias(spec.local_name)
            except ValidationError as e:
                # 手工写入的无效条目：照常列出，视为未获取
                logger.warning("清单条目无法对应镜像目录: %s", e)
                result.append(InstalledDependency(spec=spec, path=None, present=False))
                continue
            path = self.workspace.mirror_path(local_name)
            result.append(InstalledDependency(spec=spec, path=path, present=path.exists()))
        return result

    def tidy(self) -> None:
        raise NotSupportedError("tidy 尚未实现")
