"""核心数据模型

依赖声明、解析结果与工作区上下文集中定义。
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from bendpm.core.config import Config
from bendpm.core.exceptions import ValidationError

# 依赖名与版本号只允许出现在 git 引用中合法且不会被当成命令行选项的字符
_SAFE_NAME_RE = re.compile(r"^[a-zA-Z0-9_.@:~\-]+(/[a-zA-Z0-9_.@:~\-]+)+$")
_SAFE_REF_RE = re.compile(r"^[a-zA-Z0-9_./@+\-]+$")


def default_alias(name: str) -> str:
    """依赖名最后一段作为默认别名，如 github.com/org/proj -> proj"""
    _, sep, tail = name.rpartition("/")
    if not sep or not tail:
        raise ValidationError(f"无效的依赖名: '{name}'（应形如 host/org/project）")
    return tail


def validate_name(name: str) -> str:
    """校验依赖名，返回默认别名"""
    alias = default_alias(name)
    if not _SAFE_NAME_RE.match(name):
        raise ValidationError(f"依赖名包含非法字符: '{name}'")
    return alias


def validate_ref(ref: str, label: str = "版本") -> str:
    if not ref or ref.startswith("-") or not _SAFE_REF_RE.match(ref):
        raise ValidationError(f"{label}包含非法字符: '{ref}'")
    return ref


def validate_alias(alias: str) -> str:
    if alias in (".", "..") or "/" in alias or "\\" in alias:
        raise ValidationError(f"别名不能是路径: '{alias}'")
    return validate_ref(alias, label="别名")


@dataclass
class DependencySpec:
    """清单中的单条依赖声明"""

    name: str
    version: str
    alias: str | None = None

    @property
    def local_name(self) -> str:
        """镜像目录名：别名优先，否则为依赖名最后一段"""
        return self.alias or default_alias(self.name)


@dataclass
class ResolvedDependency:
    """一次 get 的解析结果"""

    name: str
    version: str
    url: str
    path: Path
    alias: str | None = None


@dataclass
class Workspace:
    """工作区上下文：所有路径均相对显式的 root，而非进程 cwd"""

    root: Path
    config: Config = field(default_factory=Config)

    def __post_init__(self) -> None:
        self.root = Path(self.root)

    @property
    def manifest_path(self) -> Path:
        return self.root / self.config.manifest

    @property
    def mirror_root(self) -> Path:
        return self.root / self.config.mirror_dir

    def mirror_path(self, local_name: str) -> Path:
        return self.mirror_root / local_name
