"""集中配置管理

提供包管理器的统一配置入口：清单文件名、镜像根目录、远程名与 URL 模板。
支持从工作区根目录下的 YAML 文件加载 + 编程式覆盖。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

import yaml

from bendpm.core.exceptions import ConfigError
from bendpm.utils.fs_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "bend.yml"


@dataclass
class Config:
    """包管理器全局配置"""

    # 文件布局（相对于工作区根目录）
    manifest: str = "mod.toml"
    mirror_dir: str = ".bend"

    # 远程
    remote_name: str = "origin"
    url_template: str = "https://{name}.git"

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if "{name}" not in self.url_template:
            raise ConfigError(f"url_template 必须包含 {{name}}: {self.url_template}")
        if not self.remote_name:
            raise ConfigError("remote_name 不能为空")

    @classmethod
    def from_file(cls, path: str | Path = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, ValueError) as e:
            raise ConfigError(f"配置文件无效: {path}: {e}") from e
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def repo_url(self, name: str) -> str:
        """依赖名 -> 克隆地址"""
        return self.url_template.format(name=name)

    def to_dict(self) -> dict:
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str | Path = DEFAULT_CONFIG_FILE) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.debug("配置已加载: %s", path)
    return _current


def reset_config() -> None:
    """恢复为未初始化状态（测试用）"""
    global _current  # noqa: PLW0603
    _current = None
