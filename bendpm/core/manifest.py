"""mod.toml 清单编辑

基于 tomlkit 的保留格式编辑：只改动目标依赖条目，
其余内容（注释、空行、键顺序、引号风格）原样写回。

清单结构:
    module = "my-module"

    [dependencies]
    "github.com/org/foo" = "1.2.0"
    "github.com/org/bar" = { version = "0.3.1", alias = "baz" }

每次修改后立即整文件原子写回。
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from bendpm.core.exceptions import (
    DependencyNotFoundError,
    InfrastructureError,
    InvalidManifestError,
    ManifestAlreadyExistsError,
    ValidationError,
)
from bendpm.core.models import DependencySpec
from bendpm.utils.fs_io import atomic_write

logger = logging.getLogger(__name__)

DEPS_KEY = "dependencies"


def _is_table_like(item: Any) -> bool:
    """Table / InlineTable / 乱序表代理都按子表处理，其余视为标量"""
    return isinstance(item, MutableMapping)


def _new_dependency(version: str, alias: str | None) -> Any:
    """新条目：无别名时为纯版本字符串，否则为紧凑的内联表"""
    if alias is None:
        return version
    entry = tomlkit.inline_table()
    entry["version"] = version
    entry["alias"] = alias
    return entry


def _to_spec(name: str, item: Any) -> DependencySpec:
    if _is_table_like(item):
        alias = item.get("alias")
        return DependencySpec(
            name=name,
            version=str(item.get("version", "")),
            alias=str(alias) if alias is not None else None,
        )
    return DependencySpec(name=name, version=str(item))


class Manifest:
    """绑定到文件路径的清单文档"""

    def __init__(self, path: Path, doc: tomlkit.TOMLDocument) -> None:
        self.path = Path(path)
        self._doc = doc

    @classmethod
    def create(cls, path: Path, module: str) -> Manifest:
        """新建清单，文件已存在时抛 ManifestAlreadyExistsError"""
        if not module:
            raise ValidationError("模块名不能为空")
        doc = tomlkit.document()
        doc["module"] = module
        path = Path(path)
        try:
            with open(path, "x", encoding="utf-8") as f:
                f.write(tomlkit.dumps(doc))
        except FileExistsError as e:
            raise ManifestAlreadyExistsError(str(path)) from e
        except OSError as e:
            raise InfrastructureError(f"写入清单失败: {path}: {e}") from e
        logger.info("已创建清单: %s (module=%s)", path, module)
        return cls(path, doc)

    @classmethod
    def load(cls, path: Path) -> Manifest:
        path = Path(path)
        try:
            with open(path, encoding="utf-8", newline="") as f:
                text = f.read()
        except FileNotFoundError as e:
            raise InvalidManifestError(f"清单文件不存在: {path}") from e
        except UnicodeDecodeError as e:
            raise InvalidManifestError(f"清单文件无法解码: {path}") from e
        except OSError as e:
            raise InfrastructureError(f"读取清单失败: {path}: {e}") from e

        try:
            doc = tomlkit.parse(text)
        except TOMLKitError as e:
            raise InvalidManifestError(f"'{path.name}' 格式无效: {e}") from e

        deps = doc.get(DEPS_KEY)
        if deps is not None and not _is_table_like(deps):
            raise InvalidManifestError(f"'{path.name}' 格式无效: {DEPS_KEY} 必须是表")
        return cls(path, doc)

    # ---- 查询 ----

    @property
    def module(self) -> str:
        return str(self._doc.get("module", ""))

    def dependencies(self) -> dict[str, DependencySpec]:
        deps = self._doc.get(DEPS_KEY)
        if deps is None:
            return {}
        return {name: _to_spec(name, item) for name, item in deps.items()}

    def get(self, name: str) -> DependencySpec | None:
        deps = self._doc.get(DEPS_KEY)
        if deps is None or name not in deps:
            return None
        return _to_spec(name, deps[name])

    def as_string(self) -> str:
        return tomlkit.dumps(self._doc)

    # ---- 修改 ----

    def _deps_table(self) -> MutableMapping:
        if DEPS_KEY not in self._doc:
            self._doc[DEPS_KEY] = tomlkit.table()
        return self._doc[DEPS_KEY]

    def upsert(self, name: str, version: str, alias: str | None = None) -> None:
        """插入或更新依赖条目并写回

        已有条目为子表时原地更新 version、设置或清除 alias，保留其他字段；
        为标量或不存在时整体替换。
        """
        deps = self._deps_table()
        entry = deps.get(name)
        if _is_table_like(entry):
            entry["version"] = version
            if alias is not None:
                entry["alias"] = alias
            elif "alias" in entry:
                del entry["alias"]
        else:
            deps[name] = _new_dependency(version, alias)
        self.save()
        logger.info("清单已更新: %s = %s%s", name, version, f" (alias={alias})" if alias else "")

    def remove(self, name: str) -> DependencySpec:
        """删除依赖条目并写回，返回被删除的声明"""
        deps = self._doc.get(DEPS_KEY)
        if deps is None or name not in deps:
            raise DependencyNotFoundError(name)
        removed = _to_spec(name, deps[name])
        del deps[name]
        self.save()
        logger.info("已从清单移除: %s", name)
        return removed

    def save(self) -> None:
        try:
            atomic_write(self.path, tomlkit.dumps(self._doc))
        except OSError as e:
            raise InfrastructureError(f"写入清单失败: {self.path}: {e}") from e
