"""文件读写工具

集中管理清单与配置文件的读写：
- atomic_write: 先写临时文件再 rename，写入要么完整成功要么不生效
- load_yaml: 读取可选的 YAML 配置文件
- remove_tree: 删除镜像目录
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# 配置文件最大大小限制 (1MB)
MAX_CONFIG_SIZE = 1024 * 1024


def _target_mode(path: Path) -> int:
    """mkstemp 固定为 0600，替换前需还原目标文件应有的权限"""
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def atomic_write(path: Path, content: str) -> None:
    """原子写入文件：先写同目录临时文件再 os.replace

    目标文件已存在时沿用其权限位，否则按 umask 取默认权限。

    异常:
        OSError: 文件写入或移动失败，目标文件保持原样
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.chmod(tmp, _target_mode(path))
        os.replace(tmp, str(path))
    except Exception:
        # 只捕获普通异常，不拦截 KeyboardInterrupt/SystemExit
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def load_yaml(path: str | Path) -> dict[str, Any]:
    """安全读取 YAML 文件

    返回:
        dict: 解析后的字典。文件不存在、为空或顶层不是字典时返回空字典

    异常:
        yaml.YAMLError: YAML 格式错误
        ValueError: 文件过大
    """
    p = Path(path)
    if not p.exists():
        return {}

    file_size = p.stat().st_size
    if file_size > MAX_CONFIG_SIZE:
        raise ValueError(
            f"配置文件过大: {p} ({file_size} 字节), 超过限制 {MAX_CONFIG_SIZE} 字节"
        )

    with open(p, encoding="utf-8") as f:
        result = yaml.safe_load(f)

    if result is None:
        return {}
    if not isinstance(result, dict):
        logger.warning(
            "%s 内容不是字典类型 (实际类型: %s)，忽略", path, type(result).__name__,
        )
        return {}
    return result


def remove_tree(path: Path) -> bool:
    """删除目录树，目录不存在时返回 False"""
    if not path.exists():
        return False
    shutil.rmtree(path)
    logger.info("已删除目录: %s", path)
    return True
