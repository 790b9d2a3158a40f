"""语义化版本选择

从一组 tag 名中挑出语义化版本最高的一个。
不符合严格 SemVer 2.0 格式的 tag（如 v1.0、1.0、bogus）直接忽略。
"""

from __future__ import annotations

from collections.abc import Iterable

import semver

from bendpm.core.exceptions import NoTagsFoundError


def parse_version(tag: str) -> semver.Version | None:
    """严格解析 tag，失败返回 None"""
    try:
        return semver.Version.parse(tag)
    except (ValueError, TypeError):
        return None


def is_semver(tag: str) -> bool:
    return parse_version(tag) is not None


def _parsed(tags: Iterable[str]) -> list[tuple[semver.Version, str]]:
    pairs = []
    for tag in tags:
        ver = parse_version(tag)
        if ver is not None:
            pairs.append((ver, tag))
    return pairs


def select_latest(tags: Iterable[str]) -> semver.Version:
    """返回最高的语义化版本，没有可解析 tag 时抛 NoTagsFoundError"""
    pairs = _parsed(tags)
    if not pairs:
        raise NoTagsFoundError()
    return max(ver for ver, _ in pairs)


def latest_tag(tags: Iterable[str]) -> str:
    """同 select_latest，但返回原始 tag 名（用于 checkout）"""
    pairs = _parsed(tags)
    if not pairs:
        raise NoTagsFoundError()
    latest = max(ver for ver, _ in pairs)
    return next(tag for ver, tag in pairs if ver == latest)
