"""统一异常体系

所有业务异常继承 BendError，CLI 层据此输出友好提示。
基础设施类失败（网络、文件系统、git 进程）统一为 InfrastructureError。
"""

from __future__ import annotations


class BendError(Exception):
    """包管理器基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(BendError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(BendError):
    """输入数据校验失败（依赖名、版本号格式等）"""

    code = "VALIDATION_ERROR"


class ManifestAlreadyExistsError(BendError):
    """init 目标清单文件已存在"""

    code = "MANIFEST_EXISTS"

    def __init__(self, path: str) -> None:
        super().__init__(f"清单文件已存在: {path}")
        self.path = path


class InvalidManifestError(BendError):
    """清单文件不可读或格式无效"""

    code = "INVALID_MANIFEST"


class DependencyNotFoundError(BendError):
    """清单中不存在指定依赖"""

    code = "DEPENDENCY_NOT_FOUND"

    def __init__(self, name: str) -> None:
        super().__init__(f"依赖 '{name}' 不在清单中")
        self.name = name


class VersionNotFoundError(BendError):
    """请求的版本在远程仓库上不存在"""

    code = "VERSION_NOT_FOUND"

    def __init__(self, version: str, url: str) -> None:
        super().__init__(f"版本 '{version}' 在 '{url}' 上不存在")
        self.version = version
        self.url = url


class NoTagsFoundError(BendError):
    """仓库中没有任何可解析为语义化版本的 tag"""

    code = "NO_TAGS_FOUND"

    def __init__(self, url: str = "") -> None:
        where = f" ({url})" if url else ""
        super().__init__(f"未找到任何语义化版本 tag{where}")
        self.url = url


class InfrastructureError(BendError):
    """网络、文件系统或 git 进程失败"""

    code = "INFRASTRUCTURE_ERROR"


class NotSupportedError(BendError):
    """命令尚未实现"""

    code = "NOT_SUPPORTED"
