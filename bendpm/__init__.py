"""bendpm - bend 源码模块包管理器"""

__version__ = "0.1.0"
