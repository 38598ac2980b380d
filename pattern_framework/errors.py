"""
驱动注册表与浏览器工厂的错误类型定义
Error types raised by the driver registry and browser factories.
"""


class PatternFrameworkError(Exception):
    """框架错误基类"""


class RegistryAlreadyInitializedError(PatternFrameworkError, RuntimeError):
    """绕过 get_registry() 直接构造第二个注册表实例"""


class CloneNotSupportedError(PatternFrameworkError, TypeError):
    """单例实例不允许被复制"""


class UnsupportedBrowserError(PatternFrameworkError, ValueError):
    """不支持的浏览器类型"""

    def __init__(self, browser: str, remote: bool = False):
        where = "remote execution" if remote else "local execution"
        super().__init__(f"Unsupported browser for {where}: {browser}")
        self.browser = browser


class RemoteDriverCreationError(PatternFrameworkError, RuntimeError):
    """远程 WebDriver 创建失败，原始异常保存在 __cause__ 中"""

    def __init__(self, grid_url: str, reason: str = ""):
        message = f"Remote WebDriver creation failed: {grid_url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.grid_url = grid_url
