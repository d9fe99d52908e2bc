"""项目内使用的自定义异常定义。"""


class IconSyncError(Exception):
    """基础异常类型。"""


class InvalidConfigurationError(IconSyncError):
    """配置不合法时抛出。"""


class ImageLoadingError(IconSyncError):
    """源图标无法解码。"""


class IconResizeError(IconSyncError):
    """单个图标缩放失败。"""


class UpscaleNotAllowedError(IconResizeError):
    """目标尺寸大于源图尺寸，拒绝放大。"""


class ImageWriteError(IconSyncError):
    """输出写入失败。"""
