class AppError(Exception):
    """Base application error"""


class ConfigError(AppError):
    """Missing or invalid configuration"""


class ImageReadError(AppError):
    """Image file could not be opened or decoded"""


class ImageWriteError(AppError):
    """Image could not be encoded or written"""
