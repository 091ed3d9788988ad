"""
Error taxonomy

Errors raised before the schedule is browsable are terminal for the session.
Cache errors are recoverable and never block navigation.
"""


class ScheduleError(Exception):
    """Base class for all schedule viewer errors"""
    pass


class ConfigError(ScheduleError):
    """Raised when a required credential or setting is missing"""
    pass


class FetchError(ScheduleError):
    """Raised when the schedule cannot be retrieved or decoded"""
    pass


class CacheError(ScheduleError):
    """Base class for cache store failures"""
    pass


class CacheReadError(CacheError):
    """Raised when the cache file is absent, unreadable or malformed"""
    pass


class CacheWriteError(CacheError):
    """Raised when the cache file cannot be written"""
    pass
