# Compatibility utilities, sentinels, and the package logger

import logging as _logging

_logger = _logging.getLogger("redirectx")


# Sentinel for "not specified" - distinct from an explicit value such as 0
class _UseClientDefault:
    """Sentinel to indicate a per-call option falls back to the client's."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "<USE_CLIENT_DEFAULT>"

    def __bool__(self):
        return False


USE_CLIENT_DEFAULT = _UseClientDefault()
