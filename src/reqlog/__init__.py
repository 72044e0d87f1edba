"""
reqlog – request-lifecycle logging on top of structlog.

Import path convention::

    from reqlog import register
    from reqlog.observability.logging import LevelMap, Resolver, StructLogger
    from reqlog.host import LifecycleServer
    from reqlog.adapters.fastapi import install
"""

from reqlog.plugin import register

__version__ = "0.1.0"
__all__ = ["__version__", "register"]
