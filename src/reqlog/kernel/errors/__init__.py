"""Kernel error hierarchy, public re-export surface.

Hierarchy::

    ReqlogError
    └── ConfigError                     (reqlog.config.validation)
        ├── MissingRequiredSettingError
        ├── InvalidSettingValueError
        ├── InvalidTagLevelConfigError
        └── UnsupportedEventTypeError
"""

from reqlog.kernel.errors.base import ReqlogError

__all__ = ["ReqlogError"]
