from .app_config import (
    AppConfig,
    ClassifierSettings,
    NetworkSettings,
    OverrideRecord,
    SchedulerSettings,
    StoreSettings,
)

__all__ = [
    "AppConfig",
    "ClassifierSettings",
    "NetworkSettings",
    "OverrideRecord",
    "SchedulerSettings",
    "StoreSettings",
]
