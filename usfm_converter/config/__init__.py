"""配置包：对外暴露单例 settings。"""

from usfm_converter.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
