"""JSON 行格式日志。"""

from usfm_converter.infrastructure.logging.logger import logger

__all__ = ["logger"]
