"""转换结果的结构校验。"""

from usfm_converter.validation.usfm_validator import MARKER_PAIRS, REQUIRED_MARKERS, scan_markers, validate_usfm

__all__ = ["MARKER_PAIRS", "REQUIRED_MARKERS", "scan_markers", "validate_usfm"]
