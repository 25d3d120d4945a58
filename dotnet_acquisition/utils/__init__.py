"""
유틸리티 패키지

공통으로 사용되는 유틸리티 함수들을 포함합니다.
"""

from .helpers import calculate_string_hash, ensure_directory, sanitize_text, validate_url
from .logging import get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "calculate_string_hash",
    "ensure_directory",
    "sanitize_text",
    "validate_url",
]
