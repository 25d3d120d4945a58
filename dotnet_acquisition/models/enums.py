"""
열거형 정의 모듈

획득 시스템에서 사용되는 상수 값들을 열거형으로 정의합니다.
"""

from enum import Enum


class EventKind(Enum):
    """이벤트 종류 열거형"""
    COMPLETED = "completed"
    ERROR = "error"
    DIAGNOSTIC = "diagnostic"


class FetchFailureReason(Enum):
    """가져오기 실패 원인 열거형"""
    NO_URI = "no_uri"
    NETWORK_ERROR = "network_error"
    BAD_RESPONSE = "bad_response"


class ScriptPlatform(Enum):
    """설치 스크립트 플랫폼 열거형 (값은 파일 확장자)"""
    WINDOWS = ".ps1"
    UNIX = ".sh"
