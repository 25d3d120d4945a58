"""
공통 유틸리티 함수 모듈

획득 시스템에서 공통으로 사용되는 헬퍼 함수들을 제공합니다.
"""

import getpass
import hashlib
import re
from pathlib import Path
from typing import Optional, Union


def calculate_string_hash(content: str) -> str:
    """
    문자열의 SHA-256 해시 계산

    Args:
        content: 해시를 계산할 문자열

    Returns:
        str: SHA-256 해시값
    """
    return hashlib.sha256(content.encode('utf-8')).hexdigest()


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    디렉토리 존재 확인 및 생성 (누락된 상위 디렉토리 포함)

    Args:
        path: 디렉토리 경로

    Returns:
        Path: 디렉토리 경로 객체
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def validate_url(url: str) -> bool:
    """
    URL 유효성 검증

    Args:
        url: 검증할 URL

    Returns:
        bool: 유효한 URL인지 여부
    """
    url_pattern = re.compile(
        r'^https?://'  # http:// or https://
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+[A-Z]{2,6}\.?|'  # domain...
        r'localhost|'  # localhost...
        r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # ...or ip
        r'(?::\d+)?'  # optional port
        r'(?:/?|[/?]\S+)$', re.IGNORECASE)

    return url_pattern.match(url) is not None


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """
    문자열을 지정된 길이로 자르기

    Args:
        text: 자를 문자열
        max_length: 최대 길이
        suffix: 자른 부분에 추가할 접미사

    Returns:
        str: 자른 문자열
    """
    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix


def _current_user() -> Optional[str]:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return None


def sanitize_text(text: str, home: Optional[Union[str, Path]] = None, user: Optional[str] = None) -> str:
    """
    개인 식별 정보 제거 (홈 디렉토리 경로와 사용자 이름 마스킹)

    Args:
        text: 원본 문자열
        home: 홈 디렉토리 (None이면 현재 사용자 홈)
        user: 사용자 이름 (None이면 현재 사용자)

    Returns:
        str: 마스킹된 문자열
    """
    home_str = str(home if home is not None else Path.home())
    user = user if user is not None else _current_user()

    if home_str and home_str not in ("/", "."):
        text = text.replace(home_str, "<home>")
    # 짧은 이름은 일반 단어와 겹칠 수 있으므로 단어 경계로만 치환
    if user and len(user) > 2:
        text = re.sub(rf"\b{re.escape(user)}\b", "<user>", text)
    return truncate_string(text, 1024)
