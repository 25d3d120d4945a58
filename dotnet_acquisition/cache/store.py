"""
영속 캐시 저장소 모듈

get/set 키-값 인터페이스와 메모리/JSON 파일 기반 구현을 제공합니다.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from ..exceptions import CacheWriteFailedException
from ..models.base import CacheEntry
from ..utils.logging import get_logger

logger = get_logger(__name__)


def _build_entry(key: str, value: str) -> CacheEntry:
    """저장할 캐시 항목 생성 (검증 실패는 캐시 쓰기 실패로 변환)"""
    try:
        return CacheEntry(key=key, value=value)
    except ValidationError as e:
        raise CacheWriteFailedException(key, str(e)) from e


class CacheStoreBase(ABC):
    """캐시 저장소 기본 추상 클래스"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        캐시 값 조회 (추상 메서드)

        Args:
            key: 캐시 키

        Returns:
            캐시된 값 (없으면 None)
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        캐시 값 저장 (추상 메서드). 기존 값은 덮어씁니다.

        Args:
            key: 캐시 키
            value: 저장할 값

        Raises:
            CacheWriteFailedException: 저장 실패 시
        """
        pass


class MemoryCacheStore(CacheStoreBase):
    """프로세스 수명 동안 유지되는 메모리 캐시 저장소"""

    def __init__(self):
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        self._entries[key] = _build_entry(key, value)

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def clear(self) -> None:
        self._entries.clear()


class JsonFileCacheStore(CacheStoreBase):
    """JSON 파일 기반 영속 캐시 저장소

    모든 항목을 하나의 JSON 파일에 보관하며, 쓰기는 임시 파일 교체로 원자적으로 수행됩니다.
    """

    def __init__(self, file_path: Union[str, Path]):
        """
        저장소 초기화

        Args:
            file_path: 캐시 파일 경로
        """
        self.file_path = Path(file_path)
        self.logger = logger
        self._entries: dict[str, CacheEntry] = self._load()

    def _load(self) -> dict[str, CacheEntry]:
        """캐시 파일 로드 (손상된 파일은 빈 캐시로 취급)"""
        if not self.file_path.exists():
            return {}

        try:
            with open(self.file_path, encoding='utf-8') as f:
                raw = json.load(f)

            entries = {}
            for item in raw.get('entries', []):
                entry = CacheEntry.model_validate(item)
                entries[entry.key] = entry

            self.logger.debug(f"캐시 파일 로드 완료: {self.file_path} ({len(entries)}개 항목)")
            return entries

        except (OSError, ValueError, AttributeError, ValidationError) as e:
            self.logger.error(f"캐시 파일 읽기 오류, 빈 캐시로 시작: {self.file_path} - {e}")
            return {}

    def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        return entry.value if entry else None

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def set(self, key: str, value: str) -> None:
        entries = dict(self._entries)
        entries[key] = _build_entry(key, value)

        try:
            self._write(entries)
        except (OSError, ValueError) as e:
            raise CacheWriteFailedException(key, str(e)) from e

        self._entries = entries

    def _write(self, entries: dict[str, CacheEntry]) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            'entries': [entry.model_dump(mode='json') for entry in entries.values()]
        }

        fd, temp_name = tempfile.mkstemp(dir=self.file_path.parent, prefix='.cache-', suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(temp_name, self.file_path)
        except BaseException:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
            raise
