"""
설치 스크립트 획득 모듈

플랫폼별 dotnet-install 스크립트를 캐시 우선 워커로 가져와 실행 가능한 파일로 기록합니다.
"""

import asyncio
import os
import sys
import tempfile
from pathlib import Path
from typing import Callable, Optional, Union

from ..cache.store import CacheStoreBase
from ..config.settings import Settings
from ..event_stream.events import InstallScriptAcquisitionCompleted, InstallScriptAcquisitionError
from ..event_stream.stream import EventStream
from ..exceptions import AcquisitionFailedException, ScriptWriteFailedException
from ..models.base import FetchRequest, ScriptArtifact
from ..models.enums import ScriptPlatform
from ..utils.helpers import calculate_string_hash, ensure_directory
from ..utils.logging import get_logger
from .fetch_worker import CachedFetchWorker, HttpFetcher

logger = get_logger(__name__)

SCRIPT_FILE_NAME = "dotnet-install"
SCRIPT_DIRECTORY_NAME = "install scripts"
SCRIPT_CACHE_KEY = "dotnet-install"
SCRIPT_FILE_MODE = 0o777

ScriptWriter = Callable[[str, Path], None]


def detect_platform(platform_name: Optional[str] = None) -> ScriptPlatform:
    """
    호스트 플랫폼에 맞는 스크립트 종류 선택

    Args:
        platform_name: sys.platform 형식의 플랫폼 이름 (None이면 현재 호스트)

    Returns:
        Windows이면 PowerShell, 그 외에는 셸 스크립트
    """
    platform_name = platform_name or sys.platform
    return ScriptPlatform.WINDOWS if platform_name == "win32" else ScriptPlatform.UNIX


def write_script_file(script_content: str, file_path: Union[str, Path]) -> None:
    """
    스크립트 내용을 실행 가능한 파일로 기록

    임시 파일에 먼저 쓴 뒤 권한을 설정하고 대상 경로로 교체하므로,
    실패 시 대상 경로에 일부만 기록된 파일이 남지 않습니다.

    Args:
        script_content: 스크립트 내용
        file_path: 대상 파일 경로

    Raises:
        ScriptWriteFailedException: 디렉토리 생성, 쓰기, 권한 설정 중 하나라도 실패한 경우
    """
    file_path = Path(file_path)
    temp_name = None

    try:
        directory = ensure_directory(file_path.parent)

        fd, temp_name = tempfile.mkstemp(dir=directory, prefix=f".{file_path.name}.", suffix=".tmp")
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
            f.write(script_content)

        os.chmod(temp_name, SCRIPT_FILE_MODE)
        os.replace(temp_name, file_path)
        temp_name = None

    except Exception as e:
        raise ScriptWriteFailedException(file_path, e) from e

    finally:
        # 교체되지 않은 임시 파일 정리
        if temp_name and os.path.exists(temp_name):
            os.unlink(temp_name)


class InstallScriptProvider:
    """설치 스크립트 제공자"""

    def __init__(
        self,
        cache_store: CacheStoreBase,
        event_stream: EventStream,
        settings: Optional[Settings] = None,
        fetch_worker: Optional[CachedFetchWorker] = None,
        script_writer: Optional[ScriptWriter] = None,
        platform_name: Optional[str] = None
    ):
        """
        설치 스크립트 제공자 초기화

        Args:
            cache_store: 캐시 저장소
            event_stream: 이벤트 스트림
            settings: 시스템 설정 (None이면 기본 설정 사용)
            fetch_worker: 캐시 우선 워커 (None이면 HTTP 워커 생성)
            script_writer: 스크립트 파일 기록 함수 (None이면 write_script_file)
            platform_name: 플랫폼 이름 (None이면 현재 호스트)
        """
        if settings is None:
            from ..config.settings import get_settings
            settings = get_settings()

        self.settings = settings
        self.event_stream = event_stream
        self.logger = logger

        self.platform = detect_platform(platform_name)
        script_file_name = SCRIPT_FILE_NAME + self.platform.value
        self.script_uri = settings.install_script_base_url + self.platform.value
        self.script_file_path = Path(settings.install_root) / SCRIPT_DIRECTORY_NAME / script_file_name

        self.fetch_worker = fetch_worker or CachedFetchWorker(cache_store, HttpFetcher(settings))
        self.script_writer = script_writer or write_script_file

    async def get_install_script_path(self) -> Path:
        """
        실행 가능한 설치 스크립트 경로 반환

        Returns:
            기록된 스크립트 파일 경로

        Raises:
            AcquisitionFailedException: 가져오기 또는 파일 기록 실패 시 (원인 예외 보존)
        """
        request = FetchRequest(uri=self.script_uri, cache_key=SCRIPT_CACHE_KEY)

        try:
            script = await self.fetch_worker.get_cached_data(request)
            artifact = ScriptArtifact(file_path=self.script_file_path, content=script)
            await self._write_artifact(artifact)

        except Exception as e:
            self.event_stream.post(InstallScriptAcquisitionError(error=e))
            raise AcquisitionFailedException("dotnet 설치 스크립트", e) from e

        self.event_stream.post(InstallScriptAcquisitionCompleted(script_path=str(artifact.file_path)))
        self.logger.info(f"설치 스크립트 준비 완료: {artifact.file_path}")
        return artifact.file_path

    async def _write_artifact(self, artifact: ScriptArtifact) -> None:
        try:
            await asyncio.to_thread(self.script_writer, artifact.content, artifact.file_path)
        except ScriptWriteFailedException:
            raise
        except Exception as e:
            raise ScriptWriteFailedException(artifact.file_path, e) from e

        self.logger.debug(
            f"스크립트 기록 완료: {artifact.file_path} (sha256={calculate_string_hash(artifact.content)[:12]})"
        )

    async def close(self) -> None:
        """리소스 정리"""
        await self.fetch_worker.close()
