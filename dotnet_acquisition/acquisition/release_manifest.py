"""
릴리스 매니페스트 모듈

사용 가능한 릴리스 채널 목록을 캐시 우선 워커로 가져와 파싱합니다.
"""

import json
from typing import Optional

from pydantic import ValidationError

from ..cache.store import CacheStoreBase
from ..config.settings import Settings
from ..event_stream.events import (
    ReleaseManifestAcquisitionCompleted,
    ReleaseManifestAcquisitionError,
    ReleaseManifestEntrySkipped,
)
from ..event_stream.stream import EventStream
from ..exceptions import AcquisitionFailedException
from ..models.base import FetchRequest, ReleaseChannel, ReleaseManifest
from ..utils.logging import get_logger
from .fetch_worker import CachedFetchWorker, HttpFetcher

logger = get_logger(__name__)

RELEASES_CACHE_KEY = "releases"


class ReleaseManifestProvider:
    """릴리스 매니페스트 제공자"""

    def __init__(
        self,
        cache_store: CacheStoreBase,
        event_stream: EventStream,
        settings: Optional[Settings] = None,
        fetch_worker: Optional[CachedFetchWorker] = None
    ):
        if settings is None:
            from ..config.settings import get_settings
            settings = get_settings()

        self.settings = settings
        self.event_stream = event_stream
        self.logger = logger
        self.fetch_worker = fetch_worker or CachedFetchWorker(cache_store, HttpFetcher(settings))

    async def get_release_manifest(self) -> ReleaseManifest:
        """
        릴리스 매니페스트 가져오기

        Returns:
            파싱된 릴리스 매니페스트

        Raises:
            AcquisitionFailedException: 가져오기 실패 또는 매니페스트 형식 오류
        """
        request = FetchRequest(uri=self.settings.release_manifest_url, cache_key=RELEASES_CACHE_KEY)

        try:
            content = await self.fetch_worker.get_cached_data(request)
            manifest = self._parse_manifest(content)

        except Exception as e:
            self.event_stream.post(ReleaseManifestAcquisitionError(error=e))
            raise AcquisitionFailedException("릴리스 매니페스트", e) from e

        self.event_stream.post(ReleaseManifestAcquisitionCompleted(channel_count=len(manifest.channels)))
        return manifest

    async def get_available_versions(self) -> list[str]:
        """
        사용 가능한 채널 버전 목록 조회

        Returns:
            매니페스트 순서의 채널 버전 목록
        """
        manifest = await self.get_release_manifest()
        versions = manifest.channel_versions()
        self.logger.debug(f"사용 가능한 버전: {versions}")
        return versions

    def _parse_manifest(self, content: str) -> ReleaseManifest:
        """매니페스트 JSON 파싱 (잘못된 항목은 진단 이벤트와 함께 건너뜀)"""
        data = json.loads(content)

        if not isinstance(data, dict) or not isinstance(data.get('releases-index'), list):
            raise ValueError("매니페스트에 releases-index 목록이 없습니다")

        channels = []
        for index, item in enumerate(data['releases-index']):
            try:
                channels.append(ReleaseChannel.model_validate(item))
            except ValidationError as e:
                self.logger.warning(f"잘못된 매니페스트 항목 건너뜀: #{index}")
                self.event_stream.post(ReleaseManifestEntrySkipped(
                    message=f"#{index}: {e.error_count()}개 검증 오류"
                ))

        return ReleaseManifest(channels=channels)

    async def close(self) -> None:
        """리소스 정리"""
        await self.fetch_worker.close()
