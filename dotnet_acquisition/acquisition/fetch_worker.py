"""
캐시 우선 가져오기 워커 모듈

저장된 응답이 있으면 그대로 사용하고, 없을 때만 네트워크에서 가져와 캐시에 저장합니다.
캐시에는 만료 시간이 없으며, 갱신이 필요한 호출자는 버전을 포함한 캐시 키를 사용합니다.
"""

import asyncio
from collections.abc import Awaitable
from typing import Callable, Optional

import aiohttp

from ..cache.store import CacheStoreBase
from ..config.settings import Settings
from ..exceptions import CacheWriteFailedException, FetchFailedException
from ..models.base import FetchRequest
from ..models.enums import FetchFailureReason
from ..utils.logging import get_logger

logger = get_logger(__name__)

Fetcher = Callable[[str], Awaitable[str]]


class HttpFetcher:
    """aiohttp 기반 네트워크 가져오기"""

    def __init__(self, settings: Optional[Settings] = None):
        """
        HTTP 가져오기 초기화

        Args:
            settings: 시스템 설정 (None이면 기본 설정 사용)
        """
        if settings is None:
            from ..config.settings import get_settings
            settings = get_settings()

        self.settings = settings
        self.logger = logger
        self.session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """HTTP 세션 생성"""
        if not self.session or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.http_timeout),
                headers={
                    'User-Agent': self.settings.user_agent
                }
            )
        return self.session

    async def __call__(self, uri: str) -> str:
        """
        URI 내용을 텍스트로 가져오기

        Args:
            uri: 요청 URI

        Returns:
            응답 본문

        Raises:
            FetchFailedException: URI 없음, 네트워크 오류, 2xx 이외의 응답
        """
        if not uri or not uri.strip():
            raise FetchFailedException(FetchFailureReason.NO_URI)

        session = await self._get_session()

        try:
            async with session.get(uri) as response:
                if not 200 <= response.status < 300:
                    raise FetchFailedException(
                        FetchFailureReason.BAD_RESPONSE,
                        uri,
                        detail=response.reason,
                        status_code=response.status
                    )
                try:
                    content = await response.text()
                except UnicodeDecodeError as e:
                    raise FetchFailedException(
                        FetchFailureReason.BAD_RESPONSE,
                        uri,
                        detail=f"응답 본문 디코딩 실패: {e.reason}",
                        status_code=response.status
                    ) from e
                self.logger.debug(f"HTTP 응답 수신: {uri} ({len(content)}자)")
                return content

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchFailedException(
                FetchFailureReason.NETWORK_ERROR, uri, detail=str(e) or type(e).__name__
            ) from e

    async def close(self) -> None:
        """세션 정리"""
        if self.session:
            await self.session.close()
            self.session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class CachedFetchWorker:
    """캐시 우선 가져오기 워커

    이벤트를 게시하지 않으며 파일 시스템에도 접근하지 않습니다.
    """

    def __init__(self, cache_store: CacheStoreBase, fetcher: Optional[Fetcher] = None):
        """
        워커 초기화

        Args:
            cache_store: 캐시 저장소
            fetcher: URI를 받아 텍스트를 반환하는 비동기 호출 객체 (None이면 HttpFetcher)
        """
        self.cache_store = cache_store
        self.fetcher = fetcher if fetcher is not None else HttpFetcher()
        self.logger = logger

    async def get_cached_data(self, request: FetchRequest) -> str:
        """
        캐시된 데이터 가져오기 (캐시 우선)

        Args:
            request: 가져오기 요청

        Returns:
            리소스 내용

        Raises:
            FetchFailedException: 캐시에 없고 네트워크 가져오기도 실패했을 때
        """
        cached = self.cache_store.get(request.cache_key)
        if cached is not None:
            self.logger.debug(f"캐시 적중: {request.cache_key}")
            return cached

        self.logger.info(f"캐시 없음, 가져오기 시작: {request.cache_key} <- {request.uri or '(URI 없음)'}")

        if not request.uri or not request.uri.strip():
            raise FetchFailedException(FetchFailureReason.NO_URI)

        try:
            content = await self.fetcher(request.uri)
        except FetchFailedException:
            raise
        except Exception as e:
            raise FetchFailedException(
                FetchFailureReason.NETWORK_ERROR, request.uri, detail=str(e) or type(e).__name__
            ) from e

        try:
            self.cache_store.set(request.cache_key, content)
        except CacheWriteFailedException as e:
            self.logger.warning(f"캐시 저장 실패, 가져온 값은 그대로 반환: {e}")

        return content

    async def close(self) -> None:
        """기본 HTTP 가져오기를 사용하는 경우 세션 정리"""
        if isinstance(self.fetcher, HttpFetcher):
            await self.fetcher.close()
