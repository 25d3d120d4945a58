"""
릴리스 매니페스트 테스트 모듈
"""

import json

import pytest

from dotnet_acquisition.acquisition.fetch_worker import CachedFetchWorker
from dotnet_acquisition.acquisition.release_manifest import RELEASES_CACHE_KEY, ReleaseManifestProvider
from dotnet_acquisition.cache.store import MemoryCacheStore
from dotnet_acquisition.config.settings import Settings
from dotnet_acquisition.event_stream.events import (
    ReleaseManifestAcquisitionCompleted,
    ReleaseManifestAcquisitionError,
    ReleaseManifestEntrySkipped,
)
from dotnet_acquisition.event_stream.stream import EventStream
from dotnet_acquisition.exceptions import AcquisitionFailedException, FetchFailedException

from fakes import CountingFetcher, RecordingObserver

MOCK_RELEASES_INDEX = {
    "releases-index": [
        {
            "channel-version": "8.0",
            "latest-release": "8.0.10",
            "latest-runtime": "8.0.10",
            "latest-sdk": "8.0.403",
            "release-type": "lts",
            "support-phase": "active",
            "releases.json": "https://example.com/8.0/releases.json"
        },
        {
            "channel-version": "2.2",
            "latest-release": "2.2.8",
            "latest-runtime": "2.2.8",
            "support-phase": "eol"
        },
        {
            "channel-version": "2.1",
            "latest-release": "2.1.14"
        }
    ]
}


class TestReleaseManifestProvider:
    """릴리스 매니페스트 제공자 테스트"""

    @pytest.fixture
    def settings(self, tmp_path):
        return Settings(install_root=str(tmp_path))

    @pytest.fixture
    def observer(self):
        return RecordingObserver()

    @pytest.fixture
    def event_stream(self, observer):
        stream = EventStream()
        stream.subscribe(observer)
        return stream

    @pytest.fixture
    def cache_store(self):
        return MemoryCacheStore()

    def make_provider(self, cache_store, event_stream, settings, fetcher):
        return ReleaseManifestProvider(
            cache_store, event_stream, settings, fetch_worker=CachedFetchWorker(cache_store, fetcher)
        )

    @pytest.mark.asyncio
    async def test_parse_manifest(self, cache_store, event_stream, observer, settings):
        """매니페스트 파싱 테스트"""
        fetcher = CountingFetcher(json.dumps(MOCK_RELEASES_INDEX))
        provider = self.make_provider(cache_store, event_stream, settings, fetcher)

        manifest = await provider.get_release_manifest()

        assert manifest.channel_versions() == ["8.0", "2.2", "2.1"]
        assert manifest.channels[0].latest_sdk == "8.0.403"
        assert manifest.channels[0].release_type == "lts"
        assert manifest.channels[2].support_phase is None
        assert fetcher.requested_uris == [settings.release_manifest_url]

        completed = [e for e in observer.events if isinstance(e, ReleaseManifestAcquisitionCompleted)]
        assert len(completed) == 1
        assert completed[0].channel_count == 3

    @pytest.mark.asyncio
    async def test_available_versions_use_cache(self, cache_store, event_stream, settings):
        """버전 목록 조회 시 캐시 사용 테스트"""
        fetcher = CountingFetcher(json.dumps(MOCK_RELEASES_INDEX))
        provider = self.make_provider(cache_store, event_stream, settings, fetcher)

        first = await provider.get_available_versions()
        second = await provider.get_available_versions()

        assert first == second == ["8.0", "2.2", "2.1"]
        assert fetcher.request_count == 1
        assert cache_store.get(RELEASES_CACHE_KEY) is not None

    @pytest.mark.asyncio
    async def test_invalid_entries_skipped_with_diagnostic(self, cache_store, event_stream, observer, settings):
        """잘못된 항목 건너뛰기 테스트"""
        content = json.dumps({"releases-index": [{"channel-version": "8.0"}, {"latest-release": "1.0.0"}]})
        provider = self.make_provider(cache_store, event_stream, settings, CountingFetcher(content))

        manifest = await provider.get_release_manifest()

        assert manifest.channel_versions() == ["8.0"]
        skipped = [e for e in observer.events if isinstance(e, ReleaseManifestEntrySkipped)]
        assert len(skipped) == 1
        assert skipped[0].message.startswith("#1")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["not json", "[]", json.dumps({"releases": []})])
    async def test_malformed_manifest(self, cache_store, event_stream, observer, settings, content):
        """형식이 잘못된 매니페스트 테스트"""
        provider = self.make_provider(cache_store, event_stream, settings, CountingFetcher(content))

        with pytest.raises(AcquisitionFailedException) as exc_info:
            await provider.get_release_manifest()

        assert isinstance(exc_info.value.cause, ValueError)
        errors = [e for e in observer.events if e.is_error]
        assert len(errors) == 1
        assert isinstance(errors[0], ReleaseManifestAcquisitionError)

    @pytest.mark.asyncio
    async def test_no_uri_configured(self, cache_store, event_stream, observer, settings):
        """매니페스트 URL 없음 테스트"""
        settings.release_manifest_url = ""
        fetcher = CountingFetcher()
        provider = self.make_provider(cache_store, event_stream, settings, fetcher)

        with pytest.raises(AcquisitionFailedException) as exc_info:
            await provider.get_release_manifest()

        assert isinstance(exc_info.value.cause, FetchFailedException)
        assert fetcher.request_count == 0
        assert len([e for e in observer.events if e.is_error]) == 1
