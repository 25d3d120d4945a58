"""
설치 스크립트 획득 테스트

스크립트 기록, 권한 설정, 이벤트 게시, 실패 래핑을 검증합니다.
"""

import os
import stat
import sys
from pathlib import Path

import pytest

from dotnet_acquisition.acquisition.fetch_worker import CachedFetchWorker
from dotnet_acquisition.acquisition.install_script import (
    InstallScriptProvider,
    detect_platform,
    write_script_file,
)
from dotnet_acquisition.cache.store import MemoryCacheStore
from dotnet_acquisition.config.settings import Settings
from dotnet_acquisition.event_stream.events import (
    InstallScriptAcquisitionCompleted,
    InstallScriptAcquisitionError,
)
from dotnet_acquisition.event_stream.stream import EventStream
from dotnet_acquisition.exceptions import (
    AcquisitionFailedException,
    FetchFailedException,
    ScriptWriteFailedException,
)
from dotnet_acquisition.models.enums import FetchFailureReason, ScriptPlatform

from fakes import CountingFetcher, RecordingObserver


def failing_writer(script_content, file_path):
    raise OSError("Failed to write file")


class TestDetectPlatform:
    """플랫폼 선택 테스트"""

    def test_windows_uses_powershell(self):
        assert detect_platform("win32") == ScriptPlatform.WINDOWS

    @pytest.mark.parametrize("platform_name", ["linux", "darwin", "freebsd13"])
    def test_other_platforms_use_shell(self, platform_name):
        assert detect_platform(platform_name) == ScriptPlatform.UNIX


class TestWriteScriptFile:
    """스크립트 파일 기록 테스트"""

    def test_creates_missing_directories(self, tmp_path):
        """누락된 상위 디렉토리 생성 테스트"""
        target = tmp_path / "a" / "b" / "install scripts" / "dotnet-install.sh"

        write_script_file("echo hi", target)

        assert target.read_text(encoding="utf-8") == "echo hi"

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX 권한 비트 전용")
    def test_sets_executable_mode(self, tmp_path):
        """실행 권한 설정 테스트"""
        target = tmp_path / "dotnet-install.sh"

        write_script_file("echo hi", target)

        assert stat.S_IMODE(os.stat(target).st_mode) == 0o777

    def test_overwrites_existing_file(self, tmp_path):
        """기존 파일 덮어쓰기 테스트"""
        target = tmp_path / "dotnet-install.sh"
        write_script_file("old", target)
        write_script_file("new", target)

        assert target.read_text(encoding="utf-8") == "new"
        assert [p.name for p in tmp_path.iterdir()] == ["dotnet-install.sh"]

    def test_failure_raises_script_write_failed(self, tmp_path):
        """기록 실패 시 예외 테스트"""
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not directory")

        with pytest.raises(ScriptWriteFailedException) as exc_info:
            write_script_file("echo hi", blocker / "dotnet-install.sh")

        assert isinstance(exc_info.value.underlying, OSError)
        assert exc_info.value.error_code == "SCRIPT_WRITE_FAILED"

    def test_unencodable_content_leaves_no_temp_file(self, tmp_path):
        """인코딩 실패 시 임시 파일 정리 및 기존 파일 유지 테스트"""
        target = tmp_path / "dotnet-install.sh"
        target.write_text("echo old", encoding="utf-8")

        with pytest.raises(ScriptWriteFailedException) as exc_info:
            write_script_file("echo \ud800", target)

        assert isinstance(exc_info.value.underlying, UnicodeEncodeError)
        assert [p.name for p in tmp_path.iterdir()] == ["dotnet-install.sh"]
        assert target.read_text(encoding="utf-8") == "echo old"


class TestInstallScriptProvider:
    """설치 스크립트 제공자 테스트"""

    @pytest.fixture
    def settings(self, tmp_path):
        return Settings(install_root=str(tmp_path), install_script_base_url="https://dot.net/v1/dotnet-install")

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

    @pytest.fixture
    def fetcher(self):
        return CountingFetcher("#!/bin/bash\necho install")

    def make_provider(self, cache_store, event_stream, settings, fetcher, **kwargs):
        return InstallScriptProvider(
            cache_store,
            event_stream,
            settings,
            fetch_worker=CachedFetchWorker(cache_store, fetcher),
            platform_name=kwargs.pop("platform_name", "linux"),
            **kwargs
        )

    def test_uri_and_path_for_unix(self, cache_store, event_stream, settings, fetcher, tmp_path):
        """유닉스 플랫폼 URI/경로 테스트"""
        provider = self.make_provider(cache_store, event_stream, settings, fetcher)

        assert provider.script_uri == "https://dot.net/v1/dotnet-install.sh"
        assert provider.script_file_path == tmp_path / "install scripts" / "dotnet-install.sh"

    def test_uri_and_path_for_windows(self, cache_store, event_stream, settings, fetcher, tmp_path):
        """Windows 플랫폼 URI/경로 테스트"""
        provider = self.make_provider(cache_store, event_stream, settings, fetcher, platform_name="win32")

        assert provider.script_uri == "https://dot.net/v1/dotnet-install.ps1"
        assert provider.script_file_path == tmp_path / "install scripts" / "dotnet-install.ps1"

    @pytest.mark.asyncio
    async def test_successful_acquisition(self, cache_store, event_stream, observer, settings, fetcher):
        """획득 성공 시 파일 기록 및 완료 이벤트 테스트"""
        provider = self.make_provider(cache_store, event_stream, settings, fetcher)

        script_path = await provider.get_install_script_path()

        assert Path(script_path).read_text(encoding="utf-8") == "#!/bin/bash\necho install"
        if sys.platform != "win32":
            assert os.stat(script_path).st_mode & stat.S_IXUSR
        assert fetcher.requested_uris == ["https://dot.net/v1/dotnet-install.sh"]

        completed = [e for e in observer.events if isinstance(e, InstallScriptAcquisitionCompleted)]
        assert len(completed) == 1
        assert not any(e.is_error for e in observer.events)

    @pytest.mark.asyncio
    async def test_write_failure_posts_single_error(self, cache_store, event_stream, observer, settings, fetcher):
        """기록 실패 시 오류 이벤트 1회 및 원인 메시지 포함 테스트"""
        provider = self.make_provider(cache_store, event_stream, settings, fetcher, script_writer=failing_writer)

        with pytest.raises(AcquisitionFailedException) as exc_info:
            await provider.get_install_script_path()

        assert "Failed to write file" in str(exc_info.value)
        assert isinstance(exc_info.value.cause, ScriptWriteFailedException)
        assert isinstance(exc_info.value.cause.underlying, OSError)

        errors = [e for e in observer.events if e.is_error]
        assert len(errors) == 1
        assert isinstance(errors[0], InstallScriptAcquisitionError)
        assert not any(isinstance(e, InstallScriptAcquisitionCompleted) for e in observer.events)

    @pytest.mark.asyncio
    async def test_writer_exception_type_is_wrapped(self, cache_store, event_stream, settings, fetcher):
        """임의 예외를 던지는 기록 함수 래핑 테스트"""
        def broken_writer(script_content, file_path):
            raise RuntimeError("디스크 없음")

        provider = self.make_provider(cache_store, event_stream, settings, fetcher, script_writer=broken_writer)

        with pytest.raises(AcquisitionFailedException) as exc_info:
            await provider.get_install_script_path()

        assert "디스크 없음" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ScriptWriteFailedException)

    @pytest.mark.asyncio
    async def test_fetch_failure_posts_single_error(self, cache_store, event_stream, observer, tmp_path):
        """가져오기 실패(URI 없음) 시 오류 이벤트 테스트"""
        settings = Settings(install_root=str(tmp_path))
        fetcher = CountingFetcher()
        provider = InstallScriptProvider(
            cache_store,
            event_stream,
            settings,
            fetch_worker=CachedFetchWorker(cache_store, fetcher),
            platform_name="linux",
        )
        provider.script_uri = ""

        with pytest.raises(AcquisitionFailedException) as exc_info:
            await provider.get_install_script_path()

        assert isinstance(exc_info.value.cause, FetchFailedException)
        assert exc_info.value.cause.reason == FetchFailureReason.NO_URI
        assert len([e for e in observer.events if e.is_error]) == 1
        assert fetcher.request_count == 0
        assert not provider.script_file_path.exists()

    @pytest.mark.asyncio
    async def test_warm_cache_repeated_calls(self, cache_store, event_stream, observer, settings, fetcher):
        """캐시 적중 상태에서 반복 호출 테스트"""
        provider = self.make_provider(cache_store, event_stream, settings, fetcher)

        first = await provider.get_install_script_path()
        second = await provider.get_install_script_path()

        assert first == second
        assert fetcher.request_count == 1
        assert len([e for e in observer.events if isinstance(e, InstallScriptAcquisitionCompleted)]) == 2
