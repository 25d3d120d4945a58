#!/usr/bin/env python3
"""
설치 스크립트 획득 사용 예제

캐시 우선 워커와 이벤트 스트림을 조합해 dotnet 설치 스크립트와 릴리스 매니페스트를 가져옵니다.
"""

import asyncio
import tempfile
from pathlib import Path

from dotnet_acquisition.acquisition import CachedFetchWorker, HttpFetcher, InstallScriptProvider, ReleaseManifestProvider
from dotnet_acquisition.cache import JsonFileCacheStore
from dotnet_acquisition.config.settings import Settings
from dotnet_acquisition.event_stream import EventStream, LoggingObserver, TelemetryObserver
from dotnet_acquisition.exceptions import AcquisitionFailedException
from dotnet_acquisition.monitoring import get_metrics_summary
from dotnet_acquisition.utils.logging import setup_logging


async def basic_usage_example():
    """기본 사용법 예제"""
    print("=== 설치 스크립트 획득 기본 사용법 ===")

    work_dir = Path(tempfile.mkdtemp())
    settings = Settings(
        install_root=str(work_dir),
        cache_store_path=str(work_dir / "extension_state.json"),
        log_level="DEBUG"
    )
    setup_logging(settings)

    event_stream = EventStream()
    event_stream.subscribe(LoggingObserver())
    event_stream.subscribe(TelemetryObserver(config=settings.extension_config()))

    cache_store = JsonFileCacheStore(settings.cache_store_path)

    async with HttpFetcher(settings) as fetcher:
        fetch_worker = CachedFetchWorker(cache_store, fetcher)

        print("\n1. 설치 스크립트 획득")
        provider = InstallScriptProvider(cache_store, event_stream, settings, fetch_worker)
        try:
            script_path = await provider.get_install_script_path()
            print(f"스크립트 경로: {script_path}")

            # 두 번째 호출은 캐시를 사용
            await provider.get_install_script_path()
        except AcquisitionFailedException as e:
            print(f"획득 실패: {e.message}")

        print("\n2. 릴리스 채널 목록")
        manifest_provider = ReleaseManifestProvider(cache_store, event_stream, settings, fetch_worker)
        try:
            versions = await manifest_provider.get_available_versions()
            print(f"사용 가능한 채널: {versions}")
        except AcquisitionFailedException as e:
            print(f"획득 실패: {e.message}")

    print("\n3. 텔레메트리 요약")
    print(get_metrics_summary())

    event_stream.dispose()


async def failure_injection_example():
    """파일 기록 실패 주입 예제"""
    print("\n=== 파일 기록 실패 주입 ===")

    settings = Settings(install_root=tempfile.mkdtemp())
    event_stream = EventStream()
    event_stream.subscribe(LoggingObserver())

    async def offline_fetcher(uri: str) -> str:
        return "#!/bin/bash\necho offline"

    def failing_writer(script_content: str, file_path: Path) -> None:
        raise OSError("Failed to write file")

    cache_store = JsonFileCacheStore(Path(settings.install_root) / "extension_state.json")
    provider = InstallScriptProvider(
        cache_store,
        event_stream,
        settings,
        fetch_worker=CachedFetchWorker(cache_store, offline_fetcher),
        script_writer=failing_writer
    )

    try:
        await provider.get_install_script_path()
    except AcquisitionFailedException as e:
        print(f"예상된 실패: {e.message}")
        print(f"원인: {type(e.cause).__name__}")


async def main():
    await basic_usage_example()
    await failure_injection_example()


if __name__ == "__main__":
    asyncio.run(main())
