"""
명령줄 진입점

python -m dotnet_acquisition install-script
python -m dotnet_acquisition releases
"""

import argparse
import asyncio
import sys
from typing import Optional

from .acquisition import CachedFetchWorker, HttpFetcher, InstallScriptProvider, ReleaseManifestProvider
from .cache import JsonFileCacheStore
from .config.settings import Settings, get_settings
from .event_stream import EventStream, LoggingObserver, TelemetryObserver
from .exceptions import AcquisitionFailedException
from .utils.logging import setup_logging


def build_event_stream(settings: Settings) -> EventStream:
    """로깅 옵저버(및 설정 시 텔레메트리 옵저버)가 등록된 이벤트 스트림 생성"""
    event_stream = EventStream()
    event_stream.subscribe(LoggingObserver())
    if settings.telemetry_enabled:
        event_stream.subscribe(TelemetryObserver(config=settings.extension_config()))
    return event_stream


async def run(command: str, settings: Settings) -> int:
    """
    명령 실행

    Args:
        command: install-script 또는 releases
        settings: 시스템 설정

    Returns:
        종료 코드
    """
    event_stream = build_event_stream(settings)
    cache_store = JsonFileCacheStore(settings.cache_store_path)

    async with HttpFetcher(settings) as fetcher:
        fetch_worker = CachedFetchWorker(cache_store, fetcher)
        try:
            if command == "install-script":
                provider = InstallScriptProvider(cache_store, event_stream, settings, fetch_worker)
                print(await provider.get_install_script_path())
            else:
                manifest_provider = ReleaseManifestProvider(cache_store, event_stream, settings, fetch_worker)
                for version in await manifest_provider.get_available_versions():
                    print(version)
        except AcquisitionFailedException as e:
            print(e.message, file=sys.stderr)
            return 1
        finally:
            event_stream.dispose()

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="dotnet_acquisition",
        description="dotnet 설치 스크립트와 릴리스 매니페스트를 캐시 우선으로 가져옵니다"
    )
    parser.add_argument("command", choices=["install-script", "releases"], help="실행할 명령")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings)
    return asyncio.run(run(args.command, settings))


if __name__ == "__main__":
    sys.exit(main())
