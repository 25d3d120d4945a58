"""
리소스 획득 모듈

원격 설치 스크립트와 릴리스 매니페스트를 캐시 우선 방식으로 가져옵니다.
"""

from .fetch_worker import CachedFetchWorker, Fetcher, HttpFetcher
from .install_script import InstallScriptProvider, detect_platform, write_script_file
from .release_manifest import ReleaseManifestProvider

__all__ = [
    "CachedFetchWorker",
    "Fetcher",
    "HttpFetcher",
    "InstallScriptProvider",
    "ReleaseManifestProvider",
    "detect_platform",
    "write_script_file",
]
