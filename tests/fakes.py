"""
테스트용 가짜 객체 모음
"""

from dotnet_acquisition.cache.store import CacheStoreBase
from dotnet_acquisition.event_stream.stream import EventObserver
from dotnet_acquisition.exceptions import CacheWriteFailedException
from dotnet_acquisition.models.enums import EventKind


class CountingFetcher:
    """호출 횟수를 세는 가짜 가져오기"""

    def __init__(self, response: str = "Mock Web Request Result"):
        self.response = response
        self.request_count = 0
        self.requested_uris = []

    async def __call__(self, uri: str) -> str:
        self.request_count += 1
        self.requested_uris.append(uri)
        return self.response


class FailingFetcher:
    """항상 실패하는 가짜 가져오기"""

    def __init__(self, error: Exception):
        self.error = error
        self.request_count = 0

    async def __call__(self, uri: str) -> str:
        self.request_count += 1
        raise self.error


class ReadOnlyCacheStore(CacheStoreBase):
    """쓰기가 항상 실패하는 캐시 저장소"""

    def get(self, key):
        return None

    def set(self, key, value):
        raise CacheWriteFailedException(key, "읽기 전용 저장소")


class RecordingObserver(EventObserver):
    """게시된 이벤트를 기록하는 옵저버"""

    def __init__(self):
        self.events = []

    def post(self, event):
        self.events.append(event)


class FailingObserver(EventObserver):
    """항상 예외를 던지는 옵저버"""

    def __init__(self):
        self.post_count = 0

    def post(self, event):
        self.post_count += 1
        raise RuntimeError("옵저버 오류")


class RecordingTelemetryReporter:
    """전송된 텔레메트리를 기록하는 리포터"""

    def __init__(self):
        self.telemetry_events = []
        self.disposed = False

    def send_telemetry_event(self, event_name, properties=None, kind=None):
        self.telemetry_events.append({"event_name": event_name, "properties": properties, "kind": kind})

    def send_telemetry_error_event(self, event_name, properties=None):
        self.telemetry_events.append({"event_name": f"[ERROR]:{event_name}", "properties": properties, "kind": EventKind.ERROR})

    def dispose(self):
        self.disposed = True
