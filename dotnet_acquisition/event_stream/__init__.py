"""
이벤트 스트림 패키지

획득 과정의 성공/실패/진단 이벤트를 옵저버(로깅, 텔레메트리)에게 전달합니다.
"""

from .events import (
    CompletedEvent,
    DiagnosticEvent,
    ErrorEvent,
    Event,
    InstallScriptAcquisitionCompleted,
    InstallScriptAcquisitionError,
    ReleaseManifestAcquisitionCompleted,
    ReleaseManifestAcquisitionError,
    ReleaseManifestEntrySkipped,
)
from .observers import LoggingObserver, PrometheusTelemetryReporter, TelemetryObserver, TelemetryReporter
from .stream import EventObserver, EventStream

__all__ = [
    "Event",
    "CompletedEvent",
    "ErrorEvent",
    "DiagnosticEvent",
    "InstallScriptAcquisitionCompleted",
    "InstallScriptAcquisitionError",
    "ReleaseManifestAcquisitionCompleted",
    "ReleaseManifestAcquisitionError",
    "ReleaseManifestEntrySkipped",
    "EventObserver",
    "EventStream",
    "LoggingObserver",
    "TelemetryObserver",
    "TelemetryReporter",
    "PrometheusTelemetryReporter",
]
