"""
이벤트 옵저버 모듈

로깅 옵저버와 텔레메트리 옵저버를 제공합니다.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..config.settings import ExtensionConfig
from ..models.enums import EventKind
from ..monitoring import metrics
from ..utils.logging import get_logger
from .events import Event
from .stream import EventObserver

logger = get_logger(__name__)


class LoggingObserver(EventObserver):
    """이벤트를 로그로 기록하는 옵저버"""

    level_by_kind = {
        EventKind.COMPLETED: logging.INFO,
        EventKind.ERROR: logging.ERROR,
        EventKind.DIAGNOSTIC: logging.DEBUG,
    }

    def __init__(self, event_logger: Optional[logging.Logger] = None):
        self.logger = event_logger or get_logger("events")

    def post(self, event: Event) -> None:
        properties = event.get_properties()
        detail = ""
        if properties:
            detail = " " + ", ".join(f"{key}={value}" for key, value in properties.items())
        self.logger.log(self.level_by_kind[event.kind], f"[{event.event_name}]{detail}")


class TelemetryReporter(ABC):
    """텔레메트리 전송 인터페이스"""

    @abstractmethod
    def send_telemetry_event(
        self,
        event_name: str,
        properties: Optional[dict[str, str]] = None,
        kind: Optional[EventKind] = None
    ) -> None:
        pass

    @abstractmethod
    def send_telemetry_error_event(self, event_name: str, properties: Optional[dict[str, str]] = None) -> None:
        pass

    def dispose(self) -> None:
        pass


class PrometheusTelemetryReporter(TelemetryReporter):
    """Prometheus 메트릭으로 텔레메트리를 기록하는 리포터"""

    def __init__(self, config: ExtensionConfig):
        """
        리포터 초기화

        Args:
            config: 확장 식별 정보
        """
        self.config = config
        self.logger = logger
        metrics.set_extension_info(config.extension_id, config.extension_version, config.telemetry_key)

    def send_telemetry_event(
        self,
        event_name: str,
        properties: Optional[dict[str, str]] = None,
        kind: Optional[EventKind] = None
    ) -> None:
        metrics.record_event(event_name, kind.value if kind else "unspecified")

    def send_telemetry_error_event(self, event_name: str, properties: Optional[dict[str, str]] = None) -> None:
        metrics.record_event(event_name, EventKind.ERROR.value)
        error_type = (properties or {}).get("ErrorName", "unknown")
        metrics.record_error(event_name, error_type)


class TelemetryObserver(EventObserver):
    """정제된 이벤트 속성을 텔레메트리 리포터로 전달하는 옵저버"""

    def __init__(self, reporter: Optional[TelemetryReporter] = None, config: Optional[ExtensionConfig] = None):
        """
        텔레메트리 옵저버 초기화

        Args:
            reporter: 텔레메트리 리포터 (None이면 Prometheus 리포터 사용)
            config: 확장 식별 정보 (기본 리포터 생성 시 사용)
        """
        if reporter is None:
            reporter = PrometheusTelemetryReporter(config or ExtensionConfig())
        self.reporter = reporter

    def post(self, event: Event) -> None:
        # 개인 식별 정보가 없는 속성만 전송
        properties = event.get_sanitized_properties()
        if properties is None:
            self.reporter.send_telemetry_event(event.event_name, kind=event.kind)
        elif event.is_error:
            self.reporter.send_telemetry_error_event(event.event_name, properties)
        else:
            self.reporter.send_telemetry_event(event.event_name, properties, kind=event.kind)

    def dispose(self) -> None:
        self.reporter.dispose()
