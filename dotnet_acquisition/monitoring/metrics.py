"""
Prometheus 메트릭 모듈

획득 이벤트 텔레메트리를 Prometheus 메트릭으로 수집합니다.
"""

import platform
import sys
from typing import Any, Optional

from prometheus_client import CollectorRegistry, Counter, Info

from ..utils.logging import get_logger

# 메트릭 레지스트리
REGISTRY = CollectorRegistry()

logger = get_logger(__name__)

# 이벤트 관련 메트릭
EVENT_COUNT = Counter(
    'acquisition_events_total',
    '게시된 획득 이벤트 총 수',
    ['event_name', 'kind'],
    registry=REGISTRY
)

ERROR_COUNT = Counter(
    'acquisition_errors_total',
    '획득 오류 이벤트 총 수',
    ['event_name', 'error_type'],
    registry=REGISTRY
)

# 확장 정보
EXTENSION_INFO = Info(
    'acquisition_extension',
    '획득 확장 정보',
    registry=REGISTRY
)


def set_extension_info(extension_id: str, extension_version: str, telemetry_key: Optional[str] = None) -> None:
    """
    확장 정보 메트릭 설정

    Args:
        extension_id: 확장 식별자
        extension_version: 확장 버전
        telemetry_key: 텔레메트리 키 (설정된 경우 존재 여부만 기록)
    """
    EXTENSION_INFO.info({
        'extension_id': extension_id,
        'extension_version': extension_version,
        'telemetry_key_configured': str(bool(telemetry_key)).lower(),
        'python_version': f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        'platform': platform.system()
    })


def record_event(event_name: str, kind: str) -> None:
    """
    이벤트 발생 기록

    Args:
        event_name: 이벤트 이름
        kind: 이벤트 종류 (completed, error, diagnostic)
    """
    EVENT_COUNT.labels(event_name=event_name, kind=kind).inc()
    logger.debug(f"이벤트 메트릭 기록: {event_name} ({kind})")


def record_error(event_name: str, error_type: str) -> None:
    """
    오류 이벤트 기록

    Args:
        event_name: 이벤트 이름
        error_type: 오류 타입
    """
    ERROR_COUNT.labels(event_name=event_name, error_type=error_type).inc()
    logger.debug(f"오류 메트릭 기록: {event_name} - {error_type}")


def get_metric_value(name: str, labels: dict[str, str]) -> float:
    """레지스트리에서 현재 메트릭 값 조회 (없으면 0)"""
    value = REGISTRY.get_sample_value(name, labels)
    return value if value is not None else 0.0


def get_metrics_summary() -> dict[str, Any]:
    """
    메트릭 요약 정보 반환

    Returns:
        이벤트 이름별 발생 횟수 딕셔너리
    """
    summary: dict[str, Any] = {"events": {}, "errors": {}}
    for metric in REGISTRY.collect():
        for sample in metric.samples:
            if sample.name == 'acquisition_events_total':
                summary["events"][sample.labels['event_name']] = sample.value
            elif sample.name == 'acquisition_errors_total':
                summary["errors"][sample.labels['event_name']] = sample.value
    return summary
