"""
모니터링 시스템

획득 이벤트 텔레메트리용 Prometheus 메트릭을 제공합니다.
"""

from .metrics import (
    ERROR_COUNT,
    EVENT_COUNT,
    REGISTRY,
    get_metric_value,
    get_metrics_summary,
    record_error,
    record_event,
    set_extension_info,
)

__all__ = [
    "REGISTRY",
    "EVENT_COUNT",
    "ERROR_COUNT",
    "get_metric_value",
    "get_metrics_summary",
    "record_error",
    "record_event",
    "set_extension_info",
]
