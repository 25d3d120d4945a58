"""
데이터 모델 패키지

런타임 획득 시스템의 핵심 데이터 모델들을 정의합니다.
"""

from .base import CacheEntry, FetchRequest, ReleaseChannel, ReleaseManifest, ScriptArtifact
from .enums import EventKind, FetchFailureReason, ScriptPlatform

__all__ = [
    "CacheEntry",
    "FetchRequest",
    "ReleaseChannel",
    "ReleaseManifest",
    "ScriptArtifact",
    "EventKind",
    "FetchFailureReason",
    "ScriptPlatform",
]
