"""
이벤트 정의 모듈

이벤트 스트림에 게시되는 불변 이벤트 클래스들을 정의합니다.
각 이벤트는 상태 전이 시점에 생성되어 한 번 게시되며 이후 변경되지 않습니다.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from ..models.enums import EventKind
from ..utils.helpers import sanitize_text


@dataclass(frozen=True)
class Event:
    """이벤트 기본 클래스"""

    kind: ClassVar[EventKind] = EventKind.DIAGNOSTIC

    @property
    def event_name(self) -> str:
        return type(self).__name__

    @property
    def is_error(self) -> bool:
        return self.kind == EventKind.ERROR

    def get_properties(self) -> Optional[dict[str, str]]:
        """원본 속성 (로깅용, 개인 정보가 포함될 수 있음)"""
        return None

    def get_sanitized_properties(self) -> Optional[dict[str, str]]:
        """
        개인 식별 정보가 제거된 속성 반환 (텔레메트리 전송용)

        Returns:
            속성 딕셔너리 (속성이 없으면 None)
        """
        properties = self.get_properties()
        if properties is None:
            return None
        return {key: sanitize_text(value) for key, value in properties.items()}


@dataclass(frozen=True)
class CompletedEvent(Event):
    """작업 완료 이벤트"""

    kind: ClassVar[EventKind] = EventKind.COMPLETED


@dataclass(frozen=True)
class ErrorEvent(Event):
    """오류 이벤트"""

    kind: ClassVar[EventKind] = EventKind.ERROR

    error: BaseException = field(default_factory=lambda: Exception("알 수 없는 오류"))

    def get_properties(self) -> Optional[dict[str, str]]:
        properties = {
            "ErrorName": type(self.error).__name__,
            "ErrorMessage": str(self.error),
        }
        error_code = getattr(self.error, "error_code", None)
        if error_code:
            properties["ErrorCode"] = error_code

        # 래핑된 원인 예외가 있으면 함께 기록
        cause = getattr(self.error, "cause", None) or self.error.__cause__
        if cause is not None:
            properties["CauseName"] = type(cause).__name__
            properties["CauseMessage"] = str(cause)
        return properties


@dataclass(frozen=True)
class DiagnosticEvent(Event):
    """진단 이벤트"""

    kind: ClassVar[EventKind] = EventKind.DIAGNOSTIC

    message: str = ""

    def get_properties(self) -> Optional[dict[str, str]]:
        return {"Message": self.message} if self.message else None


@dataclass(frozen=True)
class InstallScriptAcquisitionCompleted(CompletedEvent):
    """설치 스크립트 획득 완료"""

    script_path: str = ""

    def get_properties(self) -> Optional[dict[str, str]]:
        return {"ScriptPath": self.script_path} if self.script_path else None


@dataclass(frozen=True)
class InstallScriptAcquisitionError(ErrorEvent):
    """설치 스크립트 획득 실패"""


@dataclass(frozen=True)
class ReleaseManifestAcquisitionCompleted(CompletedEvent):
    """릴리스 매니페스트 획득 완료"""

    channel_count: int = 0

    def get_properties(self) -> Optional[dict[str, str]]:
        return {"ChannelCount": str(self.channel_count)}


@dataclass(frozen=True)
class ReleaseManifestAcquisitionError(ErrorEvent):
    """릴리스 매니페스트 획득 실패"""


@dataclass(frozen=True)
class ReleaseManifestEntrySkipped(DiagnosticEvent):
    """릴리스 매니페스트의 잘못된 항목을 건너뜀"""
