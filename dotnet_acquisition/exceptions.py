"""
예외 클래스 정의 모듈

런타임 획득 시스템에서 사용되는 커스텀 예외들을 정의합니다.
"""

from pathlib import Path
from typing import Optional, Union

from .models.enums import FetchFailureReason


class AcquisitionSystemException(Exception):
    """획득 시스템 기본 예외 클래스"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        """
        예외 초기화

        Args:
            message: 오류 메시지
            error_code: 오류 코드 (선택사항)
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class FetchFailedException(AcquisitionSystemException):
    """원격 리소스 가져오기 실패 시 발생하는 예외"""

    def __init__(
        self,
        reason: FetchFailureReason,
        uri: str = "",
        detail: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        """
        가져오기 실패 예외 초기화

        Args:
            reason: 실패 원인 (URI 없음, 네트워크 오류, 잘못된 응답)
            uri: 요청 URI
            detail: 오류 상세 정보
            status_code: HTTP 상태 코드 (잘못된 응답일 때)
        """
        if reason == FetchFailureReason.NO_URI:
            message = "가져오기 실패: 요청 URI가 설정되지 않았습니다"
        elif reason == FetchFailureReason.BAD_RESPONSE:
            message = f"가져오기 실패: {uri} - HTTP {status_code}"
        else:
            message = f"가져오기 실패: {uri} - 네트워크 오류"

        if detail:
            message = f"{message} ({detail})"

        super().__init__(message, "FETCH_FAILED")
        self.reason = reason
        self.uri = uri
        self.detail = detail
        self.status_code = status_code


class CacheWriteFailedException(AcquisitionSystemException):
    """캐시 저장소 쓰기 실패 시 발생하는 예외"""

    def __init__(self, key: str, detail: str):
        message = f"캐시 쓰기 실패: {key} - {detail}"
        super().__init__(message, "CACHE_WRITE_FAILED")
        self.key = key
        self.detail = detail


class ScriptWriteFailedException(AcquisitionSystemException):
    """스크립트 파일 쓰기 실패 시 발생하는 예외"""

    def __init__(self, file_path: Union[str, Path], underlying: BaseException):
        """
        스크립트 쓰기 실패 예외 초기화

        Args:
            file_path: 대상 파일 경로
            underlying: 원인 예외
        """
        message = f"스크립트 파일 쓰기 실패: {file_path} - {underlying}"
        super().__init__(message, "SCRIPT_WRITE_FAILED")
        self.file_path = Path(file_path)
        self.underlying = underlying


class AcquisitionFailedException(AcquisitionSystemException):
    """획득 작업 전체 실패 시 호출자에게 전달되는 최상위 예외"""

    def __init__(self, resource: str, cause: BaseException):
        """
        획득 실패 예외 초기화

        Args:
            resource: 획득하려던 리소스 이름
            cause: 원인 예외 (구조화된 형태로 보존됨)
        """
        message = f"{resource} 획득 실패: {cause}"
        super().__init__(message, "ACQUISITION_FAILED")
        self.resource = resource
        self.cause = cause


class ConfigurationException(AcquisitionSystemException):
    """설정 오류 시 발생하는 예외"""

    def __init__(self, config_key: str, error_detail: str):
        """
        설정 예외 초기화

        Args:
            config_key: 설정 키
            error_detail: 오류 상세 정보
        """
        message = f"설정 오류: {config_key} - {error_detail}"
        super().__init__(message, "CONFIGURATION_ERROR")
        self.config_key = config_key
        self.error_detail = error_detail
