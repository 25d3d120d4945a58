"""
설정 관리 모듈

환경 변수를 통한 시스템 설정을 관리합니다.
"""

import logging
import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationException
from ..utils.helpers import validate_url


class ExtensionConfig(BaseModel):
    """텔레메트리에 주입되는 확장 식별 정보"""

    extension_id: str = "dotnet-acquisition"
    extension_version: str = "1.0.0"
    telemetry_key: Optional[str] = None


class Settings(BaseSettings):
    """시스템 설정 관리 클래스"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # 원격 리소스 설정
    install_script_base_url: str = Field(
        default="https://dot.net/v1/dotnet-install",
        description="설치 스크립트 기본 URL (플랫폼별 확장자가 뒤에 붙음)"
    )
    release_manifest_url: str = Field(
        default="https://dotnetcli.blob.core.windows.net/dotnet/release-metadata/releases-index.json",
        description="릴리스 매니페스트 URL"
    )

    # 로컬 저장 설정
    install_root: str = Field(
        default="./cache",
        description="설치 스크립트가 기록될 루트 디렉토리"
    )
    cache_store_path: str = Field(
        default="./cache/extension_state.json",
        description="영속 캐시 저장소 파일 경로"
    )

    # HTTP 설정
    http_timeout: int = Field(
        default=30,
        description="HTTP 요청 타임아웃 (초)"
    )
    user_agent: str = Field(
        default="dotnet-acquisition/1.0",
        description="HTTP User-Agent 헤더"
    )

    # 텔레메트리 설정
    extension_id: str = Field(
        default="dotnet-acquisition",
        description="확장 식별자"
    )
    extension_version: str = Field(
        default="1.0.0",
        description="확장 버전"
    )
    telemetry_key: Optional[str] = Field(
        default=None,
        description="텔레메트리 키"
    )
    telemetry_enabled: bool = Field(
        default=True,
        description="텔레메트리 활성화 여부"
    )

    # 로깅 설정
    log_level: str = Field(
        default="INFO",
        description="로그 레벨"
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="로그 포맷"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="로그 파일 경로"
    )

    def extension_config(self) -> ExtensionConfig:
        """텔레메트리용 확장 설정 반환"""
        return ExtensionConfig(
            extension_id=self.extension_id,
            extension_version=self.extension_version,
            telemetry_key=self.telemetry_key,
        )

    def validate_configuration(self) -> None:
        """설정 유효성 검증"""
        # URL 검증
        for key in ("install_script_base_url", "release_manifest_url"):
            if not validate_url(getattr(self, key)):
                raise ConfigurationException(key.upper(), "유효한 http(s) URL이 필요합니다")

        if self.http_timeout <= 0:
            raise ConfigurationException("HTTP_TIMEOUT", "0보다 커야 합니다")

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationException("LOG_LEVEL", f"알 수 없는 로그 레벨: {self.log_level}")

        # 설치 루트 디렉토리 생성
        os.makedirs(self.install_root, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    """
    설정 인스턴스를 반환합니다 (싱글톤 패턴)

    Returns:
        Settings: 설정 인스턴스
    """
    settings = Settings()
    settings.validate_configuration()
    return settings
