"""
기본 데이터 모델 모듈

캐시 항목, 가져오기 요청, 스크립트 아티팩트, 릴리스 매니페스트 모델을 정의합니다.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CacheEntry(BaseModel):
    """캐시 항목 데이터 모델"""

    key: str = Field(
        ...,
        description="캐시 키 (빈 문자열 허용)"
    )
    value: str = Field(
        ...,
        description="캐시된 값"
    )
    stored_at: datetime = Field(
        default_factory=datetime.now,
        description="저장 시간"
    )


class FetchRequest(BaseModel):
    """가져오기 요청 데이터 모델

    uri가 빈 문자열이면 네트워크 가져오기가 비활성화된 것으로 간주합니다.
    """

    model_config = ConfigDict(frozen=True)

    uri: str = Field(
        default="",
        description="원격 리소스 URI (빈 문자열 허용)"
    )
    cache_key: str = Field(
        ...,
        description="URI와 무관하게 리소스를 식별하는 캐시 키"
    )


class ScriptArtifact(BaseModel):
    """디스크에 기록될 스크립트 아티팩트"""

    file_path: Path
    content: str


class ReleaseChannel(BaseModel):
    """릴리스 인덱스의 채널 항목"""

    model_config = ConfigDict(populate_by_name=True)

    channel_version: str = Field(..., alias="channel-version")
    latest_release: Optional[str] = Field(None, alias="latest-release")
    latest_runtime: Optional[str] = Field(None, alias="latest-runtime")
    latest_sdk: Optional[str] = Field(None, alias="latest-sdk")
    release_type: Optional[str] = Field(None, alias="release-type")
    support_phase: Optional[str] = Field(None, alias="support-phase")
    releases_json: Optional[str] = Field(None, alias="releases.json")


class ReleaseManifest(BaseModel):
    """릴리스 매니페스트 (사용 가능한 릴리스 채널 목록)"""

    channels: list[ReleaseChannel] = Field(default_factory=list)

    def channel_versions(self) -> list[str]:
        """매니페스트 순서대로 채널 버전 목록 반환"""
        return [channel.channel_version for channel in self.channels]
