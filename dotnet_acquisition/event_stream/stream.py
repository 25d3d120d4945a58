"""
이벤트 스트림 모듈

등록된 옵저버들에게 이벤트를 순서대로 전달하는 게시 채널을 제공합니다.
"""

from abc import ABC, abstractmethod

from ..utils.logging import get_logger
from .events import Event

logger = get_logger(__name__)


class EventObserver(ABC):
    """이벤트 옵저버 기본 추상 클래스"""

    @abstractmethod
    def post(self, event: Event) -> None:
        """
        이벤트 수신 (추상 메서드)

        Args:
            event: 게시된 이벤트
        """
        pass

    def dispose(self) -> None:
        """리소스 정리"""
        pass


class EventStream:
    """이벤트 스트림"""

    def __init__(self):
        self._observers: list[EventObserver] = []
        self.logger = logger

    @property
    def observers(self) -> list[EventObserver]:
        return list(self._observers)

    def subscribe(self, observer: EventObserver) -> None:
        """옵저버 등록 (등록 순서대로 이벤트가 전달됨)"""
        self._observers.append(observer)

    def unsubscribe(self, observer: EventObserver) -> None:
        """옵저버 등록 해제"""
        if observer in self._observers:
            self._observers.remove(observer)

    def post(self, event: Event) -> None:
        """
        이벤트 게시

        한 옵저버의 실패는 기록만 하고 나머지 옵저버에게 계속 전달합니다.

        Args:
            event: 게시할 이벤트
        """
        for observer in list(self._observers):
            try:
                observer.post(event)
            except Exception as e:
                self.logger.error(
                    f"옵저버 이벤트 처리 실패: {type(observer).__name__} <- {event.event_name} - {e}"
                )

    def dispose(self) -> None:
        """모든 옵저버 정리"""
        for observer in list(self._observers):
            try:
                observer.dispose()
            except Exception as e:
                self.logger.error(f"옵저버 정리 실패: {type(observer).__name__} - {e}")
        self._observers.clear()
