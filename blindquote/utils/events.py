"""事件通道.

核心對外只透過事件溝通：狀態變更（附完整快照）、通知訊息、確認對話框。
"""

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict, List


logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """事件類型."""

    STATE_CHANGED = "stateChanged"
    SHOW_NOTIFICATION = "showNotification"
    SHOW_CONFIRMATION = "showConfirmationDialog"


Handler = Callable[[Any], None]


class EventAggregator:
    """同步的發布 / 訂閱通道."""

    def __init__(self):
        self._subscribers: DefaultDict[EventType, List[Handler]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: Handler) -> None:
        """
        訂閱事件.

        Args:
            event_type: 事件類型
            handler: 收到事件資料時呼叫
        """
        self._subscribers[event_type].append(handler)

    def unsubscribe(self, event_type: EventType, handler: Handler) -> None:
        """取消訂閱（未訂閱時不做任何事）."""
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event_type: EventType, data: Any = None) -> None:
        """
        發布事件給所有訂閱者（依訂閱順序同步執行）.

        Args:
            event_type: 事件類型
            data: 事件資料
        """
        handlers = list(self._subscribers.get(event_type, []))
        logger.debug(f"Publish {event_type.value} to {len(handlers)} handler(s)")
        for handler in handlers:
            handler(data)
