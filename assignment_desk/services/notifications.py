import logging

from assignment_desk.schemas.board import NotificationRead

logger = logging.getLogger(__name__)


class Notifier:
    """Fire-and-forget message sink; callers never wait on delivery."""

    def __init__(self):
        self._pending: list[NotificationRead] = []

    def success(self, message: str) -> None:
        self._push("success", message)

    def error(self, message: str) -> None:
        self._push("error", message)

    def drain(self) -> list[NotificationRead]:
        pending, self._pending = self._pending, []
        return pending

    def _push(self, level: str, message: str) -> None:
        logger.debug("notify %s: %s", level, message)
        self._pending.append(NotificationRead(level=level, message=message))
