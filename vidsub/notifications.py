"""User-facing, non-blocking notifications."""

import logging
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)

DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = DEFAULT


class Notifier:
    """Logs notifications and remembers them in the order they were sent."""

    def __init__(self):
        self.history: List[Notification] = []

    def notify(self, title: str, description: str, variant: str = DEFAULT) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.history.append(notification)
        if variant == DESTRUCTIVE:
            logger.error(f"{title}: {description}")
        else:
            logger.info(f"{title}: {description}")
        return notification

    @property
    def last(self):
        return self.history[-1] if self.history else None
