import base64
import logging
from pydantic import BaseModel, TypeAdapter
from typing import List, Optional

logger = logging.getLogger(__name__)


class Toast(BaseModel):
    title: str
    description: str
    variant: str = "default"  # default | destructive


_toast_list = TypeAdapter(List[Toast])


class Notifier:
    """Transient, non-blocking notifications for one view. Survives a redirect via a flash cookie."""

    def __init__(self, toasts: Optional[List[Toast]] = None):
        self.toasts: List[Toast] = list(toasts or [])

    def success(self, description: str) -> None:
        self.toasts.append(Toast(title="Success", description=description))

    def error(self, description: str) -> None:
        self.toasts.append(Toast(title="Error", description=description, variant="destructive"))

    def dump(self) -> str:
        # unpadded so the cookie value needs no quoting
        return base64.urlsafe_b64encode(_toast_list.dump_json(self.toasts)).decode("ascii").rstrip("=")

    @classmethod
    def load(cls, raw: Optional[str]) -> "Notifier":
        if not raw:
            return cls()
        try:
            return cls(_toast_list.validate_json(base64.urlsafe_b64decode(raw + "=" * (-len(raw) % 4))))
        except Exception as e:
            logger.warning(f"Ignoring unreadable flash cookie: {e}")
            return cls()
