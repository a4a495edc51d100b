"""
Explicit per-feature client state persisted as JSON files.

Each store is loaded once, saved after every mutation and can be cleared;
nothing is shared between features.
"""
import hashlib
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from daydiary.core.logging_config import log_warning
from daydiary.core.time_utils import serialize_datetime, utc_now


class StateStore:
    """JSON document stored at ``path``."""

    def __init__(self, path: os.PathLike | str, default: Any = None):
        self.path = Path(path)
        self.default = default

    def _default(self) -> Any:
        # Fresh copy so callers can mutate what load() returns
        return json.loads(json.dumps(self.default))

    def load(self) -> Any:
        if not self.path.exists():
            return self._default()
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            log_warning(f"Discarding unreadable state file {self.path}: {exc}")
            return self._default()

    def save(self, data: Any) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class ChatHistoryStore:
    """Conversation with the diary companion."""

    def __init__(self, store: StateStore):
        self.store = store
        self.messages: List[Dict[str, Any]] = store.load() or []

    def append(self, role: str, content: str, media: Optional[List[Dict[str, str]]] = None) -> Dict[str, Any]:
        message: Dict[str, Any] = {
            "role": role,
            "content": content,
            "sent_at": serialize_datetime(utc_now()),
        }
        if media:
            message["media"] = media
        self.messages.append(message)
        self.store.save(self.messages)
        return message

    def for_request(self) -> List[Dict[str, Any]]:
        """Messages in the shape the chat endpoint accepts."""
        return [
            {key: value for key, value in message.items() if key in ("role", "content", "media")}
            for message in self.messages
        ]

    def clear(self) -> None:
        self.messages = []
        self.store.clear()


class SiteLock:
    """
    Local passphrase gate, unlocked at most once per calendar day.

    Only a SHA-256 digest of the passphrase is stored.
    """

    def __init__(self, store: StateStore):
        self.store = store
        self.state: Dict[str, Optional[str]] = store.load() or {}

    @staticmethod
    def _digest(passphrase: str) -> str:
        return hashlib.sha256(passphrase.strip().encode("utf-8")).hexdigest()

    @property
    def has_passphrase(self) -> bool:
        return bool(self.state.get("passphrase_sha256"))

    def set_passphrase(self, passphrase: str, today: str) -> None:
        if not passphrase.strip():
            raise ValueError("Passphrase must not be blank")
        self.state = {"passphrase_sha256": self._digest(passphrase), "last_unlock_date": today}
        self.store.save(self.state)

    def is_unlocked(self, today: str) -> bool:
        return self.has_passphrase and self.state.get("last_unlock_date") == today

    def unlock(self, passphrase: str, today: str) -> bool:
        if not self.has_passphrase or self._digest(passphrase) != self.state["passphrase_sha256"]:
            return False
        self.state["last_unlock_date"] = today
        self.store.save(self.state)
        return True

    def reset(self) -> None:
        self.state = {}
        self.store.clear()
