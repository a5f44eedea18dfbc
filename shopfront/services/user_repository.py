"""本地帳號（名稱／電子郵件／密碼雜湊）儲存庫。"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional
from uuid import uuid4

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.errors import UserAlreadyExistsError

logger = logging.getLogger(__name__)


@dataclass
class LocalUser:
    """本地帳號資料模型。password_hash 僅供本層使用，不對外輸出。"""

    id: str
    name: str
    email: str
    password_hash: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "passwordHash": self.password_hash,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "LocalUser":
        return cls(
            id=data["id"],
            name=str(data.get("name", "")),
            email=data["email"],
            password_hash=data["passwordHash"],
        )


def _new_user_id() -> str:
    return f"user_{uuid4().hex}"


class InMemoryUserRepository:
    """以行程內清單保存帳號的儲存庫。"""

    def __init__(self, users: Optional[Iterable[LocalUser]] = None) -> None:
        self._users: List[LocalUser] = list(users or [])

    def create_user(self, name: str, email: str, password: str) -> LocalUser:
        """建立帳號；電子郵件（不分大小寫）重複時拋出 UserAlreadyExistsError。"""

        if self.find_user_by_email(email) is not None:
            raise UserAlreadyExistsError(email)

        user = LocalUser(
            id=_new_user_id(),
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
        )
        self._users.append(user)
        try:
            self._persist()
        except OSError:
            self._users.remove(user)
            raise
        return user

    def find_user_by_email(self, email: str) -> Optional[LocalUser]:
        lowered = email.lower()
        for user in self._users:
            if user.email.lower() == lowered:
                return user
        return None

    def get_user(self, user_id: str) -> Optional[LocalUser]:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    def verify_user_credentials(self, email: str, password: str) -> Optional[LocalUser]:
        """驗證帳密，成功回傳帳號，失敗（含帳號不存在）回傳 None。"""

        user = self.find_user_by_email(email)
        if user is None:
            return None
        if not check_password_hash(user.password_hash, password):
            return None
        return user

    def count_users(self) -> int:
        return len(self._users)

    def _persist(self) -> None:
        return None


class JsonFileUserRepository(InMemoryUserRepository):
    """啟動時自 JSON 檔載入一次，之後於記憶體提供服務並在每次變更時寫回。"""

    def __init__(self, data_file: Path) -> None:
        self._data_file = data_file
        super().__init__(self._load())

    @property
    def data_file(self) -> Path:
        return self._data_file

    def _load(self) -> List[LocalUser]:
        if not self._data_file.exists():
            return []
        try:
            payload = json.loads(self._data_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Failed to load users from %s: %s", self._data_file, exc)
            return []
        if not isinstance(payload, list):
            logger.warning("User store %s is not a JSON array, starting empty", self._data_file)
            return []
        users: List[LocalUser] = []
        for item in payload:
            if not isinstance(item, dict):
                continue
            if not all(isinstance(item.get(key), str) for key in ("id", "email", "passwordHash")):
                continue
            users.append(LocalUser.from_dict(item))
        return users

    def _persist(self) -> None:
        self._data_file.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps([u.to_dict() for u in self._users], ensure_ascii=False, indent=2)
        self._data_file.write_text(content + "\n", encoding="utf-8")
