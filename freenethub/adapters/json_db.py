"""Single-file JSON document store.

저장 구조:
- db.json 하나에 모든 컬렉션을 저장 (users, marketplace, ...)
- 모든 변경은 파일 전체를 읽고 → 수정하고 → 다시 쓰는 방식
- 같은 프로세스 안의 writer는 asyncio.Lock으로 직렬화
"""
import asyncio
import copy
import json
import logging
import os
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, Optional

from freenethub.server.settings import settings

logger = logging.getLogger(__name__)

LIST_COLLECTIONS = (
    "users",
    "marketplace",
    "tasks",
    "transactions",
    "leaderboard",
    "sims",
    "wifi_sources",
    "subscriptions",
)

DEFAULT_SUBSCRIPTIONS = [
    {"id": "basic", "name": "Basic", "price": 0},
    {"id": "pro", "name": "Pro", "price": 299},
    {"id": "premium", "name": "Premium", "price": 499},
]


def default_document() -> Dict[str, Any]:
    data: Dict[str, Any] = {name: [] for name in LIST_COLLECTIONS}
    data["analytics"] = {}
    return data


class JsonDatabase:
    """JSON 파일 기반 데이터베이스

    Args:
        path: 파일 경로. 생략하면 호출 시점의 settings.DB_FILE 사용
    """

    def __init__(self, path: Optional[str] = None):
        self._path = path
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return Path(self._path or settings.DB_FILE)

    async def init(self) -> Dict[str, Any]:
        """파일이 없으면 기본 문서를 만들고, 누락된 컬렉션과 구독 플랜을 채워 넣는다."""
        async with self.transaction() as data:
            for key, value in default_document().items():
                data.setdefault(key, value)
            if not data["subscriptions"]:
                data["subscriptions"] = copy.deepcopy(DEFAULT_SUBSCRIPTIONS)
        logger.info(f"Database ready at {self.path}")
        return data

    async def read(self) -> Dict[str, Any]:
        """문서 전체를 읽는다. 파일이 없으면 기본 문서를 반환."""
        # 파일이 작아서 동기 I/O로 읽는다 (이벤트 루프 블로킹은 무시할 수준)
        if not self.path.exists():
            return default_document()

        with open(self.path, "r", encoding="utf-8") as f:
            content = f.read()

        if not content.strip():
            return default_document()
        return json.loads(content)

    async def write(self, data: Dict[str, Any]) -> None:
        """문서 전체를 임시 파일에 쓴 뒤 원자적으로 교체한다."""
        path = self.path
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Dict[str, Any]]:
        """read → mutate → write 사이클

        블록이 예외 없이 끝나야만 파일에 기록됩니다.

        Example:
            async with db.transaction() as data:
                data["analytics"]["visits"] = data["analytics"].get("visits", 0) + 1
        """
        async with self._lock:
            data = await self.read()
            yield data
            await self.write(data)

    async def counts(self) -> Dict[str, int]:
        data = await self.read()
        return {
            name: len(data.get(name) or [])
            for name in LIST_COLLECTIONS
        }


# 전역 DB 인스턴스
db = JsonDatabase()
