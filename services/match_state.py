# 📦 /services/match_state.py
# ─────────────────────────────
# Latest match results per user; results from superseded requests are dropped

from typing import Dict, List, Optional, Tuple

import structlog

log = structlog.get_logger()


class LatestMatchStore:
    def __init__(self):
        self._issued: Dict[str, int] = {}
        self._committed: Dict[str, Tuple[int, List]] = {}

    def begin(self, user_id: str) -> int:
        """Issue a new request token; it supersedes every earlier one and clears shown results."""
        token = self._issued.get(user_id, 0) + 1
        self._issued[user_id] = token
        self._committed.pop(user_id, None)
        return token

    def is_current(self, user_id: str, token: int) -> bool:
        return self._issued.get(user_id) == token

    def commit(self, user_id: str, token: int, results: List) -> bool:
        if not self.is_current(user_id, token):
            log.info("Discarding stale match results", user_id=user_id, token=token, newest=self._issued.get(user_id))
            return False
        self._committed[user_id] = (token, list(results))
        return True

    def latest(self, user_id: str) -> Optional[Tuple[int, List]]:
        return self._committed.get(user_id)

    def clear(self, user_id: str) -> None:
        self._committed.pop(user_id, None)
