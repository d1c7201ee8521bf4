# 📦 engine/matcher.py
# ─────────────────────────────
# Model-delegated matching engine

import structlog

from engine.errors import EmptyDirectoryError, UpstreamError
from engine.prompt import build_prompt
from engine.reply import parse_model_reply, raise_for_reply
from engine.validation import validate_request
from schemas.schemas import MatchResult

log = structlog.get_logger()

DEFAULT_REASON = "No specific reason provided"


class LLMMatcher:
    algorithm = "llm"

    def __init__(self, directory, chat_client):
        self.directory = directory
        self.chat_client = chat_client

    async def run(self, profile, needs):
        """Validate, fetch the directory once and match against it."""
        validate_request(profile, needs)
        therapists = await self.directory.list_therapists()
        log.info("Fetched therapists", count=len(therapists))
        return await self.match(profile, needs, therapists)

    async def match(self, profile, needs, therapists):
        validate_request(profile, needs)

        if not therapists:
            raise EmptyDirectoryError()

        prompt = build_prompt(profile, needs, therapists)
        content = await self.chat_client.complete(prompt)
        parsed = raise_for_reply(parse_model_reply(content))

        return self._resolve(parsed, therapists, user_id=profile.id)

    def _resolve(self, parsed, therapists, user_id=None):
        """Join model picks with directory records, keeping the model's order."""
        by_id = {th.id: th for th in therapists}
        reasons = {}
        for m in parsed:
            reasons.setdefault(m.id, m.reason)

        results = []
        seen = set()
        for m in parsed:
            if m.id in seen:
                continue
            therapist = by_id.get(m.id)
            if therapist is None:
                log.warning("Model returned unknown therapist id", therapist_id=m.id, name=m.name)
                continue
            seen.add(m.id)
            results.append(MatchResult(**therapist.model_dump(), reason=reasons.get(m.id) or DEFAULT_REASON))

        if not results:
            raise UpstreamError("Failed to resolve matched therapists")

        log.info("Top matches generated", user_id=user_id, matches=[r.id for r in results])
        return results
