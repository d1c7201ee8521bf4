# 📦 engine/fallback.py
# ─────────────────────────────
# Deterministic keyword matcher used when the live backend is unavailable

import asyncio
from pathlib import Path

import structlog
import yaml

from engine.validation import validate_request
from schemas.schemas import MatchResult, Therapist

log = structlog.get_logger()

CATALOGUE_PATH = Path(__file__).resolve().parent.parent / "config" / "demo_catalogue.yml"
GENERAL_BAND = "general"
MAX_MATCHES = 3


class _TemplateValues(dict):
    def __missing__(self, key):
        return "{" + key + "}"


def load_catalogue(path=CATALOGUE_PATH):
    with open(path, "r") as f:
        return yaml.safe_load(f)


class CatalogueEntry:
    """A catalogue therapist plus the reason templates it is offered with."""
    def __init__(self, therapist, band, reason, general=False, general_reason=None):
        self.therapist = therapist
        self.band = band
        self.reason = reason
        self.general = general
        self.general_reason = general_reason or reason


class KeywordMatcher:
    algorithm = "keyword"

    def __init__(self, catalogue=None, delay_s: float = 1.5):
        catalogue = catalogue or load_catalogue()
        self.delay_s = delay_s
        self.bands = {name: [k.lower() for k in band["keywords"]] for name, band in catalogue["bands"].items()}
        self.generic_reason = catalogue["generic_reason"]
        self.entries = []
        for raw in catalogue["therapists"]:
            raw = dict(raw)
            band = raw.pop("band", None)
            reason = raw.pop("reason")
            general = raw.pop("general", False)
            general_reason = raw.pop("general_reason", None)
            self.entries.append(CatalogueEntry(Therapist(**raw), band, reason, general, general_reason))

    def therapists(self):
        return [e.therapist for e in self.entries]

    async def run(self, profile, needs):
        validate_request(profile, needs)
        # Emulates model latency.
        await asyncio.sleep(self.delay_s)
        return await self.match(profile, needs)

    async def match(self, profile, needs, therapists=None):
        """`therapists` is ignored; the fixed catalogue is the directory."""
        validate_request(profile, needs)
        matched_bands = self.matched_bands(needs)

        results = []
        used = set()
        for band in matched_bands:
            entry = self._entry_for(band)
            if entry is None or entry.therapist.id in used:
                continue
            template = entry.general_reason if band == GENERAL_BAND else entry.reason
            results.append(self._result(entry, template, profile))
            used.add(entry.therapist.id)

        for entry in self.entries:
            if len(results) >= MAX_MATCHES:
                break
            if entry.therapist.id in used:
                continue
            results.append(self._result(entry, self.generic_reason, profile))
            used.add(entry.therapist.id)

        results = results[:MAX_MATCHES]
        log.info("Fallback matches generated", bands=matched_bands, matches=[r.id for r in results])
        return results

    def matched_bands(self, needs):
        text = needs.lower()
        bands = [name for name, keywords in self.bands.items() if any(k in text for k in keywords)]
        return bands or [GENERAL_BAND]

    def _entry_for(self, band):
        if band == GENERAL_BAND:
            return next((e for e in self.entries if e.general), self.entries[0] if self.entries else None)
        return next((e for e in self.entries if e.band == band), None)

    def _result(self, entry, template, profile):
        th = entry.therapist
        values = _TemplateValues(
            name=profile.name.strip() or "you",
            location=profile.location,
            session_format=profile.session_format or "flexible",
            therapist=th.name,
            formats=", ".join(th.session_formats) or "flexible",
        )
        return MatchResult(**th.model_dump(), reason=" ".join(template.format_map(values).split()))
