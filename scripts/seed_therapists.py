import random
import sys
import uuid

from supabase import create_client

from engine.fallback import load_catalogue
from settings import get_settings

# ───────────────────────────────────────────────────────────────────────────
# Sample pools
# ───────────────────────────────────────────────────────────────────────────
FIRST_NAMES      = ["Emma", "Liam", "Olivia", "Noah", "Ava", "Mateo", "Priya", "Kenji", "Amara", "Jonas"]
LAST_NAMES       = ["Garcia", "Nguyen", "Okafor", "Schmidt", "Patel", "Kim", "Silva", "Cohen", "Haddad", "Larsen"]
SPECIALTIES_POOL = ["Anxiety", "Depression", "Trauma", "LGBTQ+ Issues", "Family Therapy", "Couples Counseling",
                    "Grief", "Addiction", "Stress Management", "Eating Disorders"]
INSURANCE_POOL   = ["Aetna", "Blue Cross", "Cigna", "Kaiser", "Medicare", "United Healthcare"]
FORMATS_POOL     = ["in-person", "video", "phone"]
LANGUAGES_POOL   = ["English", "Spanish", "Mandarin", "French", "Arabic"]
LOCATIONS        = ["San Francisco, CA", "Oakland, CA", "San Jose, CA", "Berkeley, CA", "Remote"]
AVAILABILITY     = ["Weekdays 9am-5pm", "Evenings and weekends", "Mondays and Thursdays", "Flexible"]


def catalogue_therapists():
    rows = []
    for raw in load_catalogue()["therapists"]:
        row = {k: v for k, v in raw.items() if k not in ("band", "general", "reason", "general_reason")}
        rows.append(row)
    return rows


def generate_fake_therapists(n=20):
    therapists = []
    for _ in range(n):
        name = f"Dr. {random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}"
        th = {
            "id": str(uuid.uuid4()),
            "name": name,
            "photo_url": None,
            "location": random.choice(LOCATIONS),
            "specialties": random.sample(SPECIALTIES_POOL, k=random.randint(2, 4)),
            "insurance_accepted": random.sample(INSURANCE_POOL, k=random.randint(1, 3)),
            "availability": random.choice(AVAILABILITY),
            "contact_info": f"{name.split()[-1].lower()}@example.com",
            "session_formats": random.sample(FORMATS_POOL, k=random.randint(1, 3)),
            "languages": ["English"] + random.sample(LANGUAGES_POOL[1:], k=random.randint(0, 2)),
            "rating": round(random.uniform(3.5, 5.0), 1),
        }
        therapists.append(th)
    return therapists


def main(n_generated=20):
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError("SUPABASE_URL and SUPABASE_ANON_KEY must be set to seed therapists")

    supabase = create_client(settings.supabase_url, settings.supabase_anon_key)
    therapists = catalogue_therapists() + generate_fake_therapists(n_generated)

    print(f"Uploading {len(therapists)} therapists to {settings.therapists_table}…")
    resp = supabase.table(settings.therapists_table).upsert(therapists).execute()
    if not resp.data:
        raise RuntimeError(f"Failed to insert therapists: {resp.data}")
    print("Therapists uploaded.")


if __name__ == "__main__":
    main(int(sys.argv[1]) if len(sys.argv) > 1 else 20)
