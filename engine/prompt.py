# 📦 engine/prompt.py
# ─────────────────────────────
# Builds the single-turn instruction sent to the model service

NOT_SPECIFIED = "Not specified"
NONE_SPECIFIED = "None specified"

INSTRUCTIONS = """Based on the user's profile, specific needs, and the available therapist profiles,
select the top 3 most suitable therapists. For each therapist, provide a detailed
explanation of why they would be a good match considering factors like location,
specialties, language, session format, insurance, and budget compatibility.

IMPORTANT: Use the exact therapist IDs from the list above in your response.
Copy every "id" value verbatim; do not invent or modify IDs.

Return only the result as a JSON array with this structure:
[{
  "id": "exact_therapist_id_from_list",
  "name": "therapist_name",
  "reason": "detailed matching explanation"
}]"""


def _text(value, missing=NOT_SPECIFIED):
    if value is None:
        return missing
    value = str(value).strip()
    return value or missing


def _joined(values, missing=NOT_SPECIFIED):
    values = [str(v).strip() for v in (values or []) if str(v).strip()]
    return ", ".join(values) if values else missing


def _yes_no(flag):
    return "Yes" if flag else "No"


def profile_block(profile) -> str:
    lines = [
        f"Name: {_text(profile.name)}",
        f"Age: {profile.age}",
        f"Gender Identity: {_text(profile.gender_identity)}",
        f"Location: {_text(profile.location)}",
        f"Cultural Background: {_text(profile.cultural_background)}",
        f"Preferred Language: {_text(profile.preferred_language)}",
        f"LGBTQ+ Identity: {_yes_no(profile.lgbtq_identity)}",
        f"Relationship Status: {_text(profile.relationship_status)}",
        f"Has Children: {_yes_no(profile.has_children)}",
        f"Occupation: {_text(profile.occupation)}",
        f"Mental Health Conditions: {_joined(profile.mental_health_conditions, NONE_SPECIFIED)}",
        f"Medications: {_joined(profile.medications, NONE_SPECIFIED)}",
        f"Communication Style: {_text(profile.communication_style)}",
        f"Religious Beliefs: {_text(profile.religious_beliefs)}",
        f"Session Format: {_text(profile.session_format)}",
        f"Insurance: {_text(profile.insurance)}",
        f"Budget: {profile.budget if profile.budget else NOT_SPECIFIED}",
    ]
    return "\n".join(lines)


def therapist_block(therapist) -> str:
    rating = therapist.rating if therapist.rating is not None else "Not rated"
    lines = [
        f"ID: {therapist.id}",
        f"Name: {_text(therapist.name)}",
        f"Specialties: {_joined(therapist.specialties)}",
        f"Location: {_text(therapist.location)}",
        f"Languages: {_joined(therapist.languages)}",
        f"Session Formats: {_joined(therapist.session_formats)}",
        f"Insurance Accepted: {_joined(therapist.insurance_accepted)}",
        f"Availability: {_text(therapist.availability)}",
        f"Contact Info: {_text(therapist.contact_info)}",
        f"Rating: {rating}",
    ]
    return "\n".join(lines)


def build_prompt(profile, needs: str, therapists) -> str:
    directory = "\n\n".join(therapist_block(th) for th in therapists)
    return (
        f"User Profile:\n{profile_block(profile)}\n\n"
        f"User's specific needs:\n{needs.strip()}\n\n"
        f"Available Therapists:\n{directory}\n\n"
        f"{INSTRUCTIONS}"
    )
