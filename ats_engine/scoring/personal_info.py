from __future__ import annotations

from ats_engine.core.config.scoring import PersonalInfoConfig, get_scoring_config
from ats_engine.normalize.utils import count_digits, is_valid_email
from ats_engine.schemas.analysis import CategoryResult
from ats_engine.schemas.profile import ResumeProfile

from .base import FindingRecorder


def score_personal_info(profile: ResumeProfile, config: PersonalInfoConfig | None = None) -> CategoryResult:
    cfg = config or get_scoring_config().categories.personal_info
    points = cfg.points
    personal = profile.personal

    email_points = 0
    if personal.email:
        email_points = points["email"] if is_valid_email(personal.email) else cfg.email_invalid_points
    min_digits, max_digits = cfg.phone_digits
    phone_plausible = min_digits <= count_digits(personal.phone) <= max_digits
    phone_points = points["phone"] if phone_plausible else 0
    location_points = points["location"] if personal.location else 0
    links_points = points["links"] if personal.links else 0
    other_points = email_points + phone_points + location_points + links_points

    recorder = FindingRecorder(cfg.max_score)
    if personal.name:
        recorder.bonus("Full name provided", points["name"])
    else:
        # Without a name every other contact point is forfeited.
        recorder.check(
            "Missing full name; ATS cannot attribute the resume to a candidate",
            earned=0,
            possible=points["name"] + other_points,
            advice="Add your full name at the top of the resume",
        )

    if not personal.email:
        recorder.check(
            "Missing email address",
            earned=0,
            possible=points["email"],
            advice="Add a professional email address",
        )
    elif email_points == points["email"]:
        recorder.bonus("Valid email address provided", points["email"])
    else:
        recorder.check(
            "Email address looks malformed",
            earned=email_points,
            possible=points["email"],
            advice="Fix the email address format (name@domain.com)",
        )

    if phone_plausible:
        recorder.bonus("Phone number provided", points["phone"])
    elif personal.phone:
        recorder.check(
            "Phone number has an implausible digit count",
            earned=0,
            possible=points["phone"],
            advice="Use a complete phone number including the area code",
        )
    else:
        recorder.check(
            "Missing phone number",
            earned=0,
            possible=points["phone"],
            advice="Include your phone number with area code",
        )

    if location_points:
        recorder.bonus("Location provided", points["location"])
    else:
        recorder.check(
            "Missing location",
            earned=0,
            possible=points["location"],
            advice="Add your city and state or country",
        )

    if links_points:
        labels = sorted({link.label for link in personal.links if link.label})
        suffix = f" ({', '.join(labels)})" if labels else ""
        recorder.bonus(f"Professional profile links included{suffix}", points["links"])
    else:
        recorder.check(
            "No professional profile links",
            earned=0,
            possible=points["links"],
            advice="Add your LinkedIn profile URL",
        )

    return recorder.result(zero_score=not personal.name)
