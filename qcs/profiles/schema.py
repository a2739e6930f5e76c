"""
Profile records read by the compatibility scorer.

A stored profile carries two logical sub-objects:
- qualities: what the user says about themselves
- requirements: what the user wants in a partner

Both are optional and may be stored as JSON text. The dataclasses here are
built through `from_dict`, which normalizes every field so the scoring
code never has to check types or presence again.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Dict, Any, List

from .parsing import (
    parse_or_default,
    coerce_number,
    coerce_list,
    coerce_text,
    parse_date,
)

DEFAULT_HEIGHT_RANGE = (150, 200)
DEFAULT_AGE_RANGE = (18, 30)


@dataclass
class Qualities:
    """
    Self-described attributes of a user.

    Attributes:
        body_type: Body type label (empty when not given)
        interests: Interests in the order the user stored them
        personality_traits: Personality trait labels
        values: Personal values
        relationship_goals: What the user is looking for
        education_level: Education level label
        communication_style: Communication style label
    """
    body_type: str = ""
    interests: List[str] = field(default_factory=list)
    personality_traits: List[str] = field(default_factory=list)
    values: List[str] = field(default_factory=list)
    relationship_goals: List[str] = field(default_factory=list)
    education_level: str = ""
    communication_style: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Qualities":
        """Create from a mapping or JSON text, tolerating missing fields."""
        d = parse_or_default(data)
        return cls(
            body_type=coerce_text(d.get("body_type")),
            interests=coerce_list(d.get("interests")),
            personality_traits=coerce_list(d.get("personality_traits")),
            values=coerce_list(d.get("values")),
            relationship_goals=coerce_list(d.get("relationship_goals")),
            education_level=coerce_text(d.get("education_level")),
            communication_style=coerce_text(d.get("communication_style")),
        )


@dataclass
class Requirements:
    """
    Partner preferences stated by a user.

    Range bounds fall back to the product defaults (height 150-200,
    age 18-30) when missing, zero or non-numeric. Empty preference lists
    mean "no preference".
    """
    height_range_min: float = DEFAULT_HEIGHT_RANGE[0]
    height_range_max: float = DEFAULT_HEIGHT_RANGE[1]
    preferred_body_types: List[str] = field(default_factory=list)
    age_range_min: float = DEFAULT_AGE_RANGE[0]
    age_range_max: float = DEFAULT_AGE_RANGE[1]
    preferred_personality_traits: List[str] = field(default_factory=list)
    preferred_values: List[str] = field(default_factory=list)
    preferred_relationship_goals: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Requirements":
        """Create from a mapping or JSON text, tolerating missing fields."""
        d = parse_or_default(data)
        return cls(
            height_range_min=coerce_number(d.get("height_range_min"), DEFAULT_HEIGHT_RANGE[0]),
            height_range_max=coerce_number(d.get("height_range_max"), DEFAULT_HEIGHT_RANGE[1]),
            preferred_body_types=coerce_list(d.get("preferred_body_types")),
            age_range_min=coerce_number(d.get("age_range_min"), DEFAULT_AGE_RANGE[0]),
            age_range_max=coerce_number(d.get("age_range_max"), DEFAULT_AGE_RANGE[1]),
            preferred_personality_traits=coerce_list(d.get("preferred_personality_traits")),
            preferred_values=coerce_list(d.get("preferred_values")),
            preferred_relationship_goals=coerce_list(d.get("preferred_relationship_goals")),
        )

    def accepts_height(self, height: float) -> bool:
        return self.height_range_min <= height <= self.height_range_max

    def accepts_age(self, age: int) -> bool:
        return self.age_range_min <= age <= self.age_range_max


@dataclass
class Profile:
    """
    Snapshot of one stored profile.

    Only `qualities`, `requirements`, `height` and `date_of_birth` feed the
    pair scorer. The remaining fields are read by the profile QCS and the
    pairing job.

    Attributes:
        qualities: Normalized Qualities
        requirements: Normalized Requirements
        height: Height (same unit for every profile), None when unknown
        date_of_birth: Date of birth, None when unknown or unparseable
        user_id: Identifier of the owning user
        total_qcs: Stored profile QCS
        is_active: Whether the profile can be shown to others
    """
    qualities: Qualities = field(default_factory=Qualities)
    requirements: Requirements = field(default_factory=Requirements)
    height: Optional[float] = None
    date_of_birth: Optional[date] = None
    user_id: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    bio: str = ""
    university: str = ""
    interests: List[str] = field(default_factory=list)
    profile_images: List[str] = field(default_factory=list)
    total_qcs: Optional[float] = None
    is_active: bool = True

    def __post_init__(self):
        """Normalize nested objects passed as dicts or JSON text."""
        if not isinstance(self.qualities, Qualities):
            self.qualities = Qualities.from_dict(self.qualities)
        if not isinstance(self.requirements, Requirements):
            self.requirements = Requirements.from_dict(self.requirements)
        self.height = coerce_number(self.height)
        self.date_of_birth = parse_date(self.date_of_birth)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        """Create from a database row or any profile-shaped mapping."""
        user_id = data.get("user_id")
        is_active = data.get("is_active")
        return cls(
            qualities=Qualities.from_dict(data.get("qualities")),
            requirements=Requirements.from_dict(data.get("requirements")),
            height=coerce_number(data.get("height")),
            date_of_birth=parse_date(data.get("date_of_birth")),
            user_id=None if user_id is None else str(user_id),
            first_name=coerce_text(data.get("first_name")),
            last_name=coerce_text(data.get("last_name")),
            bio=coerce_text(data.get("bio")),
            university=coerce_text(data.get("university")),
            interests=coerce_list(data.get("interests")),
            profile_images=coerce_list(data.get("profile_images")),
            total_qcs=coerce_number(data.get("total_qcs")),
            is_active=True if is_active is None else bool(is_active),
        )

    @classmethod
    def coerce(cls, value: Any) -> "Profile":
        """Return `value` unchanged if it is a Profile, else build one from it."""
        if isinstance(value, cls):
            return value
        return cls.from_dict(value or {})

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class ScoreResult:
    """
    Result of scoring one pair of profiles.

    Attributes:
        physical_score: Physical compatibility [0, 100]
        mental_score: Mental/personality compatibility [0, 100]
        overall_score: round(mental * 0.6 + physical * 0.4)
        shared_interests: Interests both profiles list, in profile A's order
        compatibility_reasons: Up to three human-readable reasons
    """
    physical_score: int
    mental_score: int
    overall_score: int
    shared_interests: List[str] = field(default_factory=list)
    compatibility_reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "physical_score": self.physical_score,
            "mental_score": self.mental_score,
            "overall_score": self.overall_score,
            "shared_interests": list(self.shared_interests),
            "compatibility_reasons": list(self.compatibility_reasons),
        }
