from datetime import date

import pytest


@pytest.fixture
def today():
    return date(2026, 10, 19)


@pytest.fixture
def profile_a():
    return {
        "user_id": "u1",
        "height": 175,
        "date_of_birth": "1995-05-15",
        "qualities": {
            "body_type": "athletic",
            "interests": ["hiking", "reading", "music"],
            "personality_traits": ["adventurous", "kind"],
            "values": ["honesty", "family"],
            "relationship_goals": ["long-term"],
        },
        "requirements": {
            "height_range_min": 160,
            "height_range_max": 185,
            "preferred_body_types": ["athletic", "slim"],
            "age_range_min": 25,
            "age_range_max": 35,
            "preferred_personality_traits": ["adventurous"],
            "preferred_values": ["honesty"],
            "preferred_relationship_goals": ["long-term"],
        },
    }


@pytest.fixture
def profile_b():
    return {
        "user_id": "u2",
        "height": 168,
        "date_of_birth": "1996-08-20",
        "qualities": {
            "body_type": "athletic",
            "interests": ["hiking", "music"],
            "personality_traits": ["adventurous", "creative"],
            "values": ["honesty", "adventure"],
            "relationship_goals": ["long-term"],
        },
        "requirements": {
            "height_range_min": 170,
            "height_range_max": 190,
            "preferred_body_types": ["athletic"],
            "age_range_min": 24,
            "age_range_max": 32,
            "preferred_personality_traits": ["kind"],
            "preferred_values": ["family"],
            "preferred_relationship_goals": ["long-term"],
        },
    }
