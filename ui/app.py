"""
QCS Compatibility Calculator

A Streamlit application for computing compatibility between two
profiles from their qualities and partner requirements.

Design: matches the swipe card look of the app
- Soft neutral palette (off-white, charcoal, subtle teal accent)
- Large hero score display with physical / mental sub-scores
- Match reasons listed under the score

Run with: streamlit run ui/app.py
"""

import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import streamlit as st

from qcs.configs import load_config
from qcs.scoring import CompatibilityScorer, create_scorer_from_config

# =============================================================================
# CONSTANTS
# =============================================================================

CONFIG_PATH = project_root / "configs" / "config.yaml"

BODY_TYPES = ["slim", "athletic", "average", "curvy", "muscular", "plus-size"]
INTERESTS = ["hiking", "reading", "music", "movies", "travel", "cooking",
             "gaming", "art", "sports", "photography", "dancing", "fitness"]
TRAITS = ["adventurous", "kind", "creative", "ambitious", "funny", "calm",
          "outgoing", "thoughtful", "loyal"]
VALUES = ["honesty", "family", "adventure", "career", "faith", "loyalty",
          "independence", "kindness"]
GOALS = ["long-term", "marriage", "casual", "friendship", "not sure yet"]
EDUCATION_LEVELS = ["", "high school", "bachelor", "master", "phd"]
COMMUNICATION_STYLES = ["", "direct", "thoughtful", "playful", "reserved"]

# =============================================================================
# DESIGN SYSTEM - Colors & Styles
# =============================================================================

COLORS = {
    "background": "#FAFAFA",
    "card_bg": "#FFFFFF",
    "text_primary": "#2D3748",
    "text_secondary": "#718096",
    "text_muted": "#A0AEC0",
    "accent": "#319795",
    "accent_light": "#E6FFFA",
    "border": "#E2E8F0",
    "success": "#48BB78",
    "warning": "#ED8936",
    "error": "#F56565",
}


def inject_custom_css():
    """Inject custom CSS."""
    st.markdown(f"""
    <style>
        .stApp {{
            background-color: {COLORS['background']};
        }}

        h1, h2, h3 {{
            color: {COLORS['text_primary']} !important;
            font-weight: 600 !important;
        }}

        .card-header {{
            color: {COLORS['text_primary']};
            font-size: 1.1rem;
            font-weight: 600;
            margin-bottom: 1rem;
            padding-bottom: 0.75rem;
            border-bottom: 1px solid {COLORS['border']};
        }}

        .hero-score-container {{
            text-align: center;
            padding: 2.5rem 1rem;
            background: {COLORS['card_bg']};
            border: 1px solid {COLORS['border']};
            border-radius: 16px;
            margin: 1.5rem 0;
        }}

        .hero-score {{
            font-size: 4.5rem;
            font-weight: 700;
            color: {COLORS['text_primary']};
            line-height: 1;
            margin-bottom: 0.5rem;
        }}

        .hero-score-label {{
            font-size: 1rem;
            color: {COLORS['text_secondary']};
            text-transform: uppercase;
            letter-spacing: 0.1em;
            margin-bottom: 1rem;
        }}

        .hero-score-bar {{
            height: 6px;
            background: {COLORS['border']};
            border-radius: 3px;
            margin: 1.5rem auto 0;
            max-width: 280px;
            overflow: hidden;
        }}

        .hero-score-fill {{
            height: 100%;
            background: linear-gradient(90deg, {COLORS['accent']}, {COLORS['accent_light']});
            border-radius: 3px;
        }}

        .subscore-container {{
            display: flex;
            justify-content: center;
            gap: 3rem;
            margin-top: 1.5rem;
            padding-top: 1.5rem;
            border-top: 1px solid {COLORS['border']};
        }}

        .subscore {{
            text-align: center;
        }}

        .subscore-value {{
            font-size: 1.5rem;
            font-weight: 600;
            color: {COLORS['text_primary']};
        }}

        .subscore-label {{
            font-size: 0.8rem;
            color: {COLORS['text_muted']};
            text-transform: uppercase;
            letter-spacing: 0.05em;
        }}

        .reason {{
            background: {COLORS['accent_light']};
            border-left: 3px solid {COLORS['accent']};
            padding: 0.6rem 1rem;
            border-radius: 0 8px 8px 0;
            margin-bottom: 0.5rem;
            color: {COLORS['text_primary']};
        }}

        .stButton > button {{
            background: {COLORS['accent']} !important;
            color: white !important;
            border: none !important;
            padding: 0.75rem 2rem !important;
            font-weight: 500 !important;
            border-radius: 8px !important;
        }}

        #MainMenu {{visibility: hidden;}}
        footer {{visibility: hidden;}}
    </style>
    """, unsafe_allow_html=True)


# =============================================================================
# COMPONENT FUNCTIONS
# =============================================================================

@st.cache_resource
def load_scorer() -> CompatibilityScorer:
    """Load and cache the scorer, falling back to default weights."""
    if CONFIG_PATH.exists():
        return create_scorer_from_config(load_config(str(CONFIG_PATH)))
    return CompatibilityScorer()


def render_header():
    """Render the page header with title and description."""
    st.markdown("""
    <div style="text-align: center; margin-bottom: 2rem;">
        <h1 style="font-size: 2.2rem; margin-bottom: 0.5rem;">Compatibility Calculator</h1>
        <p style="font-size: 1.1rem; color: #718096; max-width: 600px; margin: 0 auto;">
            Physical and mental compatibility from profile qualities and partner requirements
        </p>
    </div>
    """, unsafe_allow_html=True)


def render_qualities_section(key_prefix: str) -> dict:
    """Render the self-description inputs."""
    st.markdown('<div class="card-header">About</div>', unsafe_allow_html=True)

    profile = {}
    profile["height"] = st.number_input(
        "Height (cm)", min_value=0, max_value=250, value=170, key=f"{key_prefix}_height"
    )
    profile["date_of_birth"] = st.date_input(
        "Date of birth",
        value=date(1996, 1, 1),
        min_value=date(1940, 1, 1),
        max_value=date.today(),
        key=f"{key_prefix}_dob",
    ).isoformat()

    qualities = {
        "body_type": st.selectbox("Body type", [""] + BODY_TYPES, key=f"{key_prefix}_body"),
        "interests": st.multiselect("Interests", INTERESTS, key=f"{key_prefix}_interests"),
        "personality_traits": st.multiselect("Personality", TRAITS, key=f"{key_prefix}_traits"),
        "values": st.multiselect("Values", VALUES, key=f"{key_prefix}_values"),
        "relationship_goals": st.multiselect("Looking for", GOALS, key=f"{key_prefix}_goals"),
        "education_level": st.selectbox("Education", EDUCATION_LEVELS, key=f"{key_prefix}_education"),
        "communication_style": st.selectbox(
            "Communication style", COMMUNICATION_STYLES, key=f"{key_prefix}_communication"
        ),
    }
    profile["qualities"] = qualities
    return profile


def render_requirements_section(key_prefix: str) -> dict:
    """Render the partner preference inputs."""
    st.markdown('<div class="card-header">Looking For</div>', unsafe_allow_html=True)

    height_min, height_max = st.slider(
        "Partner height (cm)", 140, 210, (150, 200), key=f"{key_prefix}_height_range"
    )
    age_min, age_max = st.slider(
        "Partner age", 18, 70, (18, 30), key=f"{key_prefix}_age_range"
    )
    st.caption("Leave a list empty for no preference")

    return {
        "height_range_min": height_min,
        "height_range_max": height_max,
        "preferred_body_types": st.multiselect(
            "Body types", BODY_TYPES, key=f"{key_prefix}_pref_body"
        ),
        "age_range_min": age_min,
        "age_range_max": age_max,
        "preferred_personality_traits": st.multiselect(
            "Personality", TRAITS, key=f"{key_prefix}_pref_traits"
        ),
        "preferred_values": st.multiselect("Values", VALUES, key=f"{key_prefix}_pref_values"),
        "preferred_relationship_goals": st.multiselect(
            "Relationship goals", GOALS, key=f"{key_prefix}_pref_goals"
        ),
    }


def render_results(result):
    """Render the hero score, sub-scores and reasons."""
    bar_width = max(5, result.overall_score)

    st.markdown(f"""
    <div class="hero-score-container">
        <div class="hero-score-label">Compatibility</div>
        <div class="hero-score">{result.overall_score}%</div>
        <div class="hero-score-bar">
            <div class="hero-score-fill" style="width: {bar_width}%"></div>
        </div>
        <div class="subscore-container">
            <div class="subscore">
                <div class="subscore-value">{result.physical_score}%</div>
                <div class="subscore-label">Physical</div>
            </div>
            <div class="subscore">
                <div class="subscore-value">{result.mental_score}%</div>
                <div class="subscore-label">Mental</div>
            </div>
        </div>
    </div>
    """, unsafe_allow_html=True)

    if result.compatibility_reasons:
        for reason in result.compatibility_reasons:
            st.markdown(f'<div class="reason">{reason}</div>', unsafe_allow_html=True)
    else:
        st.caption("No shared interests, values or goals found yet.")

    if result.shared_interests:
        with st.expander("Shared interests"):
            st.write(", ".join(result.shared_interests))


# =============================================================================
# MAIN APPLICATION
# =============================================================================

def main():
    """Main application entry point."""
    st.set_page_config(
        page_title="Compatibility Calculator",
        page_icon="",
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    inject_custom_css()
    render_header()
    scorer = load_scorer()

    col_a, col_b = st.columns(2, gap="large")
    with col_a:
        st.subheader("Person A")
        profile_a = render_qualities_section("a")
        profile_a["requirements"] = render_requirements_section("a")
    with col_b:
        st.subheader("Person B")
        profile_b = render_qualities_section("b")
        profile_b["requirements"] = render_requirements_section("b")

    st.markdown("<div style='height: 1rem'></div>", unsafe_allow_html=True)
    if st.button("Calculate Compatibility", use_container_width=True):
        result = scorer.score(profile_a, profile_b, now=date.today())
        render_results(result)


if __name__ == "__main__":
    main()
