"""
Response shapes for each career endpoint.

Defaults mirror what the frontend renders when the model leaves a field
out, so a partially-filled response still produces a usable page.
"""

from careerlens.core.schema import FieldKind, FieldSpec, SchemaDescriptor

MATCH_BOUNDS = (0, 100)


def career_id(index: int) -> str:
    """Placeholder id for the record at ``index``."""
    return f"career_{index}"


def _text(name: str, default: str) -> FieldSpec:
    return FieldSpec(name, FieldKind.STRING, default=default)


def _texts(name: str, default: list[str], min_items: int = 0) -> FieldSpec:
    return FieldSpec(name, FieldKind.ARRAY, default=default, min_items=min_items)


def _score(name: str, default: int) -> FieldSpec:
    return FieldSpec(name, FieldKind.NUMBER, default=default, bounds=MATCH_BOUNDS)


def _record(name: str, *fields: FieldSpec) -> SchemaDescriptor:
    return SchemaDescriptor(name=name, fields=fields)


# =============================================================================
# Overview
# =============================================================================

OVERVIEW = SchemaDescriptor(
    name="overview",
    fields=(
        FieldSpec(
            "topMatches",
            FieldKind.OBJECT_ARRAY,
            default=[],
            max_items=3,
            schema=_record(
                "topMatch",
                FieldSpec("id", FieldKind.STRING, default=career_id),
                _text("title", "Unknown Career"),
                _score("match", 75),
                _text("shortReason", "This career aligns with your profile."),
            ),
        ),
        FieldSpec(
            "profile",
            FieldKind.OBJECT,
            schema=_record(
                "overviewProfile",
                _text("primaryInterest", "Exploring career interests"),
                _texts("topStrengths", ["Adaptability"], min_items=1),
                _text("learningStyle", "Mixed learning approaches"),
                _text("workEnvironment", "Flexible and adaptable"),
            ),
        ),
        FieldSpec(
            "nextStep",
            FieldKind.OBJECT,
            schema=_record(
                "nextStep",
                _text("action", "Review your career matches"),
                _text("why", "Based on your assessment responses"),
                _texts("resources", []),
            ),
        ),
    ),
)


# =============================================================================
# Matches - exactly six detailed recommendations
# =============================================================================

MATCHES = SchemaDescriptor(
    name="matches",
    many=True,
    max_items=6,
    pad_to=6,
    prefer_array=True,
    fields=(
        FieldSpec("id", FieldKind.STRING, default=career_id),
        _text("title", "Unknown Career"),
        _score("match", 75),
        _text("whyFits", "This career aligns with your profile."),
        FieldSpec(
            "skillsGap",
            FieldKind.OBJECT,
            schema=_record(
                "skillsGap",
                _texts("hasSkills", ["General skills"]),
                _texts("needsSkills", ["Specific training needed"]),
            ),
        ),
        FieldSpec(
            "education",
            FieldKind.OBJECT,
            schema=_record(
                "education",
                _text("minimumRequired", "Varies"),
                _texts("alternatives", ["Self-learning", "Online courses"]),
                _text("timeToComplete", "Varies"),
            ),
        ),
        FieldSpec(
            "outlook",
            FieldKind.OBJECT,
            schema=_record(
                "outlook",
                _text("salaryRange", "$40,000 - $80,000"),
                _text("jobGrowth", "Moderate"),
                _text("demandLevel", "Medium"),
            ),
        ),
    ),
)


# =============================================================================
# Explore - browsable career catalogue
# =============================================================================

EXPLORE = SchemaDescriptor(
    name="explore",
    many=True,
    max_items=15,
    prefer_array=True,
    fields=(
        FieldSpec("id", FieldKind.STRING, default=career_id),
        _text("title", "Unknown Career"),
        _text("industry", "General"),
        _text("shortDescription", "Description unavailable"),
        _text("educationRequired", "Varies"),
        _text("salaryRange", "Varies"),
        _text("workEnvironment", "Varies"),
        _text("demandLevel", "Medium"),
        _texts("tags", []),
    ),
)


# =============================================================================
# Profile
# =============================================================================

PROFILE = SchemaDescriptor(
    name="profile",
    fields=(
        FieldSpec(
            "summary",
            FieldKind.OBJECT,
            schema=_record(
                "summary",
                _text("headline", "Career Profile Generated"),
                _text("description", "Your personalized career analysis has been completed."),
            ),
        ),
        FieldSpec(
            "strengths",
            FieldKind.OBJECT_ARRAY,
            min_items=1,
            default=[
                {
                    "name": "Analytical Thinking",
                    "description": "Based on your assessment responses",
                    "score": 75,
                }
            ],
            schema=_record(
                "strength",
                _text("name", "Unnamed Strength"),
                _text("description", "Description unavailable"),
                _score("score", 70),
            ),
        ),
        FieldSpec(
            "challenges",
            FieldKind.OBJECT_ARRAY,
            min_items=1,
            default=[
                {
                    "area": "Continuous Learning",
                    "description": "Stay current with industry trends",
                    "howToImprove": "Dedicate time weekly to learning new skills",
                }
            ],
            schema=_record(
                "challenge",
                _text("area", "Growth Area"),
                _text("description", "Area for development"),
                _text("howToImprove", "Recommendations pending"),
            ),
        ),
        FieldSpec(
            "interests",
            FieldKind.OBJECT,
            schema=_record(
                "interests",
                _texts("primary", ["Career Development"], min_items=1),
                _texts("secondary", ["Professional Growth"], min_items=1),
                _text("workStyle", "Flexible and adaptable"),
            ),
        ),
        FieldSpec(
            "learningProfile",
            FieldKind.OBJECT,
            schema=_record(
                "learningProfile",
                _text("preferredMethod", "Mixed learning approaches"),
                _text("pace", "Steady progression"),
                _text("bestEnvironment", "Supportive and structured"),
            ),
        ),
        FieldSpec(
            "careerReadiness",
            FieldKind.OBJECT,
            schema=_record(
                "careerReadiness",
                _text("currentLevel", "Exploring career options"),
                _texts(
                    "nextMilestones",
                    ["Complete skills assessment", "Research career paths", "Create development plan"],
                    min_items=1,
                ),
                _text("estimatedTimeToCareer", "Variable based on path chosen"),
            ),
        ),
        FieldSpec(
            "recommendations",
            FieldKind.OBJECT,
            schema=_record(
                "recommendations",
                _texts(
                    "immediate",
                    ["Review your assessment results", "Research recommended careers", "Identify skill gaps"],
                    min_items=1,
                ),
                _texts(
                    "shortTerm",
                    ["Take relevant online courses", "Connect with professionals", "Build project portfolio"],
                    min_items=1,
                ),
                _texts(
                    "longTerm",
                    [
                        "Pursue formal education/certification",
                        "Gain practical experience",
                        "Build professional network",
                    ],
                    min_items=1,
                ),
            ),
        ),
    ),
)

# Returned without a model call when no answers were submitted
PROFILE_PLACEHOLDER = {
    "summary": {
        "headline": "Complete Assessment to Generate Profile",
        "description": (
            "Take the career assessment to receive your personalized AI-generated profile "
            "with strengths, recommendations, and career roadmap."
        ),
    },
    "strengths": [],
    "challenges": [],
    "interests": {"primary": [], "secondary": [], "workStyle": "Assessment Required"},
    "learningProfile": {
        "preferredMethod": "Assessment Required",
        "pace": "Assessment Required",
        "bestEnvironment": "Assessment Required",
    },
    "careerReadiness": {
        "currentLevel": "Assessment Pending",
        "nextMilestones": ["Complete the career assessment"],
        "estimatedTimeToCareer": "To be determined",
    },
    "recommendations": {
        "immediate": ["Take the career assessment to get started"],
        "shortTerm": [],
        "longTerm": [],
    },
}


# =============================================================================
# Comparison
# =============================================================================

COMPARISON = SchemaDescriptor(
    name="comparison",
    fields=(
        FieldSpec(
            "careers",
            FieldKind.OBJECT_ARRAY,
            default=[],
            schema=_record(
                "comparedCareer",
                FieldSpec("id", FieldKind.STRING, default=career_id),
                _text("title", "Unknown Career"),
                _text("education", "Varies"),
                _text("salaryRange", "Varies"),
                _text("timeToEntry", "Varies"),
                _text("workLifeBalance", "Varies"),
                _text("jobSecurity", "Moderate"),
                _text("growthPotential", "Moderate"),
                FieldSpec(
                    "prosAndCons",
                    FieldKind.OBJECT,
                    schema=_record("prosAndCons", _texts("pros", []), _texts("cons", [])),
                ),
            ),
        ),
        _text("recommendation", "Compare the careers above against your interests and goals."),
    ),
)


# =============================================================================
# Connectivity check
# =============================================================================

PING = SchemaDescriptor(
    name="ping",
    fields=(
        _text("status", "unknown"),
        _text("message", "No message returned"),
    ),
)
