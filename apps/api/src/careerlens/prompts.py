"""
Prompt templates for the career endpoints.

Each prompt embeds a skeleton rendered from the endpoint's schema
descriptor, so the structure the model is asked for is the structure the
normalizer enforces.
"""

import json
from typing import Any

from careerlens.core.schema import FieldKind, SchemaDescriptor
from careerlens.core.shapes import COMPARISON, EXPLORE, MATCHES, OVERVIEW, PROFILE

JSON_ONLY = "CRITICAL: Return ONLY the JSON. No markdown, no backticks, no explanation text."


def _example_record(schema: SchemaDescriptor) -> dict[str, Any]:
    record: dict[str, Any] = {}
    for spec in schema.fields:
        if spec.kind == FieldKind.OBJECT and spec.schema is not None:
            record[spec.name] = _example_record(spec.schema)
        elif spec.kind == FieldKind.OBJECT_ARRAY:
            record[spec.name] = [_example_record(spec.schema)]
        elif spec.kind == FieldKind.ARRAY:
            record[spec.name] = spec.default_for(0) or ["..."]
        else:
            record[spec.name] = spec.default_for(0)
    return record


def skeleton(schema: SchemaDescriptor) -> str:
    """Render one example record of the schema as indented JSON."""
    record = _example_record(schema)
    example: Any = [record] if schema.many else record
    return json.dumps(example, indent=2)


def _answers_block(answers: dict[str, Any]) -> str:
    return json.dumps(answers, indent=2, ensure_ascii=False)


def overview_prompt(answers: dict[str, Any]) -> str:
    return f"""You are a career counselor AI. Based on the following assessment answers, generate a comprehensive career overview.

Assessment Answers:
{_answers_block(answers)}

Generate a JSON object with this structure (values only show the type):
{skeleton(OVERVIEW)}

Include exactly 3 topMatches with match scores between 0 and 100.

{JSON_ONLY}"""


def matches_prompt(answers: dict[str, Any]) -> str:
    return f"""You are a career counselor AI. Based on the following assessment answers, generate {MATCHES.pad_to} detailed career recommendations.

Assessment Answers:
{_answers_block(answers)}

Generate a JSON array with this structure (values only show the type):
{skeleton(MATCHES)}

Requirements:
- Generate exactly {MATCHES.pad_to} careers
- Each career should have ALL fields filled
- Make salary and outlook realistic
- Skills gap should be honest and helpful

{JSON_ONLY}"""


def explore_prompt(filters: dict[str, str | None]) -> str:
    return f"""You are a career database expert. Generate a comprehensive list of {EXPLORE.max_items} diverse career paths.

Filters applied:
- Industry: {filters.get("industry") or "Any"}
- Education Level: {filters.get("educationLevel") or "Any"}
- Salary Range: {filters.get("salaryMin") or "Min"} - {filters.get("salaryMax") or "Max"}
- Work Environment: {filters.get("workEnvironment") or "Any"}

Generate a JSON array with this structure (values only show the type):
{skeleton(EXPLORE)}

Include diverse careers across Technology, Healthcare, Business, Creative/Arts, Education, Trades, Science, and Social Services.

{JSON_ONLY}"""


def profile_prompt(answers: dict[str, Any]) -> str:
    return f"""You are an expert career counselor AI. Analyze these assessment answers and create a comprehensive career profile.

ASSESSMENT DATA:
{_answers_block(answers)}

GENERATE EXACTLY THIS JSON STRUCTURE (values only show the type):
{skeleton(PROFILE)}

RULES:
- Provide at least 3 strengths and 2 challenges
- Use realistic strength scores (65-95 range)
- Make all content specific and personalized
- Base everything on the actual assessment answers

{JSON_ONLY}"""


def comparison_prompt(career_ids: list[str]) -> str:
    return f"""Generate a detailed comparison of these careers: {", ".join(career_ids)}

Return a JSON object with one entry in "careers" per career (values only show the type):
{skeleton(COMPARISON)}

{JSON_ONLY}"""


PING_PROMPT = 'Respond with a JSON object: {"status": "success", "message": "Gemini API is working"}'
