"""Instruction text sent to the text generation service."""

INSIGHT_PROMPT_TEMPLATE = """
Analyze the current state of the {industry} industry and provide insights in ONLY the following JSON format without any additional notes or explanations:
{{
  "salaryRanges": [
    {{ "role": "string", "min": number, "max": number, "median": number, "location": "string" }}
  ],
  "growthRate": number,
  "demandLevel": "High" | "Medium" | "Low",
  "topSkills": ["skill1", "skill2"],
  "marketOutlook": "Positive" | "Neutral" | "Negative",
  "keyTrends": ["trend1", "trend2"],
  "recommendedSkills": [
    {{
      "skill": "string",
      "sources": [
        {{ "name": "string", "type": "Video" | "Course" | "Documentation" | "Article", "url": "string" }}
      ]
    }}
  ]
}}

IMPORTANT:
- Return ONLY the JSON. No extra text, no markdown formatting, no code fences.
- Include at least {min_roles} common roles for salary ranges.
- Growth rate should be a percentage number.
- Include at least {min_skills} skills and {min_trends} trends.
- For each recommended skill, provide exactly {sources_per_skill} trusted sources (official docs, YouTube, or courses).
"""

MIN_SALARY_ROLES = 5
MIN_TOP_SKILLS = 5
MIN_KEY_TRENDS = 5
SOURCES_PER_SKILL = 3


def build_insight_prompt(industry: str) -> str:
    """Deterministic instruction text for ``industry``."""
    return INSIGHT_PROMPT_TEMPLATE.format(
        industry=industry,
        min_roles=MIN_SALARY_ROLES,
        min_skills=MIN_TOP_SKILLS,
        min_trends=MIN_KEY_TRENDS,
        sources_per_skill=SOURCES_PER_SKILL,
    ).strip()
