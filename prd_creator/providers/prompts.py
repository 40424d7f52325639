"""Prompt templates for AI-backed providers."""

from __future__ import annotations

import jinja2

from prd_creator.schemas.prd import PrdGenerationInput

SYSTEM_PROMPT = """You are an expert product manager with deep experience in writing detailed, professional Product Requirements Documents (PRDs).
Your task is to create a comprehensive PRD for the product described by the user.
Structure the PRD with clear sections including:
- Introduction and product overview
- Target audience analysis
- Detailed core features explanation
- Technical and business constraints
- Implementation considerations
- Success metrics
Use professional language, be thorough, and format the document in clean markdown."""

_USER_PROMPT = """Please create a detailed PRD for the following product:

Product Name: {{ product_name }}

Product Description: {{ product_description }}

Target Audience: {{ target_audience }}

Core Features:
{% for feature in core_features %}
• {{ feature }}
{% endfor %}

Constraints:
{% if constraints %}
{% for constraint in constraints %}
• {{ constraint }}
{% endfor %}
{% else %}
None specified
{% endif %}
{% if additional_context %}

Additional Context: {{ additional_context }}
{% endif %}

Format the PRD as a well-structured markdown document with appropriate headings, bullet points, and sections."""

_env = jinja2.Environment(undefined=jinja2.StrictUndefined, trim_blocks=True, lstrip_blocks=True)
_user_template = _env.from_string(_USER_PROMPT)


def build_user_prompt(data: PrdGenerationInput) -> str:
    return _user_template.render(**data.model_dump())
