"""Prompt builders for job-description extraction."""

from __future__ import annotations

JOB_PARSE_SYSTEM_PROMPT = """You are a professional HR data extraction engine.

Analyze the provided job description text and extract a structured JSON object with:
- requiredSkills (string[]): must-have skills and technologies, one per entry
- niceToHaveSkills (string[]): preferred or "bonus" skills and technologies
- yearsExperience (number): minimum years of experience asked for, 0 if not stated
- keyResponsibilities (string[]): the main duties of the role
- domains (string[]): industry or business domains

Rules:
- Only extract what the text states. Do NOT invent requirements.
- Use short skill names ("Python", "AWS Lambda"), not sentences.
- Output RAW JSON only (no markdown, no commentary).
"""


def build_job_parse_prompt(job_description: str) -> str:
    """Build the user prompt for job-description extraction."""
    return "\n".join(
        [
            "Extract the requirements from this job description.",
            "",
            "Job description:",
            "<<<",
            job_description.strip(),
            ">>>",
        ]
    )
