# src/pipeline/prompts.py — v1
"""Prompt templates for resume analysis and job-description matching.

Templates are plain ``str.format`` strings; the rendered prompt is what the
result cache fingerprints, so any edit here naturally invalidates previous
cache entries.
"""

from __future__ import annotations

RESUME_ANALYSIS_TEMPLATE = """\
**SYSTEM INSTRUCTION:** You are a consistent, deterministic resume analyst. \
Analyze the resume text below and return one valid JSON object.

**CONTEXT:** The text is the raw output of extracting a resume file, i.e. what \
an Applicant Tracking System (ATS) sees. Jumbled text, odd characters or missing \
standard headers (Experience, Education, Skills) mean the resume is not ATS-friendly \
and must lower the ATS score.

**RULES:**
1. Respond with a single JSON object inside ```json ... ```. No text outside it.
2. Score with the rubric below. The same resume must always get the same integer \
scores between 0 and 100.
3. Every paragraph quotes words, phrases or numbers from the resume.
4. Base the analysis on the resume alone; never refer to a job description.
5. Address the candidate directly as "you".
6. Suitable roles must be ones the candidate qualifies for today, best fit first \
(85-98%, then 75-85%, then 65-75%), with matching skills in **bold**.

**RUBRIC (do not mention in the output):**
- Overall_Resume_Score: clarity 20, impact and action verbs 20, quantified results 20, \
structure 20, completeness 20.
- ATS_Optimization_Score: standard section headers 40, keyword relevance 30, \
parseability 30.

**Resume Text:**
---
{resume_text}
---

**JSON STRUCTURE:**
{{
  "Overall_Assessment": ["<paragraph>", "<paragraph>", "<paragraph>"],
  "Education_Analysis": ["<paragraph>", "<paragraph>", "<paragraph>"],
  "Skills_Analysis": {{
    "Current_Skills": ["<paragraph>", "<paragraph>", "<paragraph>"],
    "Missing_Skills": ["<paragraph>", "<paragraph>", "<paragraph>"]
  }},
  "Experience_Analysis": ["<paragraph>", "<paragraph>", "<paragraph>"],
  "Key_Strengths": ["<paragraph>", "<paragraph>", "<paragraph>"],
  "Suitable_Job_Role": [
    {{"role_name": "<role>", "match_percentage": "<integer>", "reason": "<reason>"}}
  ],
  "Areas_for_Improvement": {{
    "Grammar_and_Formatting": ["<paragraph>"],
    "Completeness": ["<paragraph>"],
    "Keyword_Optimization": ["<paragraph>"]
  }},
  "Improvement_Tips": {{
    "To_Improve_Overall_Score": ["<tip>"],
    "To_Improve_ATS_Score": ["<tip>"]
  }},
  "Score_Explanation": {{
    "Overall_Score_Explanation": "<one sentence>",
    "ATS_Score_Explanation": "<one sentence>"
  }},
  "Final_Scoring": {{
    "ATS_Optimization_Score": "<integer 0-100>",
    "Overall_Resume_Score": "<integer 0-100>"
  }}
}}"""

REFERENCE_MATCH_TEMPLATE = """\
**SYSTEM INSTRUCTION:** You are a recruitment consultant. Compare the RESUME TEXT \
with the JOB DESCRIPTION and return one valid JSON object.

**RULES:**
1. Respond with a single JSON object inside ```json ... ```. No text outside it.
2. Be realistic and constructive; address the candidate as "you".
3. Give exactly three strengths and three gaps.
4. Normalize skills before comparing: case-insensitive, and spelling variants such as \
"SpringBoot", "Spring-boot" and "Spring boot" are the same skill.
5. A skill counts wherever it appears in the resume (projects, roles, skills list).
6. If the candidate's primary domain differs from the job's, matchScore must be below 20.

**Resume Text:**
---
{resume_text}
---

**Job Description:**
---
{reference_text}
---

**JSON STRUCTURE:**
{{
  "matchScore": "<integer 0-100>",
  "overallFitAnalysis": "<2-3 sentences>",
  "strengths": ["<point>", "<point>", "<point>"],
  "gapsAndWeaknesses": ["<point>", "<point>", "<point>"],
  "matchedKeywords": ["<skill>"],
  "missingKeywords": ["<skill>"],
  "tailoringSuggestions": ["<suggestion>"]
}}"""


def build_analysis_prompt(resume_text: str) -> str:
    """Single-document evaluation prompt."""
    return RESUME_ANALYSIS_TEMPLATE.format(resume_text=resume_text)


def build_reference_match_prompt(resume_text: str, reference_text: str) -> str:
    """Resume-versus-job-description comparison prompt."""
    return REFERENCE_MATCH_TEMPLATE.format(
        resume_text=resume_text, reference_text=reference_text
    )
