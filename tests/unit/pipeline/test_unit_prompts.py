# tests/unit/pipeline/test_unit_prompts.py — v1
"""Tests for pipeline/prompts.py."""

from __future__ import annotations

from resumeai.pipeline.prompts import build_analysis_prompt, build_reference_match_prompt


class TestPrompts:
    def test_analysis_prompt_embeds_resume(self):
        prompt = build_analysis_prompt("RESUME BODY {not a field}")
        assert "RESUME BODY {not a field}" in prompt
        assert '"Final_Scoring": {' in prompt

    def test_analysis_prompt_deterministic(self):
        assert build_analysis_prompt("abc") == build_analysis_prompt("abc")

    def test_reference_prompt_embeds_both(self):
        prompt = build_reference_match_prompt("RESUME", "JOB DESCRIPTION")
        assert "RESUME" in prompt
        assert "JOB DESCRIPTION" in prompt
        assert '"matchScore"' in prompt

    def test_different_reference_different_prompt(self):
        assert build_reference_match_prompt("r", "a") != build_reference_match_prompt("r", "b")
