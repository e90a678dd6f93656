"""Tests for prompt construction, reply cleaning and the fallback policy."""

import asyncio

import httpx
import pytest

from appraisal.errors import CompletionAuthError, EmptyInputError, ExternalServiceError
from appraisal.feedback import (
    BOILERPLATE_MARKER,
    SYSTEM_INSTRUCTION,
    anchor_on,
    build_department_prompt,
    build_individual_prompt,
    clean_feedback,
    request_department_feedback,
    request_individual_feedback,
)
from appraisal.llm_client import CompletionClient
from conftest import FakeCompletionClient, make_profile


def _profile():
    return make_profile(
        name="  Asha Rao ",
        domain="Cybersecurity",
        papers=[object(), object()],
        workshops=[object()],
        awards=[],
        hours_taught=42,
        student_feedback=7.5,
    )


# ---- prompts ----

def test_individual_prompt_embeds_domain_counters_and_salutation():
    prompt = build_individual_prompt(_profile())
    assert "in the domain of Cybersecurity" in prompt
    assert "- Number of research papers: 2" in prompt
    assert "- Number of workshops: 1" in prompt
    assert "- Number of awards: 0" in prompt
    assert "- Teaching hours: 42" in prompt
    assert "- Student feedback score: 7.5" in prompt
    assert "5. Use a professional yet encouraging tone." in prompt
    assert prompt.endswith('Begin the feedback with: "Dear Asha Rao,"')


def test_department_prompt_lists_every_profile_and_section():
    teachers = [
        make_profile(name="A One", papers=[object()], hours_taught=10, student_feedback=6),
        make_profile(name="B Two", awards=[object(), object()]),
    ]
    prompt = build_department_prompt("SOE", teachers)
    assert '"SOE" department' in prompt
    assert "Name: A One\nPapers: 1, Workshops: 0, Awards: 0, Teaching Hours: 10, Feedback: 6" in prompt
    assert "Name: B Two\nPapers: 0, Workshops: 0, Awards: 2" in prompt
    assert "Department Feedback for SOE" in prompt
    for heading in ("Key Strengths:", "Areas of Improvement:", "Suggested Research & Conference Focus:", "Teaching & Technology Trends:"):
        assert heading in prompt
    assert prompt.count("[3 concise points max]") == 4


# ---- cleaning ----

def test_anchor_drops_preamble_case_insensitively():
    text = "Sure! Here is the feedback.\n\ndear asha rao,\nGreat work."
    assert anchor_on(text, "Dear Asha Rao,") == "dear asha rao,\nGreat work."


def test_anchor_missing_keeps_full_text():
    assert anchor_on("No greeting here.", "Dear Asha Rao,") == "No greeting here."


def test_anchor_escapes_regex_characters():
    text = "intro\nDear J. (Jo) Smith,\nBody"
    assert anchor_on(text, "Dear J. (Jo) Smith,") == "Dear J. (Jo) Smith,\nBody"


def test_clean_truncates_boilerplate_and_placeholder():
    text = f"Dear A,\nWell done.\n\nBest regards,\n[Your Name]\n\n{BOILERPLATE_MARKER}\n- be nice"
    assert clean_feedback(text) == "Dear A,\nWell done.\n\nBest regards,"


def test_clean_strips_trailing_placeholder_only():
    assert clean_feedback("Dear A,\n[your name] is mentioned.\nRegards,\n[YOUR NAME]  ") == "Dear A,\n[your name] is mentioned.\nRegards,"


# ---- individual feedback ----

def test_individual_feedback_cleans_reply():
    client = FakeCompletionClient(
        reply="Here you go:\nDear Asha Rao,\n1. Publish more.\n[Your Name]\nSome additional guidelines: ignore"
    )
    text = asyncio.run(request_individual_feedback(_profile(), client))
    assert text == "Dear Asha Rao,\n1. Publish more."
    assert client.systems == [SYSTEM_INSTRUCTION]


def test_individual_feedback_unauthorized_returns_unavailable_message():
    def handler(request):
        return httpx.Response(401, json={"error": {"message": "Invalid API Key"}})

    async def run():
        client = CompletionClient("bad-key", transport=httpx.MockTransport(handler))
        try:
            return await request_individual_feedback(_profile(), client, fallback_on_error=True)
        finally:
            await client.aclose()

    text = asyncio.run(run())
    assert text.startswith("Dear Asha Rao,")
    assert "temporarily unavailable" in text


def test_individual_feedback_other_failure_returns_placeholder():
    client = FakeCompletionClient(error=ExternalServiceError("completion", "timeout"))
    text = asyncio.run(request_individual_feedback(_profile(), client, fallback_on_error=True))
    assert text.startswith("Dear Asha Rao,")
    assert "Thank you for your continued dedication" in text


def test_individual_feedback_null_reply_returns_placeholder():
    def handler(request):
        return httpx.Response(200, json={"choices": [{"message": {"content": None}}]})

    async def run():
        client = CompletionClient("key", transport=httpx.MockTransport(handler))
        try:
            return await request_individual_feedback(_profile(), client, fallback_on_error=True)
        finally:
            await client.aclose()

    text = asyncio.run(run())
    assert text.startswith("Dear Asha Rao,")
    assert "Thank you for your continued dedication" in text


def test_individual_feedback_can_be_made_strict():
    client = FakeCompletionClient(error=CompletionAuthError("nope"))
    with pytest.raises(CompletionAuthError):
        asyncio.run(request_individual_feedback(_profile(), client, fallback_on_error=False))


# ---- department feedback ----

def test_department_feedback_empty_input_fails_before_any_call():
    client = FakeCompletionClient(reply="unused")
    with pytest.raises(EmptyInputError):
        asyncio.run(request_department_feedback("SOC", [], client))
    assert client.prompts == []


def test_department_feedback_anchors_on_label():
    client = FakeCompletionClient(
        reply="---\nSOC Department\nDepartment Feedback for SOC\n\nKey Strengths:\n- Teaching\n"
    )
    text = asyncio.run(request_department_feedback("SOC", [make_profile()], client))
    assert text == "Department Feedback for SOC\n\nKey Strengths:\n- Teaching"


def test_department_feedback_propagates_failures_by_default():
    client = FakeCompletionClient(error=ExternalServiceError("completion", "boom", status=500))
    with pytest.raises(ExternalServiceError):
        asyncio.run(request_department_feedback("SOC", [make_profile()], client))


def test_department_feedback_fallback_when_enabled():
    client = FakeCompletionClient(error=ExternalServiceError("completion", "boom"))
    text = asyncio.run(request_department_feedback("SOC", [make_profile()], client, fallback_on_error=True))
    assert text.startswith("Dear Department Feedback for SOC,")
