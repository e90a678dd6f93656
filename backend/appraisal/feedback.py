"""
Feedback generation for individual faculty members and whole departments.

Both paths build a prompt from profile data, send it to the completion
service and clean the returned text:

1. Anchor on the salutation line ("Dear {name},") and drop any preamble
2. Cut everything from the "Some additional guidelines:" boilerplate onwards
3. Strip a trailing "[Your Name]" placeholder

When the completion call fails, the caller chooses the policy: fall back to a
canned message addressed to the profile (individual feedback by default) or
let the ``ExternalServiceError`` propagate (department feedback by default).
"""

from __future__ import annotations
import logging
import re
import textwrap
from typing import Any, Optional, Sequence

from .errors import CompletionAuthError, EmptyInputError, ExternalServiceError
from .llm_client import CompletionClient
from .settings import settings

logger = logging.getLogger(__name__)


SYSTEM_INSTRUCTION = (
	"You are an academic performance feedback generator for faculty. "
	"Provide constructive, professional feedback."
)
BOILERPLATE_MARKER = "Some additional guidelines:"
_NAME_PLACEHOLDER_RE = re.compile(r"\[Your Name\]\s*$", re.IGNORECASE)

UNAVAILABLE_TEMPLATE = (
	"Dear {name},\n\n"
	"Feedback generation is temporarily unavailable due to configuration issues. "
	"Please contact the system administrator."
)
PLACEHOLDER_TEMPLATE = (
	"Dear {name},\n\n"
	"Thank you for your continued dedication. Your performance data has been recorded. "
	"Detailed feedback will be available shortly."
)


def _count(items: Optional[Sequence[Any]]) -> int:
	return len(items or [])


def build_individual_prompt(teacher: Any) -> str:
	name = (teacher.name or "").strip()
	return textwrap.dedent(
		f"""\
		Provide point-wise, constructive feedback for a faculty member in the domain of {teacher.domain}.

		Faculty profile:
		- Number of research papers: {_count(teacher.papers)}
		- Number of workshops: {_count(teacher.workshops)}
		- Number of awards: {_count(teacher.awards)}
		- Teaching hours: {teacher.hours_taught or 0}
		- Student feedback score: {teacher.student_feedback or 0}

		The feedback should include:
		1. Areas of improvement in research and publications (e.g., trending subfields to explore).
		2. Suggestions for workshops or conferences relevant to the {teacher.domain} domain.
		3. Recommendations for awards or grants based on their current achievements.
		4. Latest trends in teaching methods or educational technology tools that can enhance classroom experience.
		5. Use a professional yet encouraging tone.

		Begin the feedback with: "Dear {name},"
		"""
	).strip()


def _profile_summary(teacher: Any) -> str:
	return (
		f"Name: {teacher.name}\n"
		f"Papers: {_count(teacher.papers)}, Workshops: {_count(teacher.workshops)}, "
		f"Awards: {_count(teacher.awards)}, Teaching Hours: {teacher.hours_taught or 0}, "
		f"Feedback: {teacher.student_feedback or 0}"
	)


def department_anchor(department: str) -> str:
	return f"Department Feedback for {department}"


def build_department_prompt(department: str, teachers: Sequence[Any]) -> str:
	summaries = "\n\n".join(_profile_summary(t) for t in teachers)
	return (
		f'You are an academic reviewer generating a concise and professional feedback report for the "{department}" department, based on faculty achievements.\n\n'
		f"Faculty Profiles:\n{summaries}\n\n"
		"Your output must be in the following format and should be clear with real-world on-going trends and links:\n\n"
		"---\n"
		f"{department} Department\n"
		f"{department_anchor(department)}\n\n"
		"Key Strengths:\n- [3 concise points max]\n\n"
		"Areas of Improvement:\n- [3 concise points max]\n\n"
		"Suggested Research & Conference Focus:\n- [3 concise points max]\n\n"
		"Teaching & Technology Trends:\n- [3 concise points max]\n\n"
		"Avoid unnecessary asterisks or lengthy explanations. Use a clear, readable tone that is professional and easy to scan."
	)


def anchor_on(text: str, anchor: str) -> str:
	"""Drop everything before the first case-insensitive occurrence of ``anchor``."""
	match = re.search(re.escape(anchor.strip()), text, re.IGNORECASE)
	if not match:
		return text
	return text[match.start():].strip()


def clean_feedback(text: str) -> str:
	index = text.find(BOILERPLATE_MARKER)
	if index != -1:
		text = text[:index].strip()
	return _NAME_PLACEHOLDER_RE.sub("", text).strip()


def fallback_message(name: str, error: Exception) -> str:
	if isinstance(error, CompletionAuthError):
		return UNAVAILABLE_TEMPLATE.format(name=name)
	return PLACEHOLDER_TEMPLATE.format(name=name)


async def generate_feedback(
	client: CompletionClient,
	prompt: str,
	*,
	anchor: str,
	recipient: str,
	fallback_on_error: bool,
) -> str:
	"""
	Send ``prompt`` and clean the reply.

	Args:
		anchor: Text the reply should start from (preamble before it is dropped)
		recipient: Who a fallback message is addressed to
		fallback_on_error: Return a canned message instead of raising on failure
	"""
	try:
		message = await client.complete(
			prompt,
			system=SYSTEM_INSTRUCTION,
			temperature=settings.feedback_temperature,
			max_tokens=settings.feedback_max_tokens,
		)
	except ExternalServiceError as err:
		logger.error("Feedback generation error for %r: %s", recipient, err.message)
		if not fallback_on_error:
			raise
		return fallback_message(recipient, err)
	return clean_feedback(anchor_on(message, anchor))


async def request_individual_feedback(
	teacher: Any,
	client: CompletionClient,
	*,
	fallback_on_error: Optional[bool] = None,
) -> str:
	if fallback_on_error is None:
		fallback_on_error = settings.feedback_fallback_individual
	name = (teacher.name or "").strip()
	return await generate_feedback(
		client,
		build_individual_prompt(teacher),
		anchor=f"Dear {name},",
		recipient=name,
		fallback_on_error=fallback_on_error,
	)


async def request_department_feedback(
	department: str,
	teachers: Sequence[Any],
	client: CompletionClient,
	*,
	fallback_on_error: Optional[bool] = None,
) -> str:
	if not teachers:
		raise EmptyInputError()
	if fallback_on_error is None:
		fallback_on_error = settings.feedback_fallback_department
	label = department_anchor(department)
	return await generate_feedback(
		client,
		build_department_prompt(department, teachers),
		anchor=label,
		recipient=label,
		fallback_on_error=fallback_on_error,
	)
