"""Bullet extraction from generated department feedback and frequency ranking."""

from __future__ import annotations
import re
from collections import Counter
from typing import Iterable, List, NamedTuple

from .constants import TOP_KEYWORDS_LIMIT

_BULLET_LINES = r"((?:[ \t]*[-*•][ \t]+\S.*(?:\n|$))+)"
_STRENGTHS_RE = re.compile(r"Key Strengths:\s*" + _BULLET_LINES, re.IGNORECASE)
_IMPROVEMENTS_RE = re.compile(r"Areas of Improvement:\s*" + _BULLET_LINES, re.IGNORECASE)
_BULLET_MARKER_RE = re.compile(r"^\s*[-*•]\s*")


class LabeledBullets(NamedTuple):
	strengths: List[str]
	improvements: List[str]


def _bullets(pattern: re.Pattern, text: str) -> List[str]:
	match = pattern.search(text)
	if not match:
		return []
	items: List[str] = []
	for line in match.group(1).splitlines():
		item = _BULLET_MARKER_RE.sub("", line).strip()
		if item:
			items.append(item)
	return items


def extract_labeled_bullets(text: str) -> LabeledBullets:
	"""
	Pull the bullet items under "Key Strengths:" and "Areas of Improvement:".

	A section runs until the first line that is not a bullet. Missing headings
	yield empty lists.
	"""
	text = (text or "").replace("\r\n", "\n")
	return LabeledBullets(
		strengths=_bullets(_STRENGTHS_RE, text),
		improvements=_bullets(_IMPROVEMENTS_RE, text),
	)


def rank_by_frequency(items: Iterable[str], limit: int = TOP_KEYWORDS_LIMIT) -> List[str]:
	counts: Counter = Counter()
	for item in items:
		key = item.strip()
		if key:
			counts[key] += 1
	# Counter keeps first-seen order and sorted() is stable, so ties stay in that order
	ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
	return [word for word, _ in ranked[:max(limit, 0)]]
