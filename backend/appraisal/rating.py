"""
Performance rating arithmetic.

The auto score (0-100) is a weighted sum of five factors, each normalized
against a fixed threshold and capped at full marks. The final rating (0-10)
blends the rescaled auto score with the administrator's rating.
"""

from __future__ import annotations
import math
from collections.abc import Mapping
from typing import Any

from .constants import (
	ADMIN_RATING_WEIGHT,
	AUTO_RATING_WEIGHT,
	MAX_RATING,
	MIN_RATING,
	RATING_WEIGHTS,
	SCORE_THRESHOLDS,
)


def _get(profile: Any, name: str) -> Any:
	if isinstance(profile, Mapping):
		return profile.get(name)
	return getattr(profile, name, None)


def _count(profile: Any, name: str) -> float:
	value = _get(profile, name)
	if value is None:
		return 0
	if isinstance(value, (int, float)):
		return value
	if isinstance(value, str):
		# mapping inputs may carry raw form values such as "50"
		try:
			return float(value)
		except ValueError:
			return 0
	return len(value)


def _factor(value: float, factor: str) -> float:
	if not math.isfinite(value):
		return 0.0
	return max(0.0, min(value / SCORE_THRESHOLDS[factor], 1.0)) * 100


def compute_auto_score(profile: Any) -> float:
	"""Return the 0-100 auto score for a profile (ORM row or mapping)."""
	research = _factor(_count(profile, "papers"), "research_papers")
	teaching = _factor(_count(profile, "hours_taught"), "teaching_hours")
	feedback = _factor(_count(profile, "student_feedback"), "student_feedback")
	workshops = _factor(_count(profile, "workshops"), "workshops")
	awards = _factor(_count(profile, "awards"), "awards")
	return (
		research * RATING_WEIGHTS["research_papers"]
		+ teaching * RATING_WEIGHTS["teaching_hours"]
		+ feedback * RATING_WEIGHTS["student_feedback"]
		+ workshops * RATING_WEIGHTS["workshops"]
		+ awards * RATING_WEIGHTS["awards"]
	)


def combine_ratings(auto_score: float, admin_rating: float) -> float:
	# admin_rating is validated to [0, 10] by the caller
	final = (auto_score / 10) * AUTO_RATING_WEIGHT + admin_rating * ADMIN_RATING_WEIGHT
	return round(final, 2)


def auto_rating_out_of_10(profile: Any) -> float:
	return round(compute_auto_score(profile) / 10, 2)


def is_valid_rating(value: Any) -> bool:
	try:
		rating = float(value)
	except (TypeError, ValueError):
		return False
	return math.isfinite(rating) and MIN_RATING <= rating <= MAX_RATING
