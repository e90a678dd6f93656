from __future__ import annotations
import math
from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import DEFAULT_EXPECTED_HOURS, DEFAULT_WORKSHOP_MODE, DEPARTMENTS, DOMAINS, Messages


def _text(value: Any) -> str:
	if value is None:
		return ""
	return str(value).strip()


def _int_or(value: Any, default: int) -> int:
	try:
		return int(float(str(value).strip()))
	except (TypeError, ValueError, OverflowError):
		return default


def _float_or(value: Any, default: float) -> float:
	try:
		number = float(str(value).strip())
	except (TypeError, ValueError):
		return default
	# "nan" and "inf" parse but are not usable scores
	return number if math.isfinite(number) else default


# ============================================================================
# PROFILE INTAKE
# ============================================================================

class PaperIn(BaseModel):
	title: str = ""
	journal: str = ""
	quartile: str = ""
	year: int = Field(default_factory=lambda: date.today().year)

	@field_validator("title", "journal", "quartile", mode="before")
	@classmethod
	def _strip(cls, v):
		return _text(v)

	@field_validator("year", mode="before")
	@classmethod
	def _year(cls, v):
		return _int_or(v, date.today().year)

	@property
	def is_complete(self) -> bool:
		return bool(self.title and self.journal)


class WorkshopIn(BaseModel):
	title: str = ""
	conducted_by: str = ""
	mode: str = DEFAULT_WORKSHOP_MODE

	@field_validator("title", "conducted_by", mode="before")
	@classmethod
	def _strip(cls, v):
		return _text(v)

	@field_validator("mode", mode="before")
	@classmethod
	def _mode(cls, v):
		return _text(v) or DEFAULT_WORKSHOP_MODE

	@property
	def is_complete(self) -> bool:
		return bool(self.title and self.conducted_by)


class AwardIn(BaseModel):
	name: str = ""
	granted_by: str = ""
	year: int = Field(default_factory=lambda: date.today().year)

	@field_validator("name", "granted_by", mode="before")
	@classmethod
	def _strip(cls, v):
		return _text(v)

	@field_validator("year", mode="before")
	@classmethod
	def _year(cls, v):
		return _int_or(v, date.today().year)

	@property
	def is_complete(self) -> bool:
		return bool(self.name and self.granted_by)


class ProfileCreate(BaseModel):
	"""
	Profile submission with sub-records already grouped per entry.

	Entries missing their title/name or their required companion field
	(journal, conducted_by, granted_by) are dropped; order is preserved.
	"""
	name: str
	designation: str
	department: str
	domain: str
	expected_hours: int = DEFAULT_EXPECTED_HOURS
	hours_taught: int = 0
	student_feedback: float = 0
	papers: List[PaperIn] = Field(default_factory=list)
	workshops: List[WorkshopIn] = Field(default_factory=list)
	awards: List[AwardIn] = Field(default_factory=list)

	@field_validator("name", "designation", "department", "domain", mode="before")
	@classmethod
	def _strip(cls, v):
		return _text(v)

	@field_validator("expected_hours", mode="before")
	@classmethod
	def _expected_hours(cls, v):
		return _int_or(v, DEFAULT_EXPECTED_HOURS)

	@field_validator("hours_taught", mode="before")
	@classmethod
	def _hours_taught(cls, v):
		return _int_or(v, 0)

	@field_validator("student_feedback", mode="before")
	@classmethod
	def _student_feedback(cls, v):
		return _float_or(v, 0.0)

	@field_validator("expected_hours", "hours_taught", "student_feedback")
	@classmethod
	def _non_negative(cls, v, info):
		if v < 0:
			raise ValueError(f"{info.field_name} must not be negative")
		return v

	@field_validator("papers", "workshops", "awards", mode="before")
	@classmethod
	def _none_as_empty(cls, v):
		return v or []

	@model_validator(mode="after")
	def _check(self):
		if not (self.name and self.designation and self.department and self.domain):
			raise ValueError(Messages.REQUIRED_FIELDS)
		if len(self.name) < 2:
			raise ValueError("Name must be at least 2 characters long")
		if self.department not in DEPARTMENTS:
			raise ValueError(f"department must be one of {DEPARTMENTS}")
		if self.domain not in DOMAINS:
			raise ValueError(f"domain must be one of {DOMAINS}")
		self.papers = [p for p in self.papers if p.is_complete]
		self.workshops = [w for w in self.workshops if w.is_complete]
		self.awards = [a for a in self.awards if a.is_complete]
		return self


class RateRequest(BaseModel):
	admin_rating: float

	@field_validator("admin_rating", mode="before")
	@classmethod
	def _parse(cls, v):
		if v is None or (isinstance(v, str) and not v.strip()):
			raise ValueError("Admin rating is required")
		return v

	@field_validator("admin_rating")
	@classmethod
	def _range(cls, v):
		if not (0 <= v <= 10):
			raise ValueError(Messages.INVALID_RATING)
		return v


# ============================================================================
# RESPONSES
# ============================================================================

class PaperOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)
	title: str
	journal: str
	quartile: str
	year: Optional[int] = None


class WorkshopOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)
	title: str
	conducted_by: str
	mode: str


class AwardOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)
	name: str
	granted_by: str
	year: Optional[int] = None


class ProfileOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)
	id: str
	name: str
	designation: str
	department: str
	domain: str
	expected_hours: int
	hours_taught: int
	student_feedback: float
	admin_rating: float
	final_rating: float
	papers: List[PaperOut]
	workshops: List[WorkshopOut]
	awards: List[AwardOut]


class RatedProfileOut(ProfileOut):
	auto_rating: float


class ProfileDetailOut(RatedProfileOut):
	feedback: str


class DepartmentFeedbackOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)
	department: str
	feedback: str
	generated_at: datetime
