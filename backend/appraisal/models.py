from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Float, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship, validates
from .db import Base
from .constants import DEPARTMENTS, DOMAINS, DEFAULT_EXPECTED_HOURS, DEFAULT_WORKSHOP_MODE
from .errors import ValidationError


def _new_id() -> str:
	return uuid.uuid4().hex


class Teacher(Base):
	__tablename__ = "teachers"
	__table_args__ = (
		CheckConstraint("admin_rating >= 0 AND admin_rating <= 10", name="ck_teachers_admin_rating"),
		CheckConstraint("final_rating >= 0 AND final_rating <= 10", name="ck_teachers_final_rating"),
		CheckConstraint("hours_taught >= 0", name="ck_teachers_hours_taught"),
	)
	id = Column(String(32), primary_key=True, default=_new_id)
	name = Column(String(256), nullable=False)
	designation = Column(String(256), nullable=False)
	department = Column(String(64), nullable=False, index=True)
	domain = Column(String(64), nullable=False)
	expected_hours = Column(Integer, default=DEFAULT_EXPECTED_HOURS, nullable=False)
	hours_taught = Column(Integer, default=0, nullable=False)
	student_feedback = Column(Float, default=0, nullable=False)
	admin_rating = Column(Float, default=0, nullable=False)
	final_rating = Column(Float, default=0, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

	# Sub-records keep entry order through their position column
	papers = relationship("Paper", order_by="Paper.position", cascade="all, delete-orphan", lazy="selectin")
	workshops = relationship("Workshop", order_by="Workshop.position", cascade="all, delete-orphan", lazy="selectin")
	awards = relationship("Award", order_by="Award.position", cascade="all, delete-orphan", lazy="selectin")

	@validates("department")
	def _validate_department(self, key, value):
		if value not in DEPARTMENTS:
			raise ValidationError(f"department must be one of {DEPARTMENTS}")
		return value

	@validates("domain")
	def _validate_domain(self, key, value):
		if value not in DOMAINS:
			raise ValidationError(f"domain must be one of {DOMAINS}")
		return value


class Paper(Base):
	__tablename__ = "papers"
	id = Column(Integer, primary_key=True, autoincrement=True)
	teacher_id = Column(String(32), ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True)
	position = Column(Integer, nullable=False, default=0)
	title = Column(String(512), nullable=False)
	journal = Column(String(512), nullable=False)
	quartile = Column(String(16), default="", nullable=False)
	year = Column(Integer, nullable=True)


class Workshop(Base):
	__tablename__ = "workshops"
	id = Column(Integer, primary_key=True, autoincrement=True)
	teacher_id = Column(String(32), ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True)
	position = Column(Integer, nullable=False, default=0)
	title = Column(String(512), nullable=False)
	conducted_by = Column(String(512), nullable=False)
	mode = Column(String(64), default=DEFAULT_WORKSHOP_MODE, nullable=False)


class Award(Base):
	__tablename__ = "awards"
	id = Column(Integer, primary_key=True, autoincrement=True)
	teacher_id = Column(String(32), ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True)
	position = Column(Integer, nullable=False, default=0)
	name = Column(String(512), nullable=False)
	granted_by = Column(String(512), nullable=False)
	year = Column(Integer, nullable=True)


class DepartmentFeedback(Base):
	__tablename__ = "department_feedback"
	# One current record per department; regeneration replaces it
	department = Column(String(64), primary_key=True)
	feedback = Column(Text, nullable=False)
	generated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
