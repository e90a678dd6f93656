from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .constants import ALL_DEPARTMENTS
from .models import Award, DepartmentFeedback, Paper, Teacher, Workshop
from .rating import auto_rating_out_of_10
from .schemas import ProfileCreate, ProfileOut, RatedProfileOut

logger = logging.getLogger(__name__)


# ---- Teachers ----

def create_teacher(db: Session, data: ProfileCreate) -> Teacher:
	teacher = Teacher(
		name=data.name,
		designation=data.designation,
		department=data.department,
		domain=data.domain,
		expected_hours=data.expected_hours,
		hours_taught=data.hours_taught,
		student_feedback=data.student_feedback,
		admin_rating=0,
		final_rating=0,
	)
	teacher.papers = [
		Paper(position=i, title=p.title, journal=p.journal, quartile=p.quartile, year=p.year)
		for i, p in enumerate(data.papers)
	]
	teacher.workshops = [
		Workshop(position=i, title=w.title, conducted_by=w.conducted_by, mode=w.mode)
		for i, w in enumerate(data.workshops)
	]
	teacher.awards = [
		Award(position=i, name=a.name, granted_by=a.granted_by, year=a.year)
		for i, a in enumerate(data.awards)
	]
	db.add(teacher)
	db.commit()
	db.refresh(teacher)
	logger.info("Teacher profile created: %s (%s)", teacher.name, teacher.id)
	return teacher


def get_teacher(db: Session, teacher_id: str) -> Optional[Teacher]:
	return db.get(Teacher, teacher_id)


def list_teachers(db: Session, department: Optional[str] = None) -> List[Teacher]:
	stmt = select(Teacher).order_by(Teacher.created_at, Teacher.id)
	if department and department != ALL_DEPARTMENTS:
		stmt = stmt.where(Teacher.department == department)
	return list(db.scalars(stmt).all())


def teachers_by_department(db: Session, department: str) -> List[Teacher]:
	stmt = select(Teacher).where(Teacher.department == department).order_by(Teacher.created_at, Teacher.id)
	return list(db.scalars(stmt).all())


def update_rating(db: Session, teacher_id: str, admin_rating: float, final_rating: float) -> Optional[Teacher]:
	teacher = db.get(Teacher, teacher_id)
	if teacher is None:
		return None
	# Both ratings land in the same commit; concurrent raters: last write wins
	teacher.admin_rating = admin_rating
	teacher.final_rating = final_rating
	db.commit()
	db.refresh(teacher)
	logger.info("Rating updated for teacher: %s (admin=%s, final=%s)", teacher.name, admin_rating, final_rating)
	return teacher


def delete_teacher(db: Session, teacher_id: str) -> Optional[Teacher]:
	teacher = db.get(Teacher, teacher_id)
	if teacher is None:
		return None
	name = teacher.name
	db.delete(teacher)
	db.commit()
	logger.info("Teacher deleted: %s (%s)", name, teacher_id)
	return teacher


def distinct_departments(db: Session) -> List[str]:
	stmt = select(Teacher.department).distinct().order_by(Teacher.department)
	return list(db.scalars(stmt).all())


def teachers_with_ratings(db: Session, department: Optional[str] = None) -> List[RatedProfileOut]:
	return [
		RatedProfileOut(**ProfileOut.model_validate(t).model_dump(), auto_rating=auto_rating_out_of_10(t))
		for t in list_teachers(db, department)
	]


def department_stats(teachers: List[Teacher], departments: List[str]) -> Dict[str, Dict[str, Any]]:
	"""Per-department totals of papers, workshops, awards and teaching hours plus mean student feedback."""
	stats: Dict[str, Dict[str, Any]] = {}
	for dept in departments:
		members = [t for t in teachers if t.department == dept]
		feedback = sum((t.student_feedback or 0) for t in members) / len(members) if members else 0
		stats[dept] = {
			"papers": sum(len(t.papers) for t in members),
			"workshops": sum(len(t.workshops) for t in members),
			"awards": sum(len(t.awards) for t in members),
			"teaching": sum((t.hours_taught or 0) for t in members),
			"feedback": round(feedback, 2),
		}
	return stats


# ---- Department feedback ----

def save_department_feedback(db: Session, department: str, feedback: str) -> DepartmentFeedback:
	row = db.get(DepartmentFeedback, department)
	if row is None:
		row = DepartmentFeedback(department=department)
		db.add(row)
	row.feedback = feedback
	row.generated_at = datetime.utcnow()
	db.commit()
	db.refresh(row)
	logger.info("Department feedback saved for: %s", department)
	return row


def list_department_feedbacks(db: Session, department: Optional[str] = None) -> List[DepartmentFeedback]:
	stmt = select(DepartmentFeedback).order_by(DepartmentFeedback.department)
	if department:
		stmt = stmt.where(DepartmentFeedback.department == department)
	return list(db.scalars(stmt).all())
