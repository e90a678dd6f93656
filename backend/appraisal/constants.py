"""Fixed domain values: enumerations, rating weights and response messages."""

from typing import Dict, List

DEPARTMENTS: List[str] = ["SOC", "SOE", "ISBJ", "MITCOM", "VEDIC-SCIENCE", "CIVIL SERVICE", "DESIGN", "Core"]

DOMAINS: List[str] = ["AIA", "Cybersecurity", "Big Data", "AIEC", "Cloud Computing", "Core"]

# Dashboard filter value meaning "no department filter"
ALL_DEPARTMENTS = "ALL"

# Weight of each factor in the 0-100 auto score (sums to 1.0)
RATING_WEIGHTS: Dict[str, float] = {
	"research_papers": 0.3,
	"teaching_hours": 0.2,
	"student_feedback": 0.3,
	"workshops": 0.1,
	"awards": 0.1,
}

# Raw value at which a factor earns full marks
SCORE_THRESHOLDS: Dict[str, float] = {
	"research_papers": 5,
	"teaching_hours": 100,
	"student_feedback": 8,
	"workshops": 3,
	"awards": 2,
}

AUTO_RATING_WEIGHT = 0.7
ADMIN_RATING_WEIGHT = 0.3
MIN_RATING = 0.0
MAX_RATING = 10.0

DEFAULT_EXPECTED_HOURS = 20
DEFAULT_WORKSHOP_MODE = "Online"

TOP_KEYWORDS_LIMIT = 5


class Messages:
	PROFILE_CREATED = "Faculty profile created successfully"
	PROFILE_DELETED = "Faculty profile deleted successfully"
	RATING_SAVED = "Rating saved successfully"
	FEEDBACK_GENERATED = "Feedback generated successfully"

	PROFILE_NOT_FOUND = "Faculty profile not found"
	INVALID_RATING = "Rating must be between 0 and 10"
	REQUIRED_FIELDS = "Name, designation, department, and domain are required"
	INVALID_ID = "Invalid ID format"
	SERVER_ERROR = "Internal server error"
	NO_TEACHERS = "No teachers found in this department"
	FEEDBACK_GENERATION_FAILED = "Failed to generate feedback"
	SHEET_APPEND_FAILED = "Profile saved, but mirroring to the spreadsheet failed"
