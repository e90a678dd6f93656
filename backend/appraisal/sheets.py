"""
Google Sheets mirror for submitted publication records.

Each accepted paper becomes one row: name, designation, title, journal,
quartile. A profile without papers still gets one row with blank paper
fields. Rows are appended only after the profile has been committed, and a
failed append is reported to the caller as ``ExternalServiceError``; nothing
is retried or rolled back.
"""

from __future__ import annotations
import logging
from typing import Any, List, Optional

from fastapi.concurrency import run_in_threadpool
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .errors import ExternalServiceError
from .settings import settings

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def sheet_rows_for(teacher: Any) -> List[List[str]]:
	papers = list(teacher.papers or [])
	if not papers:
		return [[teacher.name, teacher.designation, "", "", ""]]
	return [
		[teacher.name, teacher.designation, paper.title, paper.journal, paper.quartile or ""]
		for paper in papers
	]


class SheetsMirror:
	def __init__(
		self,
		spreadsheet_id: Optional[str] = None,
		*,
		credentials_file: Optional[str] = None,
		range_: Optional[str] = None,
		service: Any = None,
	) -> None:
		self.spreadsheet_id = spreadsheet_id if spreadsheet_id is not None else settings.google_sheet_id
		self.credentials_file = credentials_file or settings.google_credentials_file
		self.range = range_ or settings.google_sheet_range
		self._service = service

	@property
	def enabled(self) -> bool:
		return bool(self.spreadsheet_id)

	def _get_service(self):
		if self._service is None:
			credentials = service_account.Credentials.from_service_account_file(self.credentials_file, scopes=SCOPES)
			self._service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
		return self._service

	def append_row(self, values: List[str]) -> None:
		"""Append one row (blocking call)."""
		try:
			response = self._get_service().spreadsheets().values().append(
				spreadsheetId=self.spreadsheet_id,
				range=self.range,
				valueInputOption="USER_ENTERED",
				insertDataOption="INSERT_ROWS",
				body={"values": [values]},
			).execute()
		except HttpError as err:
			status = getattr(err.resp, "status", None)
			raise ExternalServiceError("spreadsheet", f"Sheet append failed: {err}", status=int(status) if status else None) from err
		except (GoogleAuthError, OSError, ValueError) as err:
			# Missing, unreadable or rejected credentials
			raise ExternalServiceError("spreadsheet", f"Sheet append failed: {err}") from err
		logger.debug("Row added to sheet: %s", (response or {}).get("updates", {}).get("updatedRange"))

	async def mirror_profile(self, teacher: Any) -> int:
		"""Append the profile's rows in order; returns how many were written."""
		if not self.enabled:
			logger.warning("GOOGLE_SHEET_ID is not configured; skipping sheet mirror for %s", teacher.name)
			return 0
		rows = sheet_rows_for(teacher)
		for row in rows:
			await run_in_threadpool(self.append_row, row)
		return len(rows)
