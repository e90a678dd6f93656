"""
Application error types.

Every error raised on purpose inside the service derives from ``AppError`` and
carries the HTTP status the API layer should answer with. The handlers in
``main.py`` turn them into ``{"success": false, "message": ...}`` payloads.
"""

from __future__ import annotations
from typing import Optional

from .constants import Messages


class AppError(Exception):
	status_code: int = 500

	def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
		super().__init__(message)
		self.message = message
		if status_code is not None:
			self.status_code = status_code


class ValidationError(AppError):
	status_code = 400


class NotFoundError(AppError):
	status_code = 404


class EmptyInputError(NotFoundError):
	"""Raised when an aggregate operation is given nothing to aggregate."""

	def __init__(self, message: str = Messages.NO_TEACHERS) -> None:
		super().__init__(message)


class ExternalServiceError(AppError):
	status_code = 502

	def __init__(self, service: str, message: str, *, status: Optional[int] = None) -> None:
		super().__init__(message)
		self.service = service
		# Upstream HTTP status when the failure came with a response
		self.status = status


class CompletionAuthError(ExternalServiceError):
	"""The completion provider rejected our credentials (or none are configured)."""

	def __init__(self, message: str, *, status: Optional[int] = 401) -> None:
		super().__init__("completion", message, status=status)
