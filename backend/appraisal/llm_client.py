from __future__ import annotations
import httpx
from typing import Any, Dict, Optional
from .errors import CompletionAuthError, ExternalServiceError
from .settings import settings

class CompletionClient:
	"""Thin client for an OpenAI-compatible chat completions endpoint (Groq by default)."""

	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
		timeout: Optional[float] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.api_key = api_key if api_key is not None else settings.groq_api_key
		self.model = model or settings.groq_model
		self.base_url = base_url or settings.groq_base_url
		self.timeout = timeout if timeout is not None else settings.feedback_timeout_seconds
		self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

	async def complete(
		self,
		prompt: str,
		*,
		system: str,
		temperature: Optional[float] = None,
		max_tokens: Optional[int] = None,
	) -> str:
		# A missing key would be rejected upstream anyway; fail the same way without the round trip
		if not self.api_key:
			raise CompletionAuthError("GROQ_API_KEY is not configured", status=None)
		payload: Dict[str, Any] = {
			"model": self.model,
			"messages": [
				{"role": "system", "content": system},
				{"role": "user", "content": prompt},
			],
			"temperature": settings.feedback_temperature if temperature is None else temperature,
			"max_tokens": settings.feedback_max_tokens if max_tokens is None else max_tokens,
		}
		headers = {
			"Authorization": f"Bearer {self.api_key}",
			"Content-Type": "application/json",
		}
		try:
			r = await self._client.post(self.base_url, headers=headers, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			raise self._status_error(http_err.response) from http_err
		except (httpx.RequestError, httpx.InvalidURL) as net_err:
			raise ExternalServiceError("completion", f"Completion request failed: {net_err}") from net_err
		try:
			data = r.json()
			content = data["choices"][0]["message"]["content"]
		except Exception as err:
			raise ExternalServiceError("completion", f"Unexpected completion response: {r.text[:500]}", status=r.status_code) from err
		if not isinstance(content, str):
			raise ExternalServiceError("completion", f"Completion returned no text: {r.text[:500]}", status=r.status_code)
		return content

	@staticmethod
	def _status_error(response: httpx.Response) -> ExternalServiceError:
		message = None
		code = None
		try:
			error = response.json().get("error") or {}
			message = error.get("message")
			code = error.get("code")
		except Exception:
			pass
		message = message or f"Completion request failed with status {response.status_code}"
		if response.status_code == 401 or code == "invalid_api_key":
			return CompletionAuthError(message, status=response.status_code)
		return ExternalServiceError("completion", message, status=response.status_code)

	async def aclose(self) -> None:
		await self._client.aclose()
