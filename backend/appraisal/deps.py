from __future__ import annotations
from typing import AsyncIterator

from .llm_client import CompletionClient
from .sheets import SheetsMirror


async def get_completion_client() -> AsyncIterator[CompletionClient]:
	client = CompletionClient()
	try:
		yield client
	finally:
		await client.aclose()


def get_sheets_mirror() -> SheetsMirror:
	return SheetsMirror()
