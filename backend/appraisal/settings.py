from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	# Runtime environment; "development" exposes diagnostics in error payloads
	environment: str = Field(default="development", validation_alias="ENVIRONMENT")
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	# Completion provider (Groq, OpenAI-compatible chat completions)
	groq_api_key: str | None = Field(default=None, validation_alias="GROQ_API_KEY")
	groq_model: str = Field(default="llama-3.3-70b-versatile", validation_alias="GROQ_MODEL")
	groq_base_url: str = Field(default="https://api.groq.com/openai/v1/chat/completions", validation_alias="GROQ_BASE_URL")
	feedback_timeout_seconds: float = Field(default=60.0, validation_alias="FEEDBACK_TIMEOUT_SECONDS")
	feedback_temperature: float = Field(default=0.7, validation_alias="FEEDBACK_TEMPERATURE")
	feedback_max_tokens: int = Field(default=2048, validation_alias="FEEDBACK_MAX_TOKENS")
	# Whether a failed completion degrades to canned text (True) or fails the request
	feedback_fallback_individual: bool = Field(default=True, validation_alias="FEEDBACK_FALLBACK_INDIVIDUAL")
	feedback_fallback_department: bool = Field(default=False, validation_alias="FEEDBACK_FALLBACK_DEPARTMENT")

	# Google Sheets mirror; disabled when no sheet id is set
	google_sheet_id: str | None = Field(default=None, validation_alias="GOOGLE_SHEET_ID")
	google_credentials_file: str = Field(default="google-credentials.json", validation_alias="GOOGLE_CREDENTIALS_FILE")
	google_sheet_range: str = Field(default="Sheet1!A1", validation_alias="GOOGLE_SHEET_RANGE")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	@property
	def is_development(self) -> bool:
		return self.environment.lower() == "development"

settings = Settings()
