import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from .db import init_db
from .constants import Messages
from .errors import AppError
from .settings import settings
from .routers import health
from .routers import profiles
from .routers import admin
from .routers import departments

logging.basicConfig(
	level=getattr(logging, settings.log_level.upper(), logging.INFO),
	format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("appraisal")

app = FastAPI(title="Faculty Appraisal API")
app.include_router(health.router)
app.include_router(profiles.router)
app.include_router(admin.router)
app.include_router(departments.router)


@app.get("/", include_in_schema=False)
async def redirect_root_to_dashboard():
	return RedirectResponse(url="/admin/profiles")


@app.middleware("http")
async def log_requests(request: Request, call_next):
	logger.debug("%s %s", request.method, request.url.path)
	return await call_next(request)


# ---- Error payloads: {"success": false, "message": ...} ----

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
	if exc.status_code >= 500:
		logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
	return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})


def _validation_message(exc: RequestValidationError) -> str:
	errors = exc.errors()
	if not errors:
		return Messages.REQUIRED_FIELDS
	first = errors[0]
	msg = str(first.get("msg", ""))
	# pydantic prefixes messages raised from our own validators
	if msg.startswith("Value error, "):
		return msg[len("Value error, "):]
	loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
	return f"{loc}: {msg}" if loc else msg


def _error_list(exc: RequestValidationError):
	return [{"loc": list(e.get("loc", ())), "msg": str(e.get("msg", ""))} for e in exc.errors()]


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
	return JSONResponse(
		status_code=400,
		content={"success": False, "message": _validation_message(exc), "errors": _error_list(exc)},
	)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
	logger.exception("Unhandled error on %s %s", request.method, request.url.path)
	content = {"success": False, "message": Messages.SERVER_ERROR}
	if settings.is_development:
		content["error"] = f"{type(exc).__name__}: {exc}"
		content["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
	return JSONResponse(status_code=500, content=content)


@app.on_event("startup")
async def startup_event():
	# Initialize DB schema
	init_db()
