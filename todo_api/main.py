import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from todo_api import config
from todo_api.database import Base, engine, check_connection
from todo_api.errors import TodoAPIError
from todo_api.models.task import Task  # noqa: F401  (registers the table)
from todo_api.models.user import User  # noqa: F401
from todo_api.routers import auth, health, todos

logger = logging.getLogger(__name__)


def configure_logging():
	# basicConfig is a no-op when the root logger already has handlers
	logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")


@asynccontextmanager
async def lifespan(app: FastAPI):
	# Any failure here aborts startup: there is no degraded mode without the store
	missing = config.missing_settings()
	if missing:
		raise RuntimeError(f"missing required settings: {', '.join(missing)}")
	check_connection()
	logger.info("connected to database %s", engine.url.render_as_string(hide_password=True))
	Base.metadata.create_all(bind=engine)
	yield


configure_logging()

app = FastAPI(title="Todo API", lifespan=lifespan)

app.add_middleware(
	CORSMiddleware,
	allow_origins=config.CORS_ORIGINS,
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(todos.router)


@app.exception_handler(TodoAPIError)
async def todo_api_error_handler(request: Request, exc: TodoAPIError):
	return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Malformed bodies are client errors like any other validation failure
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
	return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


# Generic error handler to return JSON errors for unexpected exceptions
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
	logger.exception("unhandled error on %s %s", request.method, request.url.path)
	return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def run():
	uvicorn.run(app, host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
	run()
