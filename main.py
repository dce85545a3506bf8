import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from routers import browse
from utils.case_studies.client import create_case_study_client
from utils.case_studies.store import RecordStore
from utils.dependencies import SessionRegistry

logger = logging.getLogger("uvicorn.error")
logger.setLevel(logging.DEBUG)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The case-study list is fetched once per process
    client = create_case_study_client()
    store = RecordStore()
    await store.populate(client)
    app.state.case_study_client = client
    app.state.record_store = store
    app.state.browse_sessions = SessionRegistry()
    yield
    await client.aclose()


# Initialize the FastAPI app
app: FastAPI = FastAPI(lifespan=lifespan)


# --- Include Routers ---


app.include_router(browse.router)


# --- Exception Handling Middlewares ---


# Handle RequestValidationError by returning field-level messages
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = {}

    # Map error types to user-friendly message templates
    error_templates = {
        "missing": "this field is required",
        "enum": "invalid value",
        "int_parsing": "must be a whole number",
    }

    for error in exc.errors():
        location = error["loc"]

        # Skip type errors for the whole body
        if len(location) == 1 and location[0] == "body":
            continue

        field_name = str(location[-1])
        display_name = field_name.replace("_", " ").title()

        error_type = error.get("type", "")
        errors[display_name] = error_templates.get(error_type, error["msg"])

    return JSONResponse(
        {"status_code": 422, "detail": errors},
        status_code=422,
    )


# Handle StarletteHTTPException (including 404, 405, etc.)
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"status_code": exc.status_code, "detail": exc.detail},
        status_code=exc.status_code,
    )


# Add handler for uncaught exceptions (500 Internal Server Error)
@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    # Log the error for debugging
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        {"status_code": 500, "detail": "Internal Server Error"},
        status_code=500,
    )


# --- Home Page ---


@app.get("/")
async def read_home():
    return RedirectResponse(
        url=app.url_path_for("read_case_studies"), status_code=status.HTTP_302_FOUND
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
