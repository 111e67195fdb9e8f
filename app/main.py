from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.core.exceptions import TripPlannerError
from app.core.init_db import init_db
from app.core.logger import logger
from app.routes import api_router
from app.core.redis_lifecyle import init_redis_client, close_redis

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.PROJECT_DESCRIPTION,
    openapi_url=f"/openapi.json"
)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r"^(http:\/\/localhost(:\d{1,5})?|http:\/\/127\.0\.0\.1(:\d{1,5})?)$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TripPlannerError)
async def trip_planner_error_handler(request: Request, exc: TripPlannerError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.error}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    missing = [
        ".".join(str(part) for part in err["loc"] if part != "body")
        for err in errors if err.get("type") == "missing"
    ]
    first = errors[0]["msg"] if errors else "Invalid request"
    content = {"error": "validation_error", "message": first}
    if missing:
        content["missing_fields"] = missing
    return JSONResponse(status_code=400, content=content)


# Include all API routes
app.include_router(api_router)

@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

@app.on_event("startup")
async def startup_event():
    await init_db()
    try:
        await init_redis_client()
    except Exception as exc:
        logger.warning(f"Redis unavailable, distance lookups will not be cached: {exc}")

@app.on_event("shutdown")
async def shutdown_event():
    await close_redis()
