import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from routewise.middleware.error_handler import error_handler_middleware, setup_error_handlers
from routewise.middleware.request_id import RequestIDMiddleware
from routewise.routers import agent_router, geocode_router

logger = logging.getLogger("routewise.main")

app = FastAPI(
    title="RouteWise API",
    description="Geocoding and ride preparation API for the RouteWise frontend",
    version="0.1.0",
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its status and duration."""
    start_time = time.time()
    path = request.url.path
    method = request.method

    logger.info(f"🔔 {method} {path}")

    response = await call_next(request)

    process_time = time.time() - start_time
    status_code = response.status_code

    if status_code < 400:
        status_str = f"✅ {status_code}"
    elif status_code < 500:
        status_str = f"⚠️ {status_code}"
    else:
        status_str = f"❌ {status_code}"

    logger.info(f"🏁 {method} {path} - {status_str} - {process_time:.3f}s")
    return response


# Registered after log_requests so it wraps it and catches everything below
app.middleware("http")(error_handler_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestIDMiddleware)

setup_error_handlers(app)

app.include_router(geocode_router.router)
app.include_router(agent_router.router)


@app.get("/")
async def root():
    return {"message": "Welcome to the RouteWise API"}


@app.get("/health")
async def health_check():
    return {"status": "ok"}
