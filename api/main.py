import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from core import db, errors, log
from courses import router as courses_router
from grades import router as grades_router
from integrity import router as integrity_router
from lecturers import router as lecturers_router
from students import router as students_router

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip() or DEFAULT_CORS_ORIGINS
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(_: FastAPI):
    log.configure_logging()
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        if db.apply_schema_on_startup():
            await db.ensure_schema()
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="Student Records API", lifespan=lifespan)

# Allow the configured frontends to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

errors.register_exception_handlers(app)

app.include_router(auth_router.router, prefix="/api", tags=["auth"])
app.include_router(courses_router.router, prefix="/api", tags=["courses"])
app.include_router(students_router.router, prefix="/api", tags=["students"])
app.include_router(lecturers_router.router, prefix="/api", tags=["lecturers"])
app.include_router(grades_router.router, prefix="/api", tags=["grades"])
app.include_router(integrity_router.router, prefix="/api", tags=["integrity"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "student-records api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "8000")))
