import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.cors import CORSMiddleware

from config import get_settings
from api.router import api_router
from web.pages import STATIC_DIR, router as pages_router

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)

app = FastAPI(title="Dinner Planner", version="1.0.0")

# the browser only talks to us same-origin; keep cross-origin callers out of prod
app.add_middleware(
    CORSMiddleware,
    allow_origins=[] if settings.is_production else ["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")
app.include_router(pages_router, tags=["Pages"])
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=5000)
