from __future__ import annotations

from fastapi import FastAPI

from .routes.branch import router as branch_router
from .routes.people import router as people_router

app = FastAPI(title="Nasab Tree API", version="0.1.0")

app.include_router(people_router)
app.include_router(branch_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"ok": "true"}
