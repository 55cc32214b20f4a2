from __future__ import annotations

from fastapi import FastAPI

from api.actions import check, config, health

app = FastAPI(title="prosemap API")

app.include_router(health.router)
app.include_router(config.router)
app.include_router(check.router)
