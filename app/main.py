import logging

from fastapi import FastAPI

from app.api.v1.budget import router as budget_router
from app.api.v1.planning import router as planning_router
from app.api.v1.sessions import router as sessions_router
from app.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("thread_id", "state", "event_type", "category", "reason", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Plannerly", version="1.0.0")

app.include_router(sessions_router, prefix="/api/v1", tags=["chat"])
app.include_router(budget_router, prefix="/api/v1/budget", tags=["budget"])
app.include_router(planning_router, prefix="/api/v1", tags=["planning"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
