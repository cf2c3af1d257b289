import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vaultflow.config import settings
from vaultflow.routers import ipc, notifications, vault

logger = logging.getLogger("vaultflow")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level)
    logger.info("Vault addition service ready on %s", settings.api_prefix)
    yield
    # Shutdown: fail any invocation still waiting on the backend
    from vaultflow.dependencies import ipc_channel
    ipc_channel.close()


app = FastAPI(
    title="vaultflow",
    description="Coordinates adding credential vaults through a privileged backend process",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    # The UI layer runs locally; only local dev origins may call in.
    allow_origins=[
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(vault.router, prefix=settings.api_prefix)
app.include_router(notifications.router, prefix=settings.api_prefix)
app.include_router(ipc.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
