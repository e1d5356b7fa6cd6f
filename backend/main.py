from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from db.database import create_db_and_tables
from core.config import settings
from core.logging_config import configure_logging
from routers.inventory_engine import router as inventory_engine_router
from contextlib import asynccontextmanager

configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_db_and_tables()
    yield


app = FastAPI(
    title="Inventory Rebalancing API",
    description="API for rebalancing, allocation and recall runs over retail inventory",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Engine invocation and run ledger routes
app.include_router(inventory_engine_router, prefix="/inventory-engine", tags=["inventory-engine"])

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
