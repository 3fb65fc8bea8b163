from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mappr.core.config import APP_NAME, APP_VERSION, CORS_ORIGINS, SERVER_HOST, SERVER_PORT
from mappr.db.database import close_database_connection, init_indexes, test_connection
from mappr.router.auth import router as auth_router
from mappr.router.category import router as category_router
from mappr.router.collaborator import router as collaborator_router
from mappr.router.github import router as github_router
from mappr.router.list_item import router as list_router
from mappr.router.pin import router as pin_router
from mappr.router.places import router as places_router
from mappr.router.system import router as system_router
from mappr.router.trip import router as trip_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    print("🚀 Starting up Mappr API...")
    if await test_connection():
        await init_indexes()
    yield
    print("🛑 Shutting down Mappr API...")
    await close_database_connection()


app = FastAPI(title=APP_NAME, version=APP_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(system_router)
app.include_router(auth_router)
app.include_router(trip_router)
app.include_router(pin_router)
app.include_router(category_router)
app.include_router(collaborator_router)
app.include_router(list_router)
app.include_router(places_router)
app.include_router(github_router)


def run():
    import uvicorn

    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)


if __name__ == "__main__":
    run()
