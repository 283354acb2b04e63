# api/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.routes import content, library, orders
from core.config import get_settings
from core.sa.database import get_database
from core.utils.logging import setup_logging

settings = get_settings()

app = FastAPI(title="shelfstream")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Range", "Accept-Ranges", "Content-Length"],
)

register_exception_handlers(app)

app.include_router(content.router)
app.include_router(library.router)
app.include_router(orders.router)


# Initialize logging and database on startup
@app.on_event("startup")
async def startup_event():
    setup_logging(settings.log_level)
    get_database().init_db()


@app.get("/")
async def root():
    return {"message": "shelfstream is running"}
