"""
FastAPI main application
Multiple-choice quiz server

Routers in quizapp/api/:
- health.py: Health check
- quiz.py: Public quiz (questions without answers, submission scoring)
- admin.py: Question CRUD and statistics

All routers access shared state via the quizapp.state module.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from quizapp import state
from quizapp.config import load_config
from quizapp.db.seed import seed_database
from quizapp.db.store import QuestionStore
from quizapp.version import __version__

# Import all API routers
from quizapp.api import health, quiz, admin


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Config is read at import so the middleware below can use it
state.CONFIG = load_config()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup: open the question store
    try:
        logging.getLogger().setLevel(state.CONFIG.log_level.upper())
        state.STORE = QuestionStore(state.CONFIG.database_path)
        if state.CONFIG.seed_on_startup:
            seed_database(state.STORE)
        logger.info(
            f"✅ Server started with {state.STORE.get_question_count()} questions "
            f"from {state.CONFIG.database_path}"
        )
    except Exception as e:
        logger.error(f"❌ Failed to open question store: {e}")
        if state.STORE is not None:
            state.STORE.close()
            state.STORE = None
        raise

    yield

    # Shutdown
    if state.STORE is not None:
        state.STORE.close()
        state.STORE = None
    logger.info("🛑 Server shutting down")


# Create FastAPI app
app = FastAPI(
    title="Quiz Server",
    description="Timed multiple-choice quiz with an admin question bank",
    version=__version__,
    lifespan=lifespan
)

# CORS middleware (origins from config, all by default)
app.add_middleware(
    CORSMiddleware,
    allow_origins=state.CONFIG.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== INCLUDE ROUTERS ====================

# Health check (GET /)
app.include_router(health.router)

# Public quiz endpoints (GET /api/quiz/questions, POST /api/quiz/submit)
app.include_router(quiz.router)

# Admin endpoints (/api/admin/questions, /api/admin/stats)
app.include_router(admin.router)


# ==================== RUN SERVER ====================

def run():
    """Entry point for the quiz-server command"""
    import uvicorn
    config = state.CONFIG
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    run()
