from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from dotenv import load_dotenv
import os
import logging
from models.analysis_models import AnalysisMode
from models.usage import MODEL_PRICING, DEFAULT_MODEL
from services.transcript_library import TranscriptLibrary
from routers import analysis, files, results, transcripts

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Validate required environment variables
REQUIRED_ENV_VARS = ["OPENAI_API_KEY"]

def validate_environment():
    """Check required environment variables and log the configuration.

    Missing variables do not stop the app: pre-loaded files, transcript
    preparation and export keep working, and the analysis endpoints report
    HTTP 500 until the key is configured.
    """
    missing = [var for var in REQUIRED_ENV_VARS if not os.getenv(var)]
    if missing:
        logger.warning("=" * 60)
        logger.warning(f"Missing required environment variables: {missing}")
        logger.warning("Analysis endpoints will fail until they are set")
        logger.warning("=" * 60)
    else:
        logger.info("Environment validation passed")

    library = TranscriptLibrary()
    logger.info(f"  Default model: {os.getenv('OPENAI_MODEL', DEFAULT_MODEL)}")
    logger.info(f"  Transcripts directory: {library.directory}")
    logger.info(f"  Pre-loaded transcripts: {len(library.list_files())}")

@asynccontextmanager
async def lifespan(app: FastAPI):
    validate_environment()
    yield

app = FastAPI(title="Transcript Requirements Service", lifespan=lifespan)

# Include routers
app.include_router(analysis.router)
app.include_router(results.router)
app.include_router(files.router)
app.include_router(transcripts.router)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Invalid bodies are client errors (400), not 422
    logger.warning(f"Invalid request rejected: path={request.url.path}, errors={len(exc.errors())}")
    messages = [error.get("msg", "Invalid request") for error in exc.errors()]
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages)})

@app.get("/", response_class=HTMLResponse)
def get(request: Request):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "files": TranscriptLibrary().list_files(),
            "modes": [mode.value for mode in AnalysisMode],
            "models": list(MODEL_PRICING),
            "default_model": os.getenv("OPENAI_MODEL", DEFAULT_MODEL),
        },
    )

@app.get("/health")
def health():
    return {"status": "ok"}
