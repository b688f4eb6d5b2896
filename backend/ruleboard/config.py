import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parents[2]

OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "qwen3-vl:8b")

DATA_DIR = Path(os.getenv("RULEBOARD_DATA_DIR", str(PROJECT_ROOT / "data")))
MANIFEST_PATH = Path(os.getenv("RULEBOARD_MANIFEST", str(PROJECT_ROOT / "pyproject.toml")))

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR / 'ruleboard.db'}")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
