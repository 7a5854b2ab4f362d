"""Configuration management for DocChat."""
import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Keys
GROQ_API_KEY = os.getenv("GROQ_API_KEY")

# Server Configuration
PORT = int(os.getenv("PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # "text" or "json"

# CORS Configuration
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

# Storage Configuration
DATA_DIR = Path(os.getenv("DATA_DIR", str(Path(__file__).parent / "data")))
UPLOADS_DIR = Path(os.getenv("UPLOADS_DIR", str(DATA_DIR / "uploads")))
DOCUMENTS_FILE = Path(os.getenv("DOCUMENTS_FILE", str(DATA_DIR / "documents.json")))
ALLOWED_EXTENSIONS = (".txt",)

# Model Configuration
LLM_MODEL = os.getenv("LLM_MODEL", "llama-3.1-8b-instant")
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "1024"))

# Chunking Configuration
CHUNK_SIZE = 500  # characters

# Retrieval Configuration
MAX_SOURCES = 3
KEYWORD_MIN_LENGTH = 3  # keywords must be strictly longer than this

# Logging Configuration
if LOG_FORMAT == "json":
    from logger import setup_logging
    setup_logging(LOG_LEVEL)
else:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
