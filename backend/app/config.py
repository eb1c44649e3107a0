import os
from dotenv import load_dotenv

# Load .env before anything reads the environment
load_dotenv()

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./annotations.db")
DATABASE_SSLMODE = os.getenv("DATABASE_SSLMODE", "require")

# Supabase (used only to verify access tokens)
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY")

# Comma separated list, e.g. "http://localhost:5173,https://annothem.onrender.com"
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
