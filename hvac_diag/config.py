import os
from dotenv import load_dotenv # type: ignore

load_dotenv()

GROQ_API_KEY = os.getenv("GROQ_API_KEY")
GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")
GROQ_VISION_MODEL = os.getenv("GROQ_VISION_MODEL", "meta-llama/llama-4-scout-17b-16e-instruct")
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "25"))
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "800"))

HISTORY_BACKEND = os.getenv("HISTORY_BACKEND", "local")
HISTORY_PATH = os.getenv("HISTORY_PATH", "saved_diagnostics.json")
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "50"))
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY")

ZUPER_API_KEY = os.getenv("ZUPER_API_KEY")
ZUPER_REGION = os.getenv("ZUPER_REGION", "us")
FIELD_SERVICE_TIMEOUT_SECONDS = float(os.getenv("FIELD_SERVICE_TIMEOUT_SECONDS", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
