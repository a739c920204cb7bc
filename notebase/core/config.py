from os import getenv

class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "sqlite:///./notebase.db")
    AI_BASE_URL = getenv("AI_BASE_URL", "http://localhost:11434")
    AI_MODEL = getenv("AI_MODEL", "mistral:7b")
    AI_TIMEOUT = float(getenv("AI_TIMEOUT", "30"))  # secondes, jamais illimité
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")
    SEED_DEMO_DATA = getenv("SEED_DEMO_DATA", "1").strip().lower() in ("1", "true", "yes")

settings = Settings()
