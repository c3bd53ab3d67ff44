import os
from dotenv import load_dotenv

# switch environments with the "TEAMHUB_ENV" variable (.env.dev, .env.test, ...)
TEAMHUB_ENV = os.getenv("TEAMHUB_ENV", "dev")
load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), "..", f".env.{TEAMHUB_ENV}"))

# --- database ----------------------------------------------------------------
MONGO_URI = os.getenv("MONGO_URI", "mongodb://mongo:27017")
MONGO_DB = os.getenv("MONGO_DB", "teamhub_dev")

# --- tokens & sessions -------------------------------------------------------
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
ALGORITHM = os.getenv("JWT_ALG", "HS256")
ACCESS_TOKEN_EXPIRE_MIN = int(os.getenv("ACCESS_TOKEN_EXPIRE_MIN", "15"))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))
RESET_TOKEN_EXPIRE_MIN = int(os.getenv("RESET_TOKEN_EXPIRE_MIN", "60"))

SESSION_SECRET_KEY = os.getenv("SESSION_SECRET_KEY", "dev-session-secret")
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(7 * 24 * 60 * 60)))
COOKIE_SECURE = os.getenv("COOKIE_SECURE", "false").lower() == "true"  # true in production (HTTPS)

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# --- http --------------------------------------------------------------------
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- organization quotas applied on creation ---------------------------------
DEFAULT_TEAMS_LIMIT = int(os.getenv("DEFAULT_TEAMS_LIMIT", "10"))
DEFAULT_TRAINERS_LIMIT = int(os.getenv("DEFAULT_TRAINERS_LIMIT", "50"))
DEFAULT_ATHLETES_LIMIT = int(os.getenv("DEFAULT_ATHLETES_LIMIT", "500"))
DEFAULT_TESTINGS_LIMIT = int(os.getenv("DEFAULT_TESTINGS_LIMIT", "5000"))
