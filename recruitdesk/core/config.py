import os

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL")
AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES", "0") == "1"
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0") == "1"

# ✅ Security
JWT_SECRET = os.getenv("JWT_SECRET")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
# Operator sessions are fixed at one hour, no refresh.
ACCESS_TOKEN_EXPIRE_MINUTES = 60
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# ✅ Ingestion bot
API_KEY = os.getenv("API_KEY")

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")
REQUEST_LOG_ENABLED = os.getenv("REQUEST_LOG_ENABLED", "1") == "1"

# ✅ Rate limits (requests per window, per client IP)
BOT_RATE_LIMIT = int(os.getenv("BOT_RATE_LIMIT", "20"))
USER_RATE_LIMIT = int(os.getenv("USER_RATE_LIMIT", "100"))
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", str(15 * 60)))

# ✅ CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if origin.strip()
]
