import os
from dotenv import load_dotenv

def load_env():
    if os.getenv("ENVIRONMENT") == "production":
        return

    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    env_path = os.path.join(base_dir, ".env")

    if os.path.exists(env_path):
        load_dotenv(env_path)

# Load env now
load_env()

# Spotify (client credentials, server side only)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET")
SPOTIFY_TOKEN_URL = os.getenv("SPOTIFY_TOKEN_URL", "https://accounts.spotify.com/api/token")
SPOTIFY_API_BASE = os.getenv("SPOTIFY_API_BASE", "https://api.spotify.com/v1")

# Tokens are dropped this many seconds before Spotify says they expire
TOKEN_EXPIRY_MARGIN_SECONDS = 300

# Server
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
PORT = int(os.getenv("PORT", "5000"))
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# CORS
FRONTEND_URL = os.getenv("FRONTEND_URL")
ALLOWED_ORIGINS = [
    origin for origin in [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:5174",
        FRONTEND_URL,
    ] if origin
]
ALLOWED_ORIGIN_REGEX = r"https://.*\.vercel\.app"


def is_development(environment: str = None) -> bool:
    return (environment or ENVIRONMENT) == "development"


def missing_credentials(client_id=None, client_secret=None):
    """
    回傳尚未設定的必要環境變數名稱（空 list 代表可以啟動）
    """
    missing = []
    if not (client_id if client_id is not None else SPOTIFY_CLIENT_ID):
        missing.append("SPOTIFY_CLIENT_ID")
    if not (client_secret if client_secret is not None else SPOTIFY_CLIENT_SECRET):
        missing.append("SPOTIFY_CLIENT_SECRET")
    return missing
