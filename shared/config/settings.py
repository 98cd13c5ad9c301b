import os
import warnings

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# --- Database ---
DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "localhost")  # In Docker, this will be 'postgres'
DB_PORT = os.getenv("POSTGRES_PORT", "5433")
DB_NAME = os.getenv("POSTGRES_DB", "storefront")

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+asyncpg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)
DB_ECHO = _flag("DB_ECHO", "false")

# --- Auth ---
JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "")
if not JWT_SECRET_KEY:
    warnings.warn(
        "JWT_SECRET_KEY is not set. Using an insecure development default. "
        "Set this env var in production!",
        stacklevel=2,
    )
    JWT_SECRET_KEY = "dev-jwt-secret-change-me"

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

RATE_LIMIT_ENABLED = _flag("RATE_LIMIT_ENABLED", "true")
AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "20/minute")

# --- Observability ---
OTEL_ENABLED = _flag("OTEL_ENABLED", "true")
OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT", "http://localhost:4317")
SERVICE_NAME = os.getenv("SERVICE_NAME", "storefront")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5500,http://127.0.0.1:5500",
    ).split(",")
    if origin.strip()
]

# --- Pricing ---
FREE_SHIPPING_THRESHOLD = float(os.getenv("FREE_SHIPPING_THRESHOLD", "599"))
FLAT_SHIPPING_FEE = float(os.getenv("FLAT_SHIPPING_FEE", "50"))
TAX_RATE = float(os.getenv("TAX_RATE", "0.05"))

# --- Seller details printed on bills when the dealer record has gaps ---
DEFAULT_SELLER_DETAILS = {
    "company_name": os.getenv("SELLER_COMPANY_NAME", "Svasthyaa E-Commerce"),
    "email": os.getenv("SELLER_EMAIL", "info@svasthyaa.com"),
    "phone": os.getenv("SELLER_PHONE", "+91 98765 43210"),
    "address": os.getenv("SELLER_ADDRESS", "123 Health Street"),
    "city": os.getenv("SELLER_CITY", "Mumbai"),
    "state": os.getenv("SELLER_STATE", "Maharashtra"),
    "zip_code": os.getenv("SELLER_ZIP_CODE", "400001"),
    "gst_number": os.getenv("SELLER_GST_NUMBER", ""),
}
