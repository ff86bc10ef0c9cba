# noqa: E402
import os
import sys
from pathlib import Path
from dotenv import load_dotenv

# In case pytest tests/ -v -s is run, it will only read .env.test
if "pytest" in sys.modules or os.environ.get("TESTING") == "True":
    test_env_path = Path(__file__).parent.parent / "tests" / ".env.test"
    if test_env_path.exists():
        load_dotenv(test_env_path, override=True)
        print(f" Loaded test environment from: {test_env_path}")
else:
    load_dotenv()

# Determine if we're in testing mode
TESTING = os.environ.get("TESTING") == "True" or "pytest" in sys.modules
FLASK_ENV = os.environ.get("FLASK_ENV")

RATE_PER_GUEST = 20


def is_production_database(db_url: str) -> bool:
    """Check if a database URL appears to be production."""
    if not db_url:
        return False

    dangerous_patterns = [
        "rlwy.net",
        "railway.internal",
        "amazonaws.com",
        "azure.com",
        "production",
        "live",
        "cafe_prod",
    ]

    for pattern in dangerous_patterns:
        if pattern in db_url.lower():
            return True
    return False


def normalize_database_url(url: str) -> str:
    """PyMySQL is the MySQL driver; plain mysql:// URLs are rewritten to use it."""
    if url and url.startswith("mysql://"):
        return url.replace("mysql://", "mysql+pymysql://", 1)
    return url


if TESTING or FLASK_ENV == "testing":
    url = os.environ.get("DATABASE_TEST_URL", "sqlite:///:memory:")

    # CRITICAL SAFETY CHECK: Make sure we're not using production
    if is_production_database(url):
        print(" CRITICAL ERROR: Test is trying to use production database!")
        print(f" Database URL contains production patterns: {url}")
        sys.exit(1)

    print(" TESTING MODE: Using test database")

else:
    url = os.environ.get("DATABASE_URL")

    if not url:
        if FLASK_ENV == "development":
            url = "sqlite:///cafe_dev.db"
            print("  DATABASE_URL not set, using local development database")
        else:
            raise ValueError("DATABASE_URL environment variable is required for production")

    if is_production_database(url):
        print("  WARNING: Using production database - be careful!")

    print(f" {FLASK_ENV or 'PRODUCTION'} MODE: Using main database")

url = normalize_database_url(url)


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SQLALCHEMY_DATABASE_URI = url
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.environ.get("SECRET_KEY", "supersecretdevkey123")
    JWT_EXPIRES_HOURS = int(os.environ.get("JWT_EXPIRES_HOURS", 24))

    TESTING = TESTING

    RATE_PER_GUEST = RATE_PER_GUEST
    # Orders accept any status change unless this is switched on
    STRICT_ORDER_TRANSITIONS = _env_flag("STRICT_ORDER_TRANSITIONS")
