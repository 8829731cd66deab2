import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# SMTP (Gmail app passwords by default); GMAIL_* are the names older
# deployments used
SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USERNAME = os.getenv("SMTP_USERNAME") or os.getenv("GMAIL_USER")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD") or os.getenv("GMAIL_APP_PASSWORD")
SMTP_USE_TLS = os.getenv("SMTP_USE_TLS", "true").lower() == "true"
SMTP_TIMEOUT_SECONDS = int(os.getenv("SMTP_TIMEOUT_SECONDS", "30"))

# Resend is used when SMTP credentials are absent or SMTP fails
RESEND_API_KEY = os.getenv("RESEND_API_KEY")

EMAIL_FROM_ADDRESS = os.getenv("EMAIL_FROM_ADDRESS") or SMTP_USERNAME or "noreply@quickaccounting.com"

VERIFICATION_SUBJECT = "Quick Accounting Service - Verification Code"
VERIFICATION_CODE_TTL_MINUTES = 10

# Per-IP limit on POST /api/send-verification
VERIFICATION_RATE_LIMIT = int(os.getenv("VERIFICATION_RATE_LIMIT", "5"))
VERIFICATION_RATE_WINDOW_SECONDS = int(os.getenv("VERIFICATION_RATE_WINDOW_SECONDS", "600"))

# Only set behind a reverse proxy that appends the caller to X-Forwarded-For
TRUST_PROXY_HEADERS = os.getenv("TRUST_PROXY_HEADERS", "false").lower() == "true"

ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if origin.strip()
]
