"""
Verification email service

Small standalone app the sign-in page calls to email one-time codes.
Codes are generated and checked by the caller; this service only delivers them.
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import ALLOWED_ORIGINS, VERIFICATION_RATE_LIMIT, VERIFICATION_RATE_WINDOW_SECONDS
from .email_service import send_verification_code
from .rate_limiter import create_rate_limiter

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

MISSING_FIELDS_ERROR = "Email and code are required"

app = FastAPI(title="Quick Accounting Email Service", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

verification_rate_limit = create_rate_limiter(
    limit=VERIFICATION_RATE_LIMIT,
    window_seconds=VERIFICATION_RATE_WINDOW_SECONDS,
    key_prefix="send_verification",
)


class VerificationRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    email: Optional[str] = None
    code: Optional[str] = None


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": MISSING_FIELDS_ERROR})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.post("/api/send-verification")
async def send_verification(
    data: Optional[VerificationRequest] = None,
    _: None = Depends(verification_rate_limit),
):
    email = (data.email or "").strip() if data else ""
    code = (data.code or "").strip() if data else ""
    if not email or not code:
        return JSONResponse(status_code=400, content={"error": MISSING_FIELDS_ERROR})

    try:
        await send_verification_code(email, code)
    except Exception as e:
        logger.error(f"Email sending error for {email}: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to send verification code", "details": str(e)},
        )

    logger.info(f"Verification code sent to {email}")
    return {"success": True, "message": "Verification code sent to your email"}


@app.get("/api/health")
def health():
    return {"status": "Email service is running"}
