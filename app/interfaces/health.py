"""
Health check router.

Answers the orchestrator's liveness checks and says which integrations
have credentials. Nothing here opens a connection, so the route stays
up while Postgres, Stripe or Cloudinary are unreachable.
"""

from fastapi import APIRouter

from app.core.config import settings
from app.interfaces.schemas import HealthResponse
from app.shared.security.rate_limiting import limiter

router = APIRouter(tags=["health"])


def configured_integrations() -> dict[str, bool]:
    return {
        "stripe_checkout": bool(settings.stripe_secret_key and settings.stripe_pro_price_id),
        "stripe_webhooks": bool(settings.stripe_webhook_secret),
        "cloudinary": bool(
            settings.cloudinary_cloud_name
            and settings.cloudinary_api_key
            and settings.cloudinary_api_secret
        ),
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Service name and version, plus the integrations that have credentials.",
)
@limiter.exempt
def health_check() -> HealthResponse:
    integrations = configured_integrations()
    return HealthResponse(
        status="ok",
        service=settings.project_name,
        version=settings.version,
        integrations=integrations,
        missing=sorted(name for name, ready in integrations.items() if not ready),
    )
