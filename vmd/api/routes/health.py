"""
Health Routes
=============

FastAPI routes for health check endpoints.
"""

from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from vmd.config.logging import get_logger
from vmd.config.settings import get_settings
from vmd.core.markdown.renderer import render_markdown
from vmd.models.schemas import HealthStatus, RenderOptions

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])

PROBE_DOCUMENT = "# ok\n\n- [x] done :+1:\n"


async def check_renderer_health() -> bool:
    """Render a small probe document through the full pipeline with the configured options."""
    try:
        result = await render_markdown(PROBE_DOCUMENT, RenderOptions.from_settings())
        return 'id="ok"' in result.html
    except Exception as e:
        logger.error("Renderer health check failed", error=str(e))
        return False


def check_emoji_images() -> bool:
    """Whether the configured emoji image directory is available."""
    image_dir = get_settings().emoji_image_dir
    return image_dir is not None and image_dir.is_dir()


async def check_system_health() -> Dict[str, Any]:
    """
    Check health of each component.

    Returns:
        Dictionary with the status of each component
    """
    return {
        "renderer": await check_renderer_health(),
        "emoji_images": check_emoji_images(),
    }


@router.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    """
    Get application health status.

    The service is unhealthy when the renderer fails and degraded when emoji
    images are configured but missing.
    """
    try:
        logger.info("Health check requested")
        settings = get_settings()
        components = await check_system_health()

        if not components["renderer"]:
            status = "unhealthy"
        elif settings.emoji_image_dir is not None and not components["emoji_images"]:
            status = "degraded"
        else:
            status = "healthy"

        health_status = HealthStatus(
            status=status,
            version=settings.app_version,
            renderer=components["renderer"],
            emoji_images=components["emoji_images"],
        )

        logger.info("Health check completed", status=status, **components)
        return health_status

    except Exception as e:
        logger.error("Health check failed", error=str(e))
        raise HTTPException(status_code=503, detail="Health check failed")
