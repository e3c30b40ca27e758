"""Routes mounted in every role."""

from fastapi import APIRouter

from tripmate.api.routes import public_forms

router = APIRouter()


@router.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


router.include_router(public_forms.router)
