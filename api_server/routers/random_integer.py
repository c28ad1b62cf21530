# api_server/routers/random_integer.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from secure_random.errors import (
    EntropySourceUnavailableError, RandomGenerationTimeoutError, SecureRandomError,
)
from secure_random.policies import secure_random_integer_with_timeout

from ..core.security import verify_api_key
from ..models import (
    GeneralErrorResponse, RandomIntegerRequest, RandomIntegerResponse, ValidationErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/random",
    tags=["Secure Random Numbers"],
    dependencies=[Depends(verify_api_key)]
)


def handle_random_errors(e: Exception, operation_name: str):
    if isinstance(e, SecureRandomError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.to_dict())
    elif isinstance(e, EntropySourceUnavailableError):
        logger.error("[API] Entropy source unavailable during %s: %s", operation_name, e)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                            detail=f"Entropy source unavailable during {operation_name}.")
    elif isinstance(e, RandomGenerationTimeoutError):
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                            detail=f"{operation_name} timed out: {e}")
    else:
        logger.exception("[API] Unexpected error during %s", operation_name)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail=f"Unexpected error during {operation_name}: {e}")


@router.post(
    "/integer",
    response_model=RandomIntegerResponse,
    summary="Secure random integer in [min, max]",
    description="Draws bytes from the configured cryptographic entropy source and returns an "
                "unbiased integer between min and max, both inclusive (rejection sampling, no modulo).",
    responses={
        400: {"model": ValidationErrorResponse, "description": "A bound failed validation"},
        503: {"model": GeneralErrorResponse, "description": "Entropy source unavailable"},
        504: {"model": GeneralErrorResponse, "description": "Generation exceeded the configured timeout"},
    }
)
async def api_random_integer(request_data: RandomIntegerRequest, request: Request):
    try:
        value = await secure_random_integer_with_timeout(
            request_data.min, request_data.max,
            timeout_sec=request.app.state.settings.timeout_sec,
            entropy_source=request.app.state.entropy_source,
        )
        # Bounds passed validation, so both are whole numbers
        return RandomIntegerResponse(value=value, min=int(request_data.min), max=int(request_data.max))
    except Exception as e:
        handle_random_errors(e, "Random Integer Generation")
