# api_server/models.py
from pydantic import BaseModel, Field
from typing import Any, Optional

# --- Common Base Models ---
class BaseRequest(BaseModel):
    """Base model for API requests, can be extended."""
    pass

class BaseResponse(BaseModel):
    """Base model for API responses, can be extended."""
    pass

# --- Random Integer Models ---
class RandomIntegerRequest(BaseRequest):
    """
    Bounds for a secure random integer. Both bounds are inclusive.
    The fields accept any JSON value so that missing, fractional, boolean or
    string bounds reach the generator and are reported by its own validation
    errors instead of being coerced here.
    """
    min: Optional[Any] = Field(
        None,
        description="Lower bound (inclusive). Must be a safe integer (|min| <= 2**53 - 1).",
        examples=[1]
    )
    max: Optional[Any] = Field(
        None,
        description="Upper bound (inclusive). Must be a safe integer strictly greater than min.",
        examples=[6]
    )

class RandomIntegerResponse(BaseResponse):
    """The generated integer together with the normalized bounds used."""
    value: int = Field(..., description="Uniformly distributed integer with min <= value <= max.")
    min: int = Field(..., description="Lower bound that was applied.")
    max: int = Field(..., description="Upper bound that was applied.")

# --- Error Models ---
class ValidationErrorDetail(BaseModel):
    """Describes which bound check failed."""
    error: str = Field(..., examples=["maxLowerThanMin"], description="Stable machine-readable error name.")
    message: str = Field(..., description="Human-readable description of the failed check.")
    value: Any = Field(None, description="The offending value (or [min, max] for ordering errors).")

class ValidationErrorResponse(BaseModel):
    detail: ValidationErrorDetail

class GeneralErrorResponse(BaseModel): # For documenting error responses in OpenAPI
    """A generic error response model."""
    detail: str = Field(..., description="A human-readable description of the error.")
