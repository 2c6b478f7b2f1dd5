from fastapi import APIRouter, HTTPException, status

from cipherbreaker.dependencies import SettingsDep
from cipherbreaker.models.schemas import ErrorResponse, TransformRequest, TransformResponse
from cipherbreaker.services.transforms import get_transform

router = APIRouter()


@router.post(
    "",
    response_model=TransformResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
    },
    summary="Encrypt plaintext",
    description="Encrypt plaintext using a specified cipher type and key. Useful for generating test ciphertexts.",
)
async def encrypt_plaintext(
    request: TransformRequest,
    settings: SettingsDep,
) -> TransformResponse:
    """
    Encrypt plaintext with a specified cipher type and key.

    Letter case, whitespace and punctuation are kept.
    """
    # Validate plaintext length
    if len(request.text) > settings.max_ciphertext_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Plaintext exceeds maximum length of {settings.max_ciphertext_length}",
        )

    transform = get_transform(request.cipher_type)

    try:
        key = transform.parse_key(request.key)
        ciphertext = transform.encode(request.text, key)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return TransformResponse(
        text=ciphertext,
        cipher_type=request.cipher_type,
        key_used=str(key),
    )
