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
    summary="Decrypt ciphertext",
    description="Decrypt ciphertext using a specified cipher type and known key.",
)
async def decrypt_ciphertext(
    request: TransformRequest,
    settings: SettingsDep,
) -> TransformResponse:
    """
    Decrypt ciphertext with a known cipher type and key.

    To recover an unknown key use `/break-cipher` instead.
    """
    # Validate ciphertext length
    if len(request.text) > settings.max_ciphertext_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Ciphertext exceeds maximum length of {settings.max_ciphertext_length}",
        )

    transform = get_transform(request.cipher_type)

    try:
        key = transform.parse_key(request.key)
        plaintext = transform.decode(request.text, key)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return TransformResponse(
        text=plaintext,
        cipher_type=request.cipher_type,
        key_used=str(key),
    )
