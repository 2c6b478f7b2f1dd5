from fastapi import APIRouter

from cipherbreaker.api.v1.endpoints import analyze, break_cipher, decrypt, encrypt

api_router = APIRouter()

api_router.include_router(
    break_cipher.router,
    prefix="/break-cipher",
    tags=["Breaking"],
)

api_router.include_router(
    analyze.router,
    prefix="/analyze",
    tags=["Analysis"],
)

api_router.include_router(
    decrypt.router,
    prefix="/decrypt",
    tags=["Decryption"],
)

api_router.include_router(
    encrypt.router,
    prefix="/encrypt",
    tags=["Encryption"],
)
