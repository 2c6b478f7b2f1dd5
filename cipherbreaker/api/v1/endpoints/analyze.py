from fastapi import APIRouter, HTTPException, status

from cipherbreaker.dependencies import SettingsDep
from cipherbreaker.models.schemas import AnalyzeRequest, AnalyzeResponse, ErrorResponse, KeyLengthScore
from cipherbreaker.services.analysis.statistics import StatisticalAnalyzer

router = APIRouter()


@router.post(
    "",
    response_model=AnalyzeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
    },
    summary="Analyze ciphertext",
    description=(
        "Letter statistics of the ciphertext: letter count, Index of Coincidence "
        "and candidate Vigenère key lengths ranked by average IOC."
    ),
)
async def analyze_ciphertext(
    request: AnalyzeRequest,
    settings: SettingsDep,
) -> AnalyzeResponse:
    """
    Analyze ciphertext without trying to break it.

    A high IOC points at Caesar or Rail Fence; a low one at Vigenère, with
    the best key lengths listed first.
    """
    # Validate ciphertext length
    if len(request.ciphertext) > settings.max_ciphertext_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Ciphertext exceeds maximum length of {settings.max_ciphertext_length}",
        )

    analyzer = StatisticalAnalyzer()
    letters = analyzer.letters(request.ciphertext)

    return AnalyzeResponse(
        letter_count=len(letters),
        index_of_coincidence=analyzer.index_of_coincidence(letters),
        key_lengths=[
            KeyLengthScore(length=length, average_ioc=ioc)
            for length, ioc in analyzer.key_length_scores(
                letters, max_length=settings.max_key_length
            )
        ],
    )
