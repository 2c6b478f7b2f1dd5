from fastapi import APIRouter, HTTPException, status
from starlette.concurrency import run_in_threadpool

from cipherbreaker.core.exceptions import NoPlausibleDecryptionError, ValidationError
from cipherbreaker.dependencies import DictionaryDep, SettingsDep
from cipherbreaker.models.schemas import BreakRequest, BreakResponse, ErrorResponse, RankedCandidateSchema
from cipherbreaker.services.explanation.generator import ExplanationGenerator
from cipherbreaker.services.pipeline.orchestrator import DecryptionOrchestrator, RankedCandidate

router = APIRouter()


def _to_schema(ranked: RankedCandidate) -> RankedCandidateSchema:
    candidate = ranked.candidate
    validation = candidate.validation
    return RankedCandidateSchema(
        rank=ranked.rank,
        method=candidate.cipher_type,
        key=candidate.key,
        decrypted_text=candidate.plaintext,
        confidence=candidate.normalized_score,
        raw_score=candidate.raw_score,
        valid_word_percentage=validation.percentage if validation is not None else None,
        invalid_words=list(validation.invalid_words) if validation is not None else [],
    )


@router.post(
    "",
    response_model=BreakResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        422: {"model": ErrorResponse, "description": "No plausible decryption"},
    },
    summary="Break ciphertext",
    description=(
        "Find the most plausible decryption of Caesar, Rail Fence or Vigenère "
        "ciphertext without knowing the cipher or key. Returns every candidate "
        "above the confidence floor, best first."
    ),
)
async def break_ciphertext(
    request: BreakRequest,
    settings: SettingsDep,
    dictionary: DictionaryDep,
) -> BreakResponse:
    """
    Break ciphertext with the cost-ordered cascade.

    The search is CPU-bound and runs in the threadpool so other requests
    are still served meanwhile.
    """
    orchestrator = DecryptionOrchestrator(dictionary, settings=settings)

    try:
        result = await run_in_threadpool(
            orchestrator.orchestrate,
            request.ciphertext,
            request.timeout_seconds,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=ErrorResponse(error="invalid_input", message=e.message, details=e.details).model_dump(),
        )
    except NoPlausibleDecryptionError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=ErrorResponse(error="no_plausible_decryption", message=e.message, details=e.details).model_dump(),
        )

    return BreakResponse(
        candidates=[_to_schema(ranked) for ranked in result.candidates],
        methods_attempted=result.methods_attempted,
        methods_failed=result.methods_failed,
        early_exit_reason=result.early_exit_reason,
        explanations=ExplanationGenerator(orchestrator).generate(request.ciphertext, result),
    )
