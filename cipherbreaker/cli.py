from typing import Optional

import typer

from cipherbreaker.core.config import get_settings
from cipherbreaker.core.exceptions import CryptanalysisError
from cipherbreaker.core.logging_config import configure_logging
from cipherbreaker.models.schemas import CipherType
from cipherbreaker.services.analysis.statistics import StatisticalAnalyzer
from cipherbreaker.services.explanation.generator import ExplanationGenerator
from cipherbreaker.services.pipeline.orchestrator import DecryptionOrchestrator
from cipherbreaker.services.transforms import get_transform

app = typer.Typer(help="Universal Cipher Breaker: break Caesar, Rail Fence and Vigenère ciphertext.")


@app.callback()
def _init(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (default from settings)."),
):
    # Configure logging exactly once per CLI run
    configure_logging(log_level or get_settings().log_level)


@app.command("break")
def break_(
    text: str = typer.Argument(..., help="Ciphertext to break."),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Time budget in seconds."),
    top: int = typer.Option(3, "--top", help="How many ranked candidates to show."),
):
    """Find the most plausible decryption without knowing the cipher or key."""
    orchestrator = DecryptionOrchestrator()
    try:
        result = orchestrator.orchestrate(text, timeout_seconds=timeout)
    except CryptanalysisError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)

    generator = ExplanationGenerator(orchestrator)
    for ranked in result.candidates[:top]:
        typer.echo(generator.describe_candidate(ranked))
        typer.echo(f"   {ranked.candidate.plaintext}")

    typer.echo(f"\n{generator.explain_best(text, result)}")

    if result.early_exit_reason:
        typer.echo(f"\n{result.early_exit_reason}")
    for method, reason in result.methods_failed.items():
        typer.echo(f"{method} failed: {reason}", err=True)


def _transform(cipher: str, key: str, text: str, decrypt: bool) -> str:
    try:
        transform = get_transform(CipherType(cipher.lower().strip()))
    except ValueError:
        available = ", ".join(c.value for c in CipherType)
        raise typer.BadParameter(f"Unknown cipher '{cipher}'. Available: {available}")

    try:
        return transform.decrypt(text, key) if decrypt else transform.encrypt(text, key)
    except ValueError as e:
        raise typer.BadParameter(str(e))


@app.command()
def encrypt(
    cipher: str = typer.Option(..., "--cipher", "-c", help="caesar, rail_fence or vigenere."),
    key: str = typer.Option(..., "--key", "-k", help="Shift, rail count or keyword."),
    text: str = typer.Argument(..., help="Plaintext to encrypt."),
):
    """Encrypt with a known cipher and key."""
    typer.echo(_transform(cipher, key, text, decrypt=False))


@app.command()
def decrypt(
    cipher: str = typer.Option(..., "--cipher", "-c", help="caesar, rail_fence or vigenere."),
    key: str = typer.Option(..., "--key", "-k", help="Shift, rail count or keyword."),
    text: str = typer.Argument(..., help="Ciphertext to decrypt."),
):
    """Decrypt when you already know the cipher type and have the key."""
    typer.echo(_transform(cipher, key, text, decrypt=True))


@app.command()
def analyze(
    text: str = typer.Argument(..., help="Ciphertext to analyze."),
    top: int = typer.Option(5, "--top", help="How many key lengths to show."),
):
    """Show letter count, Index of Coincidence and likely Vigenère key lengths."""
    analyzer = StatisticalAnalyzer()
    letters = analyzer.letters(text)

    typer.echo(f"letters: {len(letters)}")
    typer.echo(f"ioc: {analyzer.index_of_coincidence(letters):.5f}")
    typer.echo("\nTop key lengths:")
    for length, ioc in analyzer.key_length_scores(letters, max_length=get_settings().max_key_length)[:top]:
        typer.echo(f"  k={length:2d}  avg_ioc={ioc:.5f}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
