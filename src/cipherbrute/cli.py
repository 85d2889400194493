from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from cipherbrute.classical import register_all
from cipherbrute.core.errors import CipherBruteError, ConfigurationError
from cipherbrute.core.ngrams import NgramHeuristic
from cipherbrute.core.registry import decrypt_known, encrypt_known, get_plugin, list_plugins
from cipherbrute.core.report import discover_inputs, display_name, write_report
from cipherbrute.core.scoring import score_text
from cipherbrute.core.search import (
    DEFAULT_CIPHERS,
    DEFAULT_TOP_K,
    DEFAULT_WORKERS,
    SearchConfig,
    SearchProgress,
    search,
    search_all,
    trial_count,
)

app = typer.Typer(help="cipherbrute: brute-force classical ciphers and rank decryptions by English plausibility.")


@app.callback()
def _init(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log search progress."),
    debug: bool = typer.Option(False, "--debug", help="Log every skipped key and loaded resource."),
):
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    # Register plugins exactly once per CLI run
    register_all()


def _build_config(workers: int, top: int, cipher: Optional[List[str]]) -> SearchConfig:
    # Reject bad settings before any search starts
    try:
        config = SearchConfig(workers=workers, top_k=top, ciphers=tuple(cipher) if cipher else DEFAULT_CIPHERS)
        config.resolve_plugins()
    except ConfigurationError as e:
        raise typer.BadParameter(str(e))
    return config


@app.command()
def ciphers():
    """List all registered ciphers."""
    for name in list_plugins():
        plugin = get_plugin(name)
        mode = "searched in parallel" if plugin.parallel else "searched" if plugin.searchable else "encrypt/decrypt only"
        typer.echo(f"{name:10s} {mode}")


@app.command()
def analyze(
    text: str,
    ngram: int = typer.Option(3, help="N for the optional n-gram diversity heuristic."),
):
    """Score text with every heuristic."""
    results = [*score_text(text), NgramHeuristic(ngram).analyze(text)]
    for r in results:
        typer.echo(f"{r.name + ':':28s} {r.score:.3f} - {r.summary}")
    combined = sum(r.score for r in results[:3]) / 3.0
    typer.echo(f"{'Combined:':28s} {combined:.3f}")


@app.command()
def encrypt(
    cipher: str = typer.Option(..., "--cipher", "-c", help="Cipher name (e.g., caesar, vigenere)."),
    key: Optional[str] = typer.Option(None, "--key", "-k", help="Key material for the cipher."),
    text: str = typer.Argument(..., help="Plaintext to encrypt."),
):
    """Encrypt with a known cipher and key."""
    try:
        ct = encrypt_known(cipher, text, key)
    except CipherBruteError as e:
        raise typer.BadParameter(str(e))
    typer.echo(ct)


@app.command()
def decrypt(
    cipher: str = typer.Option(..., "--cipher", "-c", help="Cipher name (e.g., caesar, vigenere)."),
    key: Optional[str] = typer.Option(None, "--key", "-k", help="Key material for the cipher."),
    text: str = typer.Argument(..., help="Ciphertext to decrypt."),
):
    """Decrypt when you already know the cipher type and have the key."""
    try:
        pt = decrypt_known(cipher, text, key)
    except CipherBruteError as e:
        raise typer.BadParameter(str(e))
    typer.echo(pt)


@app.command()
def crack(
    text: str = typer.Argument(...),
    top: int = typer.Option(DEFAULT_TOP_K, "--top", "-t"),
    workers: int = typer.Option(DEFAULT_WORKERS, "--workers", "-w", help="Parallel workers for large key spaces."),
    cipher: Optional[List[str]] = typer.Option(
        None,
        "--cipher",
        "-c",
        help="Limit to specific cipher(s). Can repeat: -c caesar -c affine",
    ),
):
    """Brute-force one text and print the best candidates."""
    config = _build_config(workers, top, cipher)

    try:
        results = search(text, "<text>", config=config)
    except CipherBruteError as e:
        typer.echo(f"Search failed: {e}", err=True)
        raise typer.Exit(code=1)

    if not results:
        typer.echo("No candidates produced.")
        raise typer.Exit(code=0)

    for i, r in enumerate(results, start=1):
        typer.echo(f"#{i}  cipher={r.cipher_name}  score={r.combined_score:.3f}  key={r.key}")
        typer.echo(f"    {r.summary}")
        typer.echo(r.plaintext)
        typer.echo("-" * 60)


@app.command()
def batch(
    input_dir: Path = typer.Argument(Path("INPUT"), help="Directory of .txt files to crack."),
    output: Path = typer.Option(Path("output.md"), "--output", "-o", help="Markdown report path."),
    top: int = typer.Option(DEFAULT_TOP_K, "--top", "-t"),
    workers: int = typer.Option(DEFAULT_WORKERS, "--workers", "-w", help="Parallel workers for large key spaces."),
    cipher: Optional[List[str]] = typer.Option(None, "--cipher", "-c", help="Limit to specific cipher(s)."),
    pattern: str = typer.Option("*.txt", help="Glob for input files."),
):
    """Crack every file in a directory and write a Markdown report."""
    config = _build_config(workers, top, cipher)

    try:
        inputs = list(discover_inputs(input_dir, pattern))
    except FileNotFoundError as e:
        raise typer.BadParameter(str(e))
    if not inputs:
        typer.echo(f"No {pattern} files found in {input_dir}")
        raise typer.Exit(code=0)
    typer.echo(f"Found {len(inputs)} text files")

    total = trial_count(config) * len(inputs)
    try:
        with typer.progressbar(length=total, label="Searching") as bar:
            progress = SearchProgress(callback=lambda done, _total: bar.update(1))
            results = search_all(inputs, config=config, progress=progress)
    except CipherBruteError as e:
        typer.echo(f"Search failed: {e}", err=True)
        raise typer.Exit(code=1)

    for source, candidates in results.items():
        typer.echo(f"\n{source}:")
        for i, c in enumerate(candidates, start=1):
            typer.echo(f"  {i}. {display_name(c.cipher_name)} [{c.key}]: {c.combined_score:.3f}")

    write_report(results, output)
    typer.echo(f"\nResults exported to {output}")


def main():
    app()


if __name__ == "__main__":
    main()
