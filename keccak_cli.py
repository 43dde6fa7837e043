#!/usr/bin/env python3
"""
keccaksum: print Keccak / SHA-3 / SHAKE digests of files, stdin or text.

Usage
-----
keccaksum digest README.md                  # keccak-256 (Ethereum style)
keccaksum digest -a sha3-256 -t "abc" -q    # bare hex of a literal string
cat blob.bin | keccaksum digest -a shake256 -l 32
keccaksum list

The default for --algorithm is read from KECCAK_ALGORITHM. For SHAKE, a
missing --length falls back to KECCAK_LENGTH; fixed-output families ignore it.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional

import typer

import fips202
from keccak import __version__

log = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

# Output bytes used for SHAKE when no --length is given.
DEFAULT_XOF_LENGTH = {"shake128": 32, "shake256": 64}

app = typer.Typer(name="keccaksum", no_args_is_help=True, add_completion=False)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _env_length() -> Optional[int]:
    raw = os.environ.get("KECCAK_LENGTH", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise typer.BadParameter(f"KECCAK_LENGTH must be an integer, got {raw!r}")


def _new_hash(algorithm: str, length: Optional[int]):
    try:
        params = fips202.lookup(algorithm)
        if params.xof:
            if length is None:
                length = _env_length()
            if length is None:
                length = DEFAULT_XOF_LENGTH[params.name]
            if length < 1:
                raise ValueError(f"{params.name} output length must be at least 1 byte, got {length}")
        return fips202.new(params.name, length=length)
    except ValueError as e:
        raise typer.BadParameter(str(e))


def _hash_stream(h, stream) -> None:
    while True:
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            break
        h.write(chunk)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"keccaksum {__version__}")
        raise typer.Exit(0)


@app.callback()
def _meta(
    version: bool = typer.Option(False, "--version", "-V", help="Print version and exit",
                                 callback=_print_version, is_eager=True),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
) -> None:
    _configure_logging(verbose)


@app.command("digest")
def digest(
    files: Optional[List[str]] = typer.Argument(None, help="Files to hash ('-' or nothing for stdin)"),
    algorithm: str = typer.Option("keccak-256", "--algorithm", "-a", envvar="KECCAK_ALGORITHM",
                                  help="Hash family, see 'keccaksum list'"),
    length: Optional[int] = typer.Option(None, "--length", "-l",
                                         help="Output bytes (SHAKE only, default from KECCAK_LENGTH)"),
    text: Optional[str] = typer.Option(None, "--text", "-t", help="Hash this UTF-8 string instead of files"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Print only the hex digest"),
) -> None:
    """
    Hash each input and print '<hex>  <name>'.
    """
    template = _new_hash(algorithm, length)

    if text is not None:
        inputs = [("text", text)]
    else:
        inputs = [("file", name) for name in (files or ["-"])]

    for kind, name in inputs:
        h = template.copy()
        if kind == "text":
            h.write(text.encode("utf-8"))
            label = repr(text)
        elif name == "-":
            log.debug("hashing stdin with %s", h.name)
            _hash_stream(h, typer.get_binary_stream("stdin"))
            label = "-"
        else:
            log.debug("hashing %s with %s", name, h.name)
            try:
                with open(name, "rb") as f:
                    _hash_stream(h, f)
            except OSError as e:
                raise typer.BadParameter(f"cannot read {name!r}: {e.strerror}")
            label = name

        if quiet:
            typer.echo(h.hexdigest())
        else:
            typer.echo(f"{h.hexdigest()}  {label}")


@app.command("list")
def list_algorithms() -> None:
    """
    Show every supported family with its sponge parameters.
    """
    typer.echo(f"{'name':<12} {'rate':>5} {'capacity':>9} {'digest':>7} {'domain':>7}")
    for name, params in fips202.Algorithms.items():
        size = "xof" if params.xof else str(params.digest_size)
        typer.echo(f"{name:<12} {params.rate:>5} {params.capacity_bits:>9} {size:>7} {params.domain:>#7x}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
