"""Command lists for the built-in benchmarks.

``setup_bench`` builds the fixed-depth (or nodes/movetime/perft/eval) bench
over a set of positions. ``setup_benchmark`` builds the timed benchmark that
replays sample games with a move time fitted to real game lengths.
"""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Union

from .positions import BENCHMARK_GAMES, DEFAULT_COMMANDS

Args = Union[str, Iterable[str], None]

# Chosen so that roughly half of the hash is used once every position of the
# sequence has been searched.
TT_SIZE_PER_THREAD = 128
DEFAULT_DURATION_S = 150


def _tokens(args: Args) -> Iterator[str]:
    if args is None:
        return iter(())
    if isinstance(args, str):
        return iter(args.split())
    return iter(args)


def _float32(x: float) -> float:
    """Round ``x`` to the nearest single-precision value."""
    return struct.unpack("f", struct.pack("f", x))[0]


def _hardware_concurrency() -> int:
    return os.cpu_count() or 1


def _read_fens(path: str) -> List[str]:
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise OSError(f"Unable to open file {path}") from exc
    return [line for line in text.split("\n") if line]


def setup_bench(current_fen: str, args: Args = None) -> List[str]:
    """Return the UCI commands run by ``bench``.

    ``args`` holds up to five tokens: TT size in MB, thread count, limit value,
    position source (``default``, ``current`` or a file of FENs) and limit type
    (``depth``, ``perft``, ``nodes``, ``movetime`` or ``eval``). Missing tokens
    take the defaults ``16 1 13 default depth``.
    """
    tokens = _tokens(args)
    tt_size = next(tokens, "16")
    threads = next(tokens, "1")
    limit = next(tokens, "13")
    fen_file = next(tokens, "default")
    limit_type = next(tokens, "depth")

    go = "eval" if limit_type == "eval" else f"go {limit_type} {limit}"

    if fen_file == "default":
        fens: List[str] = list(DEFAULT_COMMANDS)
    elif fen_file == "current":
        fens = [current_fen]
    else:
        fens = _read_fens(fen_file)

    commands = [
        f"setoption name Threads value {threads}",
        f"setoption name Hash value {tt_size}",
        "ucinewgame",
    ]
    for fen in fens:
        if "setoption" in fen:
            commands.append(fen)
        else:
            commands.append(f"position fen {fen}")
            commands.append(go)
    return commands


@dataclass
class BenchmarkSetup:
    """Settings and command list of a timed benchmark run."""

    tt_size: int = 0
    threads: int = 0
    commands: List[str] = field(default_factory=list)
    original_invocation: str = ""
    filled_invocation: str = ""


def _corrected_time(ply: int) -> float:
    # Time per move fitted roughly on long games: ms = 50000 / (ply + 15).
    return 50000.0 / (float(ply) + 15.0)


def setup_benchmark(args: Args = None) -> BenchmarkSetup:
    """Return the timed benchmark for up to three integer tokens.

    The tokens are the thread count, TT size in MB and desired duration in
    seconds. A missing or non-integer token, and every token after it, takes
    its default: all hardware threads, 128 MB per thread and 150 seconds.
    """
    tokens = _tokens(args)
    failed = False

    def read_int() -> Optional[int]:
        nonlocal failed
        if failed:
            return None
        token = next(tokens, None)
        try:
            value = int(token) if token is not None else None
        except ValueError:
            value = None
        if value is None:
            failed = True
        return value

    setup = BenchmarkSetup()

    threads = read_int()
    if threads is None:
        setup.threads = _hardware_concurrency()
    else:
        setup.threads = threads
        setup.original_invocation += str(threads)

    tt_size = read_int()
    if tt_size is None:
        setup.tt_size = TT_SIZE_PER_THREAD * setup.threads
    else:
        setup.tt_size = tt_size
        setup.original_invocation += f" {tt_size}"

    desired_time_s = read_int()
    if desired_time_s is None:
        desired_time_s = DEFAULT_DURATION_S
    else:
        setup.original_invocation += f" {desired_time_s}"

    setup.filled_invocation = f"{setup.threads} {setup.tt_size} {desired_time_s}"

    total_time = 0.0
    for game in BENCHMARK_GAMES:
        setup.commands.append("ucinewgame")
        for ply in range(1, len(game) + 1):
            total_time = _float32(total_time + _float32(_corrected_time(ply)))

    time_scale = _float32(_float32(float(desired_time_s * 1000)) / total_time)

    for game in BENCHMARK_GAMES:
        setup.commands.append("ucinewgame")
        for ply, fen in enumerate(game, start=1):
            setup.commands.append(f"position fen {fen}")
            movetime = int(_corrected_time(ply) * time_scale)
            setup.commands.append(f"go movetime {movetime}")

    return setup