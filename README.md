# fishbench

Building blocks for a chess engine in plain Python, with no third-party
dependencies:

- **Bitboards** (`fishbench.bitboard`): 64-bit square sets, file and rank
  masks, `shift`, pawn attacks, king and knight pseudo-attacks, and
  magic-bitboard lookups (`Magic`) for bishops, rooks and queens. Also
  `line_bb`, `between_bb`, `aligned`, king `distance`, bit scans (`lsb`,
  `msb`, `popcount`, `iter_squares`) and a board diagram via `pretty`.
  The attack tables are built on first use.
- **Benchmark command lists** (`fishbench.benchmark`): `setup_bench` builds
  the UCI commands for a fixed-limit bench over the built-in positions, the
  current position, or a file of FENs; `setup_benchmark` builds a timed run
  over recorded games and returns a `BenchmarkSetup`.
- **Benchmark positions** (`fishbench.positions`): `benchmark_games()`
  returns the recorded games (lists of FEN strings) used by
  `setup_benchmark`; `DEFAULT_COMMANDS` holds the default bench positions
  together with their `setoption` lines.
- **Utilities** (`fishbench.utils`): the xorshift64* `PRNG` used to find
  magic numbers, `mul_hi64`, `split`, `move_to_front` and a millisecond
  monotonic clock `now`.
- **Run-time statistics** (`fishbench.debug`): `DebugStats` collects hit
  rates, means, standard deviations, extremes and correlations in 32
  numbered slots and renders them with `report()`.

## Bitboards

```python
from fishbench.bitboard import PieceType, attacks_bb, make_square, popcount, pretty, iter_squares

d4 = make_square(3, 3)
rook = attacks_bb(PieceType.ROOK, d4, 0)
print(popcount(rook))          # 14 squares on an empty board
print(pretty(rook))
print(list(iter_squares(rook)))
```

Squares are numbered 0 (a1) to 63 (h8); a bitboard is an `int` whose bit
*n* stands for square *n*. Out-of-range squares and bit scans of an empty
bitboard raise `ValueError`.

## Benchmark commands

```python
from fishbench.benchmark import setup_bench, setup_benchmark

commands = setup_bench("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", [])
print(commands[:4])

setup = setup_benchmark(["1", "16", "60"])
print(setup.filled_invocation, len(setup.commands))
```

`setup_bench` takes up to five tokens (a string or an iterable): hash size
in MB, threads, limit, FEN source (`default`, `current` or a file path) and
limit type (`depth`, `perft`, `nodes`, `movetime` or `eval`). Missing ones
default to `16 1 13 default depth`. A FEN file that cannot be opened raises
`OSError`.

`setup_benchmark` takes up to three integer tokens: threads, hash size in MB
and target duration in seconds. A missing or non-integer token, and every
one after it, takes its default: all hardware threads, 128 MB per thread and
150 seconds.

## Statistics

```python
from fishbench.debug import DebugStats

stats = DebugStats()
for n in range(10):
    stats.hit_on(n % 3 == 0, 0)
    stats.mean_of(n, 1)
print(stats.report())
```

Slots outside 0..31 raise `IndexError`; `clear()` resets every slot.

## What this package does not do

fishbench has no position representation, move generation, search or
evaluation, and no UCI command loop or command-line program. The benchmark
functions only produce lists of command strings; running them needs an
engine that is not part of this package. Version strings, debug logging of
engine input and output, and file or path helpers are not provided either.