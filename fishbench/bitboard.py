"""Bitboards: 64-bit square sets, attack tables for every piece and magic lookups for sliders.

Squares are integers 0..63 (a1 = 0, h8 = 63); files and ranks are integers 0..7.
The attack tables are built on first use.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from functools import lru_cache
from typing import Iterator, List

from .utils import PRNG

_MASK64 = (1 << 64) - 1

SQUARE_NB = 64

FILE_A_BB = 0x0101010101010101
FILE_B_BB = FILE_A_BB << 1
FILE_C_BB = FILE_A_BB << 2
FILE_D_BB = FILE_A_BB << 3
FILE_E_BB = FILE_A_BB << 4
FILE_F_BB = FILE_A_BB << 5
FILE_G_BB = FILE_A_BB << 6
FILE_H_BB = FILE_A_BB << 7

RANK_1_BB = 0xFF
RANK_2_BB = RANK_1_BB << (8 * 1)
RANK_3_BB = RANK_1_BB << (8 * 2)
RANK_4_BB = RANK_1_BB << (8 * 3)
RANK_5_BB = RANK_1_BB << (8 * 4)
RANK_6_BB = RANK_1_BB << (8 * 5)
RANK_7_BB = RANK_1_BB << (8 * 6)
RANK_8_BB = RANK_1_BB << (8 * 7)


class Color(IntEnum):
    WHITE = 0
    BLACK = 1


class PieceType(IntEnum):
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class Direction(IntEnum):
    NORTH = 8
    EAST = 1
    SOUTH = -8
    WEST = -1
    NORTH_EAST = 9
    SOUTH_EAST = -7
    SOUTH_WEST = -9
    NORTH_WEST = 7


_ROOK_DIRECTIONS = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)
_BISHOP_DIRECTIONS = (
    Direction.NORTH_EAST,
    Direction.SOUTH_EAST,
    Direction.SOUTH_WEST,
    Direction.NORTH_WEST,
)
_KING_STEPS = (-9, -8, -7, -1, 1, 7, 8, 9)
_KNIGHT_STEPS = (-17, -15, -10, -6, 6, 10, 15, 17)

# PRNG seeds (one per rank) that find working magics quickly on 64-bit words.
_MAGIC_SEEDS = (728, 10316, 55013, 32803, 12281, 15100, 16645, 255)


def _check_square(s: int) -> int:
    if not 0 <= s < SQUARE_NB:
        raise ValueError(f"square {s} out of range 0..63")
    return s


def square_bb(s: int) -> int:
    """Return the bitboard holding only square ``s``."""
    return 1 << _check_square(s)


def make_square(file: int, rank: int) -> int:
    """Return the square on ``file`` and ``rank``."""
    if not (0 <= file < 8 and 0 <= rank < 8):
        raise ValueError(f"file {file} / rank {rank} out of range 0..7")
    return (rank << 3) + file


def file_of(s: int) -> int:
    return s & 7


def rank_of(s: int) -> int:
    return s >> 3


def more_than_one(b: int) -> bool:
    """True if ``b`` has at least two bits set."""
    return bool(b & (b - 1))


def rank_bb(rank: int) -> int:
    """Return the bitboard of all squares on ``rank``."""
    return RANK_1_BB << (8 * rank)


def file_bb(file: int) -> int:
    """Return the bitboard of all squares on ``file``."""
    return FILE_A_BB << file


def shift(b: int, direction: int) -> int:
    """Move every square of ``b`` one step (or two straight pushes) in ``direction``."""
    d = int(direction)
    if d == 8:
        r = b << 8
    elif d == -8:
        r = b >> 8
    elif d == 16:
        r = b << 16
    elif d == -16:
        r = b >> 16
    elif d == 1:
        r = (b & ~FILE_H_BB) << 1
    elif d == -1:
        r = (b & ~FILE_A_BB) >> 1
    elif d == 9:
        r = (b & ~FILE_H_BB) << 9
    elif d == 7:
        r = (b & ~FILE_A_BB) << 7
    elif d == -7:
        r = (b & ~FILE_H_BB) >> 7
    elif d == -9:
        r = (b & ~FILE_A_BB) >> 9
    else:
        r = 0
    return r & _MASK64


def pawn_attacks_bb(color: Color, b: int) -> int:
    """Return the squares attacked by pawns of ``color`` standing on ``b``."""
    if color == Color.WHITE:
        return shift(b, Direction.NORTH_WEST) | shift(b, Direction.NORTH_EAST)
    return shift(b, Direction.SOUTH_WEST) | shift(b, Direction.SOUTH_EAST)


def file_distance(s1: int, s2: int) -> int:
    return abs(file_of(s1) - file_of(s2))


def rank_distance(s1: int, s2: int) -> int:
    return abs(rank_of(s1) - rank_of(s2))


def distance(s1: int, s2: int) -> int:
    """Return the number of king steps from ``s1`` to ``s2``."""
    return max(file_distance(s1, s2), rank_distance(s1, s2))


def edge_distance(file: int) -> int:
    """Return the distance of ``file`` from the nearer board edge."""
    return min(file, 7 - file)


def _safe_destination(s: int, step: int) -> int:
    to = s + step
    if 0 <= to < SQUARE_NB and distance(s, to) <= 2:
        return 1 << to
    return 0


def sliding_attack(pt: PieceType, s: int, occupied: int) -> int:
    """Compute rook or bishop attacks from ``s`` by walking the rays; blockers are included."""
    if pt == PieceType.ROOK:
        directions = _ROOK_DIRECTIONS
    elif pt == PieceType.BISHOP:
        directions = _BISHOP_DIRECTIONS
    else:
        raise ValueError(f"sliding_attack needs ROOK or BISHOP, not {pt!r}")
    _check_square(s)
    attacks = 0
    for d in directions:
        sq = s
        while _safe_destination(sq, d):
            sq += d
            attacks |= 1 << sq
            if occupied & (1 << sq):
                break
    return attacks


@dataclass
class Magic:
    """Magic bitboard data for one square and one slider type."""

    mask: int
    magic: int
    shift: int
    attacks: List[int] = field(default_factory=list, repr=False)

    def index(self, occupied: int) -> int:
        """Map an occupancy to its slot in the attack table."""
        return (((occupied & self.mask) * self.magic) & _MASK64) >> self.shift

    def attacks_bb(self, occupied: int) -> int:
        return self.attacks[self.index(occupied)]


def _find_magic(pt: PieceType, s: int) -> Magic:
    edges = ((RANK_1_BB | RANK_8_BB) & ~rank_bb(rank_of(s))) | (
        (FILE_A_BB | FILE_H_BB) & ~file_bb(file_of(s))
    )
    mask = sliding_attack(pt, s, 0) & ~edges & _MASK64
    bits = popcount(mask)
    shift_by = 64 - bits

    # Carry-Rippler enumeration of every subset of the mask.
    occupancy: List[int] = []
    reference: List[int] = []
    b = 0
    while True:
        occupancy.append(b)
        reference.append(sliding_attack(pt, s, b))
        b = (b - mask) & mask
        if not b:
            break

    size = len(occupancy)
    attacks = [0] * size
    epoch = [0] * size
    rng = PRNG(_MAGIC_SEEDS[rank_of(s)])
    count = 0
    while True:
        magic = 0
        while popcount(((magic * mask) & _MASK64) >> 56) < 6:
            magic = rng.sparse_rand()
        count += 1
        for occ, ref in zip(occupancy, reference):
            idx = ((occ * magic) & _MASK64) >> shift_by
            if epoch[idx] < count:
                epoch[idx] = count
                attacks[idx] = ref
            elif attacks[idx] != ref:
                break
        else:
            return Magic(mask, magic, shift_by, attacks)


@dataclass
class _Tables:
    magics: dict
    pseudo: dict
    pawn: dict
    line: List[List[int]]
    between: List[List[int]]


@lru_cache(maxsize=None)
def _tables() -> _Tables:
    magics = {
        pt: [_find_magic(pt, s) for s in range(SQUARE_NB)]
        for pt in (PieceType.BISHOP, PieceType.ROOK)
    }
    pawn = {
        color: [pawn_attacks_bb(color, 1 << s) for s in range(SQUARE_NB)] for color in Color
    }
    pseudo = {pt: [0] * SQUARE_NB for pt in PieceType if pt != PieceType.PAWN}
    line = [[0] * SQUARE_NB for _ in range(SQUARE_NB)]
    between = [[0] * SQUARE_NB for _ in range(SQUARE_NB)]

    for s1 in range(SQUARE_NB):
        for step in _KING_STEPS:
            pseudo[PieceType.KING][s1] |= _safe_destination(s1, step)
        for step in _KNIGHT_STEPS:
            pseudo[PieceType.KNIGHT][s1] |= _safe_destination(s1, step)
        bishop = magics[PieceType.BISHOP][s1].attacks_bb(0)
        rook = magics[PieceType.ROOK][s1].attacks_bb(0)
        pseudo[PieceType.BISHOP][s1] = bishop
        pseudo[PieceType.ROOK][s1] = rook
        pseudo[PieceType.QUEEN][s1] = bishop | rook

    for s1 in range(SQUARE_NB):
        for pt in (PieceType.BISHOP, PieceType.ROOK):
            table = magics[pt]
            for s2 in range(SQUARE_NB):
                if pseudo[pt][s1] & (1 << s2):
                    line[s1][s2] = (
                        table[s1].attacks_bb(0) & table[s2].attacks_bb(0)
                    ) | (1 << s1) | (1 << s2)
                    between[s1][s2] = table[s1].attacks_bb(1 << s2) & table[s2].attacks_bb(
                        1 << s1
                    )
                between[s1][s2] |= 1 << s2

    return _Tables(magics, pseudo, pawn, line, between)


def line_bb(s1: int, s2: int) -> int:
    """Return the full edge-to-edge line through both squares, or 0 if they are not aligned."""
    return _tables().line[_check_square(s1)][_check_square(s2)]


def between_bb(s1: int, s2: int) -> int:
    """Return the squares after ``s1`` up to and including ``s2``; just ``s2`` if not aligned."""
    return _tables().between[_check_square(s1)][_check_square(s2)]


def aligned(s1: int, s2: int, s3: int) -> bool:
    """True if the three squares lie on one rank, file or diagonal."""
    return bool(line_bb(s1, s2) & square_bb(s3))


def pseudo_attacks(pt: PieceType, s: int) -> int:
    """Return the attacks of a non-pawn piece on ``s`` on an empty board."""
    if pt == PieceType.PAWN:
        raise ValueError("pawn attacks depend on colour; use pawn_attacks()")
    return _tables().pseudo[PieceType(pt)][_check_square(s)]


def pawn_attacks(color: Color, s: int) -> int:
    """Return the squares a pawn of ``color`` on ``s`` attacks."""
    return _tables().pawn[Color(color)][_check_square(s)]


def attacks_bb(pt: PieceType, s: int, occupied: int = 0) -> int:
    """Return the attacks of a non-pawn piece on ``s`` given the ``occupied`` squares."""
    if pt == PieceType.PAWN:
        raise ValueError("attacks_bb does not handle pawns")
    _check_square(s)
    tables = _tables()
    if pt == PieceType.BISHOP or pt == PieceType.ROOK:
        return tables.magics[pt][s].attacks_bb(occupied)
    if pt == PieceType.QUEEN:
        return tables.magics[PieceType.BISHOP][s].attacks_bb(occupied) | tables.magics[
            PieceType.ROOK
        ][s].attacks_bb(occupied)
    return tables.pseudo[PieceType(pt)][s]


def popcount(b: int) -> int:
    return bin(b & _MASK64).count("1")


def lsb(b: int) -> int:
    """Return the least significant square of a non-empty bitboard."""
    if not b:
        raise ValueError("lsb of an empty bitboard")
    return (b & -b).bit_length() - 1


def msb(b: int) -> int:
    """Return the most significant square of a non-empty bitboard."""
    if not b:
        raise ValueError("msb of an empty bitboard")
    return (b & _MASK64).bit_length() - 1


def least_significant_square_bb(b: int) -> int:
    if not b:
        raise ValueError("least significant square of an empty bitboard")
    return b & -b


def iter_squares(b: int) -> Iterator[int]:
    """Yield the squares of ``b`` from least to most significant."""
    b &= _MASK64
    while b:
        low = b & -b
        yield low.bit_length() - 1
        b ^= low


def pretty(b: int) -> str:
    """Return an ASCII drawing of the bitboard, rank 8 at the top."""
    border = "+---+---+---+---+---+---+---+---+\n"
    parts = [border]
    for rank in range(7, -1, -1):
        for file in range(8):
            parts.append("| X " if b & (1 << make_square(file, rank)) else "|   ")
        parts.append(f"| {rank + 1}\n{border}")
    parts.append("  a   b   c   d   e   f   g   h\n")
    return "".join(parts)