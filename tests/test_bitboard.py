import random

import pytest

from fishbench.bitboard import (
    FILE_A_BB,
    FILE_H_BB,
    RANK_1_BB,
    RANK_8_BB,
    Color,
    Direction,
    Magic,
    PieceType,
    aligned,
    attacks_bb,
    between_bb,
    distance,
    edge_distance,
    file_bb,
    file_distance,
    file_of,
    iter_squares,
    least_significant_square_bb,
    line_bb,
    lsb,
    make_square,
    more_than_one,
    msb,
    pawn_attacks,
    pawn_attacks_bb,
    popcount,
    pretty,
    pseudo_attacks,
    rank_bb,
    rank_distance,
    rank_of,
    shift,
    sliding_attack,
    square_bb,
)


def sq(name):
    return make_square(ord(name[0]) - ord("a"), int(name[1]) - 1)


def bb(*names):
    result = 0
    for name in names:
        result |= square_bb(sq(name))
    return result


def test_square_helpers_round_trip():
    for s in range(64):
        assert make_square(file_of(s), rank_of(s)) == s
        assert square_bb(s) == 1 << s


def test_square_bb_rejects_off_board():
    with pytest.raises(ValueError):
        square_bb(64)
    with pytest.raises(ValueError):
        square_bb(-1)


def test_file_and_rank_bitboards():
    assert file_bb(0) == FILE_A_BB
    assert file_bb(7) == FILE_H_BB
    assert rank_bb(0) == RANK_1_BB
    assert rank_bb(7) == RANK_8_BB
    for f in range(8):
        assert popcount(file_bb(f)) == 8
        assert popcount(file_bb(f) & rank_bb(f)) == 1


def test_more_than_one():
    assert not more_than_one(0)
    assert not more_than_one(bb("e4"))
    assert more_than_one(bb("e4", "a1"))


def test_shift_respects_edges():
    assert shift(FILE_H_BB, Direction.EAST) == 0
    assert shift(FILE_A_BB, Direction.WEST) == 0
    assert shift(RANK_8_BB, Direction.NORTH) == 0
    assert shift(bb("e2"), Direction.NORTH + Direction.NORTH) == bb("e4")
    assert shift(bb("e4"), Direction.SOUTH_WEST) == bb("d3")


def test_pawn_attacks():
    assert pawn_attacks_bb(Color.WHITE, bb("e4")) == bb("d5", "f5")
    assert pawn_attacks_bb(Color.BLACK, bb("e4")) == bb("d3", "f3")
    assert pawn_attacks(Color.WHITE, sq("a2")) == bb("b3")


def test_distances():
    assert distance(sq("a1"), sq("h8")) == 7
    assert file_distance(sq("a1"), sq("c7")) == 2
    assert rank_distance(sq("a1"), sq("c7")) == 6
    assert distance(sq("a1"), sq("c7")) == 6
    assert [edge_distance(f) for f in range(8)] == [0, 1, 2, 3, 3, 2, 1, 0]


def test_knight_and_king_pseudo_attacks():
    assert pseudo_attacks(PieceType.KNIGHT, sq("a1")) == bb("b3", "c2")
    assert pseudo_attacks(PieceType.KING, sq("a1")) == bb("a2", "b1", "b2")
    assert popcount(pseudo_attacks(PieceType.KNIGHT, sq("e4"))) == 8
    assert attacks_bb(PieceType.KING, sq("e4"), 0) == pseudo_attacks(PieceType.KING, sq("e4"))


def test_queen_is_rook_plus_bishop():
    for s in range(64):
        assert pseudo_attacks(PieceType.QUEEN, s) == (
            pseudo_attacks(PieceType.ROOK, s) | pseudo_attacks(PieceType.BISHOP, s)
        )


def test_pawn_type_rejected():
    with pytest.raises(ValueError):
        attacks_bb(PieceType.PAWN, sq("e4"), 0)
    with pytest.raises(ValueError):
        pseudo_attacks(PieceType.PAWN, sq("e4"))
    with pytest.raises(ValueError):
        sliding_attack(PieceType.KNIGHT, sq("e4"), 0)


def test_magic_lookup_matches_ray_walk():
    rng = random.Random(1234)
    for _ in range(400):
        s = rng.randrange(64)
        occupied = rng.getrandbits(64) & rng.getrandbits(64)
        for pt in (PieceType.ROOK, PieceType.BISHOP):
            assert attacks_bb(pt, s, occupied) == sliding_attack(pt, s, occupied)
        assert attacks_bb(PieceType.QUEEN, s, occupied) == (
            sliding_attack(PieceType.ROOK, s, occupied)
            | sliding_attack(PieceType.BISHOP, s, occupied)
        )


def test_rook_blocked_by_occupancy():
    occupied = bb("a4")
    attacks = attacks_bb(PieceType.ROOK, sq("a1"), occupied)
    assert attacks == bb("a2", "a3", "a4") | (RANK_1_BB & ~bb("a1"))


def test_magic_index_and_lookup():
    m = Magic(mask=0b1, magic=1 << 63, shift=63, attacks=[10, 20])
    assert m.index(0) == 0
    assert m.index(1) == 1
    assert m.attacks_bb(0b11) == 20
    assert m.attacks_bb(0b10) == 10


def test_line_bb_documented_example():
    diagonal = bb("a2", "b3", "c4", "d5", "e6", "f7", "g8")
    assert line_bb(sq("c4"), sq("f7")) == diagonal
    assert line_bb(sq("a1"), sq("b3")) == 0


def test_between_bb_documented_examples():
    assert between_bb(sq("c4"), sq("f7")) == bb("d5", "e6", "f7")
    assert between_bb(sq("e6"), sq("f8")) == bb("f8")
    assert between_bb(sq("e4"), sq("e4")) == bb("e4")


def test_line_and_between_symmetry():
    for s1 in range(0, 64, 5):
        for s2 in range(64):
            assert line_bb(s1, s2) == line_bb(s2, s1)
            between = between_bb(s1, s2)
            assert between & square_bb(s2)
            if line_bb(s1, s2):
                assert between & ~line_bb(s1, s2) == 0


def test_aligned():
    assert aligned(sq("a1"), sq("h8"), sq("d4"))
    assert not aligned(sq("a1"), sq("h8"), sq("d5"))
    assert aligned(sq("e1"), sq("e8"), sq("e5"))


def test_bit_scans():
    b = bb("c2", "f6", "h8")
    assert lsb(b) == sq("c2")
    assert msb(b) == sq("h8")
    assert least_significant_square_bb(b) == bb("c2")
    assert list(iter_squares(b)) == [sq("c2"), sq("f6"), sq("h8")]
    assert popcount(b) == 3
    assert list(iter_squares(0)) == []


def test_bit_scans_reject_empty():
    with pytest.raises(ValueError):
        lsb(0)
    with pytest.raises(ValueError):
        msb(0)
    with pytest.raises(ValueError):
        least_significant_square_bb(0)


def test_pretty_layout():
    text = pretty(bb("a1", "h8"))
    lines = text.splitlines()
    assert lines[0] == "+---+---+---+---+---+---+---+---+"
    assert lines[-1] == "  a   b   c   d   e   f   g   h"
    assert lines[1] == "|   |   |   |   |   |   |   | X | 8"
    assert lines[15] == "| X |   |   |   |   |   |   |   | 1"
    assert text.count("X") == 2
    assert len(lines) == 18