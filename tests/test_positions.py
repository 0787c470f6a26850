import pytest

from fishbench.positions import benchmark_games


def _board_ok(board):
    ranks = board.split("/")
    if len(ranks) != 8:
        return False
    for rank in ranks:
        width = sum(int(c) if c.isdigit() else 1 for c in rank)
        if width != 8:
            return False
    return True


def test_five_games():
    assert len(benchmark_games()) == 5


def test_games_are_copies():
    games = benchmark_games()
    original_length = len(games[0])
    games[0].clear()
    assert len(benchmark_games()[0]) == original_length
    assert original_length > 0


def test_games_equal_between_calls():
    first = benchmark_games()
    second = benchmark_games()
    assert [len(game) for game in first] == [57, 52, 49, 41, 59]
    assert [len(game) for game in second] == [57, 52, 49, 41, 59]
    assert [game[0] for game in second] == [game[0] for game in first]
    assert [game[-1] for game in second] == [game[-1] for game in first]


def test_first_position_of_first_game():
    first = benchmark_games()[0][0]
    assert first == "rnbq1k1r/ppp1bppp/4pn2/8/2B5/2NP1N2/PPP2PPP/R1BQR1K1 b - - 2 8"


def test_last_position_of_last_game():
    last = benchmark_games()[4][-1]
    assert last == "8/8/5pk1/7p/3K3P/8/R4N1r/4b3 b - - 2 64"


def test_castling_rights_kept():
    game = benchmark_games()[1]
    assert game[0] == "r1bqkbnr/npp1pppp/p7/3P4/4pB2/2N5/PPP2PPP/R2QKBNR w KQkq - 1 6"
    assert game[6] == "3qkb1r/1Qpbpppp/5n2/3P4/4pB2/7P/rPP2PP1/2KR1BNR w k - 0 12"


@pytest.mark.parametrize(
    "index,side,first,last",
    [
        (0, "b", 8, 64),
        (1, "w", 6, 57),
        (2, "b", 8, 56),
        (3, "w", 7, 47),
        (4, "b", 6, 64),
    ],
)
def test_game_side_and_move_range(index, side, first, last):
    game = benchmark_games()[index]
    assert {fen.split()[1] for fen in game} == {side}
    numbers = [int(fen.split()[5]) for fen in game]
    assert numbers == list(range(first, last + 1))


def test_fen_shape():
    for game in benchmark_games():
        for fen in game:
            fields = fen.split()
            assert len(fields) == 6, fen
            assert _board_ok(fields[0]), fen
            assert fields[0].count("K") == 1 and fields[0].count("k") == 1, fen
            assert fields[1] in ("w", "b"), fen
            assert fields[4].isdigit(), fen