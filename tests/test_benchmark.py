import pytest

from fishbench.benchmark import BenchmarkSetup, setup_bench, setup_benchmark
from fishbench.positions import BENCHMARK_GAMES, DEFAULT_COMMANDS

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def test_setup_bench_defaults_header():
    commands = setup_bench(START_FEN)
    assert commands[:3] == [
        "setoption name Threads value 1",
        "setoption name Hash value 16",
        "ucinewgame",
    ]


def test_setup_bench_defaults_body():
    commands = setup_bench(START_FEN, "")
    setoptions = [c for c in DEFAULT_COMMANDS if "setoption" in c]
    fens = [c for c in DEFAULT_COMMANDS if "setoption" not in c]
    assert len(commands) == 3 + len(setoptions) + 2 * len(fens)
    assert commands[3] == DEFAULT_COMMANDS[0]
    assert commands[4] == f"position fen {DEFAULT_COMMANDS[1]}"
    assert commands[5] == "go depth 13"
    assert commands.count("go depth 13") == len(fens)


def test_setup_bench_current_position_with_list_args():
    commands = setup_bench(START_FEN, ["64", "4", "5000", "current", "movetime"])
    assert commands == [
        "setoption name Threads value 4",
        "setoption name Hash value 64",
        "ucinewgame",
        f"position fen {START_FEN}",
        "go movetime 5000",
    ]


def test_setup_bench_eval_limit_type():
    commands = setup_bench(START_FEN, "16 1 13 current eval")
    assert commands[-1] == "eval"
    assert commands[-2] == f"position fen {START_FEN}"


def test_setup_bench_reads_file(tmp_path):
    path = tmp_path / "fens.txt"
    other = "8/8/8/8/8/6k1/6p1/6K1 w - -"
    path.write_text(f"{START_FEN}\n\n{other}\n", encoding="utf-8")
    commands = setup_bench("", f"16 1 5 {path} perft")
    assert commands[3:] == [
        f"position fen {START_FEN}",
        "go perft 5",
        f"position fen {other}",
        "go perft 5",
    ]


def test_setup_bench_missing_file(tmp_path):
    missing = tmp_path / "absent.txt"
    with pytest.raises(OSError, match="Unable to open file"):
        setup_bench(START_FEN, f"16 1 13 {missing}")


def test_setup_benchmark_explicit_args():
    setup = setup_benchmark("4 512 150")
    assert isinstance(setup, BenchmarkSetup)
    assert setup.threads == 4
    assert setup.tt_size == 512
    assert setup.original_invocation == "4 512 150"
    assert setup.filled_invocation == "4 512 150"


def test_setup_benchmark_tt_size_follows_threads():
    setup = setup_benchmark(["2"])
    assert setup.threads == 2
    assert setup.tt_size == 256
    assert setup.original_invocation == "2"
    assert setup.filled_invocation == "2 256 150"


def test_setup_benchmark_bad_token_uses_defaults():
    setup = setup_benchmark("x 64 10")
    assert setup.original_invocation == ""
    assert setup.threads >= 1
    assert setup.tt_size == 128 * setup.threads
    assert setup.filled_invocation.endswith(" 150")


def test_setup_benchmark_command_layout():
    setup = setup_benchmark("1 16 150")
    positions = sum(len(game) for game in BENCHMARK_GAMES)
    games = len(BENCHMARK_GAMES)
    assert len(setup.commands) == games + games + 2 * positions
    assert setup.commands[:games] == ["ucinewgame"] * games
    assert setup.commands[games] == "ucinewgame"
    assert setup.commands[games + 1] == f"position fen {BENCHMARK_GAMES[0][0]}"
    assert setup.commands[games + 2].startswith("go movetime ")


def _movetimes(setup):
    return [int(c.split()[-1]) for c in setup.commands if c.startswith("go movetime ")]


def test_setup_benchmark_total_time_matches_duration():
    setup = setup_benchmark("1 16 150")
    times = _movetimes(setup)
    assert len(times) == sum(len(game) for game in BENCHMARK_GAMES)
    assert 150000 - len(times) <= sum(times) <= 150001


def test_setup_benchmark_movetimes_decrease_within_game():
    setup = setup_benchmark("1 16 150")
    times = iter(_movetimes(setup))
    for game in BENCHMARK_GAMES:
        per_game = [next(times) for _ in game]
        assert per_game == sorted(per_game, reverse=True)
        assert per_game[0] > per_game[-1]


def test_setup_benchmark_scales_with_duration():
    short = sum(_movetimes(setup_benchmark("1 16 10")))
    assert 10000 - 300 <= short <= 10001
    assert short < sum(_movetimes(setup_benchmark("1 16 150")))