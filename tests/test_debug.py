import threading

import pytest

from fishbench.debug import MAX_DEBUG_SLOTS, DebugStats


def test_empty_report():
    assert DebugStats().report() == ""


def test_hit_on_all_hits():
    stats = DebugStats()
    for _ in range(4):
        stats.hit_on(True)
    assert stats.report() == "Hit #0: Total 4 Hits 4 Hit Rate (%) 100\n"


def test_hit_on_no_hits():
    stats = DebugStats()
    stats.hit_on(False, 3)
    stats.hit_on(False, 3)
    assert stats.report() == "Hit #3: Total 2 Hits 0 Hit Rate (%) 0\n"


def test_mean_of_constant_samples():
    stats = DebugStats()
    for _ in range(3):
        stats.mean_of(5, 1)
    assert stats.report() == "Mean #1: Total 3 Mean 5\n"


def test_stdev_of_constant_samples_is_zero():
    stats = DebugStats()
    for _ in range(5):
        stats.stdev_of(9)
    assert stats.report() == "Stdev #0: Total 5 Stdev 0\n"


def test_extremes_of_tracks_min_and_max():
    stats = DebugStats()
    for value in (3, -7, 10, 2):
        stats.extremes_of(value, 2)
    assert stats.report() == "Extremity #2: Total 4 Min -7 Max 10\n"


def test_correl_of_linear_relation():
    stats = DebugStats()
    for x in (1, 2, 3, 4):
        stats.correl_of(x, 2 * x + 1)
    assert stats.report() == "Correl. #0: Total 4 Coefficient 1\n"


def test_correl_of_inverse_relation():
    stats = DebugStats()
    for x in (1, 2, 3):
        stats.correl_of(x, -x)
    assert stats.report() == "Correl. #0: Total 3 Coefficient -1\n"


def test_report_orders_kinds_and_slots():
    stats = DebugStats()
    stats.extremes_of(1)
    stats.mean_of(4, 5)
    stats.hit_on(True, 7)
    stats.hit_on(True, 1)
    lines = stats.report().splitlines()
    assert [line.split(":")[0] for line in lines] == ["Hit #1", "Hit #7", "Mean #5", "Extremity #0"]


def test_clear_resets_everything():
    stats = DebugStats()
    stats.hit_on(True)
    stats.mean_of(3)
    stats.stdev_of(3)
    stats.extremes_of(3)
    stats.correl_of(1, 2)
    stats.clear()
    assert stats.report() == ""


@pytest.mark.parametrize("slot", [-1, MAX_DEBUG_SLOTS])
def test_slot_out_of_range(slot):
    stats = DebugStats()
    with pytest.raises(IndexError):
        stats.hit_on(True, slot)
    with pytest.raises(IndexError):
        stats.correl_of(1, 2, slot)


def test_concurrent_hits_are_all_counted():
    stats = DebugStats()

    def work():
        for _ in range(500):
            stats.hit_on(True, 4)

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert stats.report().startswith("Hit #4: Total 2000 Hits 2000 ")