from conftest import make_game
from minesweeper_engine import NullTimer, Stopwatch


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_stopwatch_counts_whole_seconds():
    clock = FakeClock()
    watch = Stopwatch(clock)
    assert watch.elapsed_seconds == 0

    watch.start()
    clock.now += 2.7
    assert watch.running
    assert watch.elapsed_seconds == 2

    watch.stop()
    clock.now += 50
    assert not watch.running
    assert watch.elapsed_seconds == 2


def test_stopwatch_ignores_second_start():
    clock = FakeClock()
    watch = Stopwatch(clock)
    watch.start()
    clock.now += 5
    watch.start()
    clock.now += 1
    assert watch.elapsed_seconds == 6


def test_stopwatch_reset():
    clock = FakeClock()
    watch = Stopwatch(clock)
    watch.start()
    clock.now += 3
    watch.reset()
    assert watch.elapsed_seconds == 0
    assert not watch.running


def test_null_timer():
    timer = NullTimer()
    timer.start()
    timer.stop()
    timer.reset()
    assert timer.elapsed_seconds == 0


def test_engine_drives_stopwatch():
    clock = FakeClock()
    game = make_game(3, 3, [(1, 1)], timer=Stopwatch(clock))
    clock.now += 10
    assert game.elapsed_seconds == 0

    game.reveal(0, 0)
    clock.now += 4
    assert game.elapsed_seconds == 4
    assert game.snapshot().elapsed_seconds == 4

    game.reveal(1, 1)
    clock.now += 30
    assert game.elapsed_seconds == 4

    game.reset()
    assert game.elapsed_seconds == 0
