from routekit.timestamp_flag import TimestampFlags


def test_set_and_reset_one():
    flags = TimestampFlags(5)
    assert not any(flags.is_set(i) for i in range(5))
    flags.set(2)
    flags.set(4)
    assert [flags.is_set(i) for i in range(5)] == [False, False, True, False, True]
    flags.reset_one(2)
    assert not flags.is_set(2)
    assert flags.is_set(4)


def test_reset_all_clears_every_flag():
    flags = TimestampFlags(4)
    for i in range(4):
        flags.set(i)
    flags.reset_all()
    assert not any(flags.is_set(i) for i in range(4))
    flags.set(1)
    assert flags.is_set(1)


def test_stale_flags_never_return_across_wraparound():
    flags = TimestampFlags(3)
    flags.set(0)
    flags.set(1)
    seen = []
    for _ in range(70000):
        flags.reset_all()
        seen.append(flags.is_set(0) or flags.is_set(1))
    assert not any(seen)
    flags.set(2)
    assert flags.is_set(2)
    assert not flags.is_set(0)


def test_flags_set_after_reset_survive_until_next_reset():
    flags = TimestampFlags(2)
    for _ in range(65540):
        flags.reset_all()
        flags.set(0)
        assert flags.is_set(0)
        assert not flags.is_set(1)