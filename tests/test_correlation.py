from celine.broker_auth.delegate.correlation import (
    DASH_POSITIONS,
    CorrelationIdGenerator,
    default_generator,
    is_correlation_id,
)


def test_layout_holds_for_many_samples():
    gen = CorrelationIdGenerator()
    for _ in range(10_000):
        value = gen.next()
        assert len(value) == 36
        for i, ch in enumerate(value):
            if i in (8, 13, 18, 23):
                assert ch == "-"
            else:
                assert ch in "0123456789abcdef"


def test_dash_positions():
    assert DASH_POSITIONS == (8, 13, 18, 23)


def test_same_seed_same_sequence():
    a = CorrelationIdGenerator(seed=42)
    b = CorrelationIdGenerator(seed=42)
    assert [a.next() for _ in range(5)] == [b.next() for _ in range(5)]


def test_consecutive_ids_differ():
    gen = CorrelationIdGenerator(seed=1)
    ids = {gen.next() for _ in range(1000)}
    assert len(ids) > 990


def test_default_generator_is_well_formed():
    assert is_correlation_id(default_generator.next())


def test_is_correlation_id_rejects_bad_layouts():
    assert is_correlation_id("3fb17ebc-bc38-4939-bc8b-74f2443281d4")
    assert not is_correlation_id("3FB17EBC-BC38-4939-BC8B-74F2443281D4")
    assert not is_correlation_id("3fb17ebcbc38-4939-bc8b-74f2443281d4a")
    assert not is_correlation_id("3fb17ebc-bc38-4939-bc8b-74f2443281d")
    assert not is_correlation_id("3fb17ebc-bc38-4939-bc8b-74f2443281d4\n")
    assert not is_correlation_id(" 3fb17ebc-bc38-4939-bc8b-74f2443281d4")
    assert not is_correlation_id("3fb17ebc-bc38-4939-bc8b-74f2443281g4")
