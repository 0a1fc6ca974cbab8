import pytest

from voo.retry import RetryPolicy


def test_delays_grow_and_cap():
    policy = RetryPolicy(initial_delay=1.0, max_delay=5.0, jitter=False)

    assert [policy.get_delay(n) for n in range(4)] == [1.0, 2.0, 4.0, 5.0]


def test_jitter_stays_in_band():
    policy = RetryPolicy(initial_delay=2.0, jitter=True)

    for _ in range(50):
        assert 1.0 <= policy.get_delay(0) < 3.0


def test_none_means_single_attempt():
    assert RetryPolicy.none().max_attempts == 1


@pytest.mark.parametrize("kwargs", [{"max_attempts": 0}, {"initial_delay": -1.0}])
def test_rejects_invalid_policy(kwargs):
    with pytest.raises(ValueError):
        RetryPolicy(**kwargs)
