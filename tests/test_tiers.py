# tests/test_tiers.py
from uwledger.ledger.contracts import Err, ErrorKind, Ok
from uwledger.ledger.tiers import base_premium, derive_tier


def test_bands_partition_zero_to_hundred():
    expected = {0: 1, 20: 1, 21: 2, 40: 2, 41: 3, 60: 3, 61: 4, 80: 4, 81: 5, 100: 5}
    for score, tier in expected.items():
        assert derive_tier(score) == tier
    tiers = [derive_tier(s) for s in range(0, 101)]
    # non-decreasing; 0-20 holds 21 scores, the rest 20 each
    assert tiers == sorted(tiers)
    assert [tiers.count(t) for t in range(1, 6)] == [21, 20, 20, 20, 20]


def test_base_premium_looks_up_rate():
    rates = {1: 100, 2: 500, 3: 800, 4: 1100, 5: 1500}
    assert base_premium(35, rates) == Ok(500)
    assert base_premium(81, rates) == Ok(1500)


def test_base_premium_errors():
    assert base_premium(101, {5: 1500}) == Err(ErrorKind.SCORE_OUT_OF_RANGE)
    assert base_premium(50, {1: 100}) == Err(ErrorKind.TIER_RATE_NOT_CONFIGURED)
    # a zero rate is configured, not missing
    assert base_premium(50, {3: 0}) == Ok(0)
