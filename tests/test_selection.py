import random

import pytest

from pairing.scoring import PairingScore
from pairing.selection import rank_order, select_top_k
from providers.models import Provider


def _score(address: str, composite: float, stake: int = 1) -> PairingScore:
    return PairingScore(
        provider=Provider.new(address, stake),
        composite=composite,
        components={"stake": composite, "features": composite, "location": 1.0},
    )


def test_select_top_k_orders_by_descending_composite():
    scored = [_score("lava@c", 0.2), _score("lava@a", 0.9), _score("lava@b", 0.5)]

    top = select_top_k(scored, k=5)

    assert [s.address for s in top] == ["lava@a", "lava@b", "lava@c"]


def test_select_top_k_truncates_to_k():
    scored = [_score(f"lava@{i:02d}", i / 100) for i in range(20)]

    top = select_top_k(scored)

    assert len(top) == 5
    assert [s.address for s in top] == ["lava@19", "lava@18", "lava@17", "lava@16", "lava@15"]


def test_select_top_k_never_pads():
    assert select_top_k([_score("lava@a", 0.4)], k=5) == [_score("lava@a", 0.4)]
    assert select_top_k([], k=5) == []


def test_ties_break_by_address_ascending():
    """Equal composites always come back in address order, however they arrived."""
    scored = [_score(addr, 0.7) for addr in ["lava@d", "lava@b", "lava@e", "lava@a", "lava@c", "lava@f"]]
    rng = random.Random(1)

    for _ in range(20):
        rng.shuffle(scored)
        top = select_top_k(scored, k=5)
        assert [s.address for s in top] == ["lava@a", "lava@b", "lava@c", "lava@d", "lava@e"]


def test_duplicate_addresses_still_order_deterministically():
    scored = [_score("lava@dup", 0.5, stake=10), _score("lava@dup", 0.5, stake=20)]

    assert [s.provider.stake for s in select_top_k(scored)] == [20, 10]
    assert [s.provider.stake for s in select_top_k(list(reversed(scored)))] == [20, 10]


def test_select_top_k_agrees_with_full_sort():
    rng = random.Random(9)
    scored = [_score(f"lava@{i:03d}", round(rng.random(), 2)) for i in range(300)]

    assert select_top_k(scored, k=5) == rank_order(scored)[:5]


def test_select_top_k_rejects_non_positive_k():
    with pytest.raises(ValueError):
        select_top_k([_score("lava@a", 0.1)], k=0)
