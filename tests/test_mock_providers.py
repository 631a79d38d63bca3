import random

from pairing import get_pairing_list
from providers.models import ConsumerPolicy, Provider
from scripts.generate_mock_providers import generate_mock_providers, load_providers
from scripts.run_pairing_simulation import random_consumer_policy, run_request


def test_generated_pool_round_trips_through_csv(tmp_path):
    output = tmp_path / "providers.csv"

    df = generate_mock_providers(count=50, output_file=str(output), seed=1)
    providers = load_providers(str(output))

    assert len(providers) == 50
    assert all(isinstance(p, Provider) for p in providers)
    assert [p.address for p in providers] == list(df["address"])
    assert all(p.stake >= 0 for p in providers)


def test_load_keeps_namibia_and_empty_cells(tmp_path):
    """'NA' is a country code, not a missing value; empty cells stay empty."""
    path = tmp_path / "pool.csv"
    path.write_text(
        "address,stake,location,features\n"
        "lava@na,100,NA,eth|archive\n"
        "lava@bare,5,,\n"
    )

    na, bare = load_providers(str(path))

    assert na.location == "NA"
    assert na.features == frozenset({"eth", "archive"})
    assert bare.location == ""
    assert bare.features == frozenset()


def test_generated_pool_feeds_the_pairing_engine(tmp_path):
    output = tmp_path / "providers.csv"
    generate_mock_providers(count=300, output_file=str(output), seed=4)
    providers = load_providers(str(output))

    selected, error = get_pairing_list(providers, ConsumerPolicy.new())

    assert error is None
    assert len(selected) == 5


def test_simulated_requests_match_direct_calls(tmp_path):
    output = tmp_path / "providers.csv"
    generate_mock_providers(count=120, output_file=str(output), seed=9)
    providers = load_providers(str(output))
    rng = random.Random(3)

    for _ in range(30):
        policy = random_consumer_policy(rng)
        selected, error = get_pairing_list(providers, policy)

        # run_request shuffles its own copy of the pool first
        assert run_request(providers, policy) == (
            [p.address for p in selected],
            error.code if error else None,
        )
