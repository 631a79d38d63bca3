import pytest

from pairing.policy import (
    LocationMode,
    PairingPolicy,
    default_pairing_policy,
    pairing_policy_from_env,
)
from providers.models import ConsumerPolicy

ENV_NAMES = [
    "PAIRING_TOP_K",
    "PAIRING_STAKE_WEIGHT",
    "PAIRING_FEATURE_WEIGHT",
    "PAIRING_LOCATION_WEIGHT",
    "PAIRING_LOCATION_MODE",
    "PAIRING_LOCATION_MISMATCH_SCORE",
    "PAIRING_PARALLEL_THRESHOLD",
    "PAIRING_MAX_WORKERS",
]


@pytest.fixture
def clean_pairing_env(monkeypatch):
    # setenv first so monkeypatch restores "unset" afterwards, even if
    # load_dotenv writes the variable during the test
    for name in ENV_NAMES:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return monkeypatch


def test_default_policy_values():
    p = default_pairing_policy()

    assert p.top_k == 5
    assert (p.stake_weight, p.feature_weight, p.location_weight) == (0.5, 0.3, 0.2)
    assert p.location_mode == LocationMode.HARD


@pytest.mark.parametrize(
    "kwargs",
    [
        {"top_k": 0},
        {"stake_weight": -0.1, "feature_weight": 0.9, "location_weight": 0.2},
        {"stake_weight": 0.5, "feature_weight": 0.5, "location_weight": 0.5},
        {"location_mismatch_score": 1.5},
        {"parallel_threshold": 0},
        {"max_workers": 0},
    ],
)
def test_validate_rejects_bad_tunables(kwargs):
    with pytest.raises(ValueError):
        PairingPolicy(**kwargs).validate()


def test_policy_from_env_reads_overrides(clean_pairing_env, tmp_path):
    clean_pairing_env.setenv("PAIRING_TOP_K", "3")
    clean_pairing_env.setenv("PAIRING_LOCATION_MODE", "SOFT")

    p = pairing_policy_from_env(env_file=str(tmp_path / "missing.env"))

    assert p.top_k == 3
    assert p.location_mode == LocationMode.SOFT
    assert p.stake_weight == 0.5


def test_policy_from_env_loads_dotenv_file(clean_pairing_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "PAIRING_STAKE_WEIGHT=0.6\n"
        "PAIRING_FEATURE_WEIGHT=0.2\n"
        "PAIRING_LOCATION_WEIGHT=0.2\n"
        "PAIRING_MAX_WORKERS=8\n"
    )

    p = pairing_policy_from_env(env_file=str(env_file))

    assert (p.stake_weight, p.feature_weight, p.location_weight) == (0.6, 0.2, 0.2)
    assert p.max_workers == 8


def test_policy_from_env_rejects_garbage(clean_pairing_env, tmp_path):
    clean_pairing_env.setenv("PAIRING_LOCATION_MODE", "sometimes")

    with pytest.raises(ValueError, match="PAIRING_LOCATION_MODE"):
        pairing_policy_from_env(env_file=str(tmp_path / "missing.env"))


def test_consumer_policy_problems():
    assert ConsumerPolicy.new().problems() == []
    assert ConsumerPolicy.new("US", ["eth"], 0).problems() == []

    problems = ConsumerPolicy.new("usa", ["eth", " "], -1).problems()
    assert len(problems) == 3
    assert any("min_stake" in p for p in problems)
    assert any("required_location" in p for p in problems)
    assert any("required feature" in p for p in problems)
