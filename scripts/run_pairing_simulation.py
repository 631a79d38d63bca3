import os
import random
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

from pairing import PairingPolicy, get_pairing_list, pairing_policy_from_env
from pairing.errors import PairingError
from providers.models import ConsumerPolicy, Provider
from scripts.generate_mock_providers import FEATURES, LOCATIONS, generate_mock_providers, load_providers


def random_consumer_policy(rng: random.Random) -> ConsumerPolicy:
    location = rng.choice(LOCATIONS + [""] * 4)  # most consumers don't care
    required = rng.sample(FEATURES, k=rng.randint(0, 2))
    min_stake = rng.choice([0, 0, 1_000, 20_000, 100_000])

    # Roughly 1 in 50 requests arrives malformed
    if rng.random() < 0.02:
        min_stake = -1

    return ConsumerPolicy.new(required_location=location, required_features=required, min_stake=min_stake)


def run_request(
    providers: List[Provider],
    policy: ConsumerPolicy,
    pairing_policy: Optional[PairingPolicy] = None,
) -> Tuple[List[str], Optional[str]]:
    # Shuffle a private copy: the ranking must not depend on pool order
    pool = list(providers)
    random.shuffle(pool)
    selected, error = get_pairing_list(pool, policy, pairing_policy=pairing_policy)
    return [p.address for p in selected], (error.code if isinstance(error, PairingError) else None)


def run_simulation(requests=500, workers=16, seed=11):
    print("=== STARTING CONCURRENT PAIRING SIMULATION ===")

    # 1. Load Data
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    pool_path = os.path.join(base_dir, "mock_providers.csv")
    if not os.path.exists(pool_path):
        generate_mock_providers(count=1000, output_file=pool_path, seed=seed)
    providers = load_providers(pool_path)
    print(f"Loaded {len(providers)} Providers.\n")

    # 2. Build consumer requests
    rng = random.Random(seed)
    policies = [random_consumer_policy(rng) for _ in range(requests)]
    pairing_policy = pairing_policy_from_env()

    # 3. Fire them concurrently
    print(f"Running {requests} pairing requests on {workers} threads...")
    start_time = time.time()
    with ThreadPoolExecutor(max_workers=workers) as executor:
        concurrent_results = list(executor.map(lambda p: run_request(providers, p, pairing_policy), policies))
    elapsed = time.time() - start_time
    print(f"Finished in {elapsed:.2f}s.\n")

    # 4. Re-run sequentially and compare
    mismatches = 0
    for policy, result in zip(policies, concurrent_results):
        selected, error = get_pairing_list(providers, policy, pairing_policy=pairing_policy)
        expected = ([p.address for p in selected], error.code if error else None)
        if expected != result:
            mismatches += 1
            print(f"[MISMATCH] {policy} -> concurrent={result} sequential={expected}")

    outcomes = Counter(code or "ok" for _, code in concurrent_results)

    print("=== SIMULATION COMPLETE ===")
    for outcome, count in outcomes.most_common():
        print(f"  {outcome}: {count}")
    print(f"Sequential mismatches: {mismatches} / {requests}")
    return mismatches


if __name__ == "__main__":
    run_simulation()
