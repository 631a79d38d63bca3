from typing import List, Optional

import numpy as np
import pandas as pd

from providers.models import Provider

LOCATIONS = ["US", "DE", "FR", "GB", "JP", "SG", "BR", "NA", ""]
LOCATION_WEIGHTS = [0.3, 0.15, 0.1, 0.1, 0.1, 0.1, 0.05, 0.05, 0.05]
FEATURES = ["eth", "archive", "trace", "ws", "grpc", "debug", "lava"]
FEATURE_SEPARATOR = "|"


def generate_mock_providers(count=200, output_file="mock_providers.csv", seed: Optional[int] = None):
    """
    Generates a realistic provider pool for pairing simulations.
    Stakes are heavy-tailed (a few whales, many small providers) and a
    handful of providers share the same stake so tiebreaks get exercised.
    """
    rng = np.random.default_rng(seed)

    data = []
    for provider_index in range(count):
        # Log-normal stake, occasionally snapped to a round number to create ties
        stake = int(rng.lognormal(mean=10.0, sigma=1.2))
        if rng.random() < 0.1:
            stake = 50_000

        feature_count = int(rng.integers(0, len(FEATURES) + 1))
        features = sorted(rng.choice(FEATURES, size=feature_count, replace=False).tolist())

        data.append({
            "address": f"lava@{str(provider_index + 1).zfill(5)}",
            "stake": stake,
            "location": str(rng.choice(LOCATIONS, p=LOCATION_WEIGHTS)),
            "features": FEATURE_SEPARATOR.join(features),
        })

    df = pd.DataFrame(data, columns=["address", "stake", "location", "features"])
    df.to_csv(output_file, index=False)
    print(f"Generated {count} providers and saved to '{output_file}'")

    print("\nProviders per location:")
    counts = df["location"].replace("", "(none)").value_counts()
    for location, location_count in counts.items():
        print(f"  {location}: {location_count}")

    return df


def load_providers(filepath="mock_providers.csv") -> List[Provider]:
    # keep_default_na=False: "NA" is Namibia, and empty cells stay empty strings
    df = pd.read_csv(filepath, keep_default_na=False, dtype={"address": str, "location": str, "features": str})

    providers = []
    for row in df.itertuples(index=False):
        features = [f for f in row.features.split(FEATURE_SEPARATOR) if f]
        providers.append(Provider.new(row.address, int(row.stake), row.location, features))
    return providers


if __name__ == "__main__":
    generate_mock_providers(count=1000, seed=7)
