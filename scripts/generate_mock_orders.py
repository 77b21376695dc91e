import pandas as pd
import numpy as np
from datetime import datetime, timezone, timedelta

from hubs.registry import DEFAULT_HUBS
from orders.models import MembershipTier


def generate_mock_orders(num_orders=200, spread_km=60.0, output_file="raw_orders_generated.csv"):
    """
    Generates a dataset of customer orders scattered around the dispatch hubs.
    Customers are spread wide enough (spread_km) that a share of them falls
    outside the 40 km hub limit, so the holding path gets exercised too.
    A few rows drop their coordinates entirely to model "location unknown".
    """
    # ~111 km per degree of latitude
    spread_deg = spread_km / 111.0

    tiers = [tier.value for tier in MembershipTier]
    now = datetime.now(timezone.utc)
    data = []

    for order_index in range(num_orders):
        hub = DEFAULT_HUBS[np.random.randint(0, len(DEFAULT_HUBS))]

        lat = hub.location.lat + np.random.uniform(-spread_deg, spread_deg)
        lng = hub.location.lng + np.random.uniform(-spread_deg, spread_deg)
        missing_location = np.random.random() < 0.05

        tier = np.random.choice(tiers, p=[0.5, 0.25, 0.15, 0.1])

        data.append({
            "order_id": f"o_{str(order_index+1).zfill(6)}",
            "created_at": (now - timedelta(minutes=int(np.random.randint(0, 60)))).isoformat(),
            "hub_id": hub.id,
            "membership_tier": tier,
            "express_delivery": bool(tier == "gold" and np.random.random() < 0.5),
            "customer_lat": None if missing_location else np.round(lat, 6),
            "customer_lng": None if missing_location else np.round(lng, 6),
        })

    df = pd.DataFrame(data)
    df.to_csv(output_file, index=False)
    print(f"Generated {num_orders} orders and saved to '{output_file}'")

    print("\nOrders per hub:")
    for hub_id, count in df["hub_id"].value_counts().items():
        print(f"  {hub_id}: {count} orders")


if __name__ == "__main__":
    generate_mock_orders(num_orders=200, output_file="raw_orders_generated.csv")
