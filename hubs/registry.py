"""
Purpose: The fixed set of dispatch hubs.
What it does:
- Lists the hubs orders can be dispatched from, with their coordinates.
- Offers a lookup by hub id.

Hub reassignment is an external flow; this module only answers "what hubs exist".
"""

from __future__ import annotations

from typing import Dict, List, Optional

from hubs.models import Hub

DEFAULT_HUBS: List[Hub] = [
    Hub.new("kolkata", "Kolkata Hub", 22.5726, 88.3639),
    Hub.new("delhi", "Delhi Hub", 28.6139, 77.2090),
    Hub.new("mumbai", "Mumbai Hub", 19.0760, 72.8777),
    Hub.new("bangalore", "Bangalore Hub", 12.9716, 77.5946),
]

_HUBS_BY_ID: Dict[str, Hub] = {hub.id: hub for hub in DEFAULT_HUBS}


def get_hub(hub_id: str) -> Optional[Hub]:
    return _HUBS_BY_ID.get(hub_id)
