"""Static IATA code → (latitude, longitude) table used to place map markers."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

Coords = Tuple[float, float]

AIRPORT_COORDS: Dict[str, Coords] = {
    # ── North America ────────────────────────────────────────────
    "ATL": (33.6407, -84.4277),
    "BOS": (42.3656, -71.0096),
    "DEN": (39.8561, -104.6737),
    "DFW": (32.8998, -97.0403),
    "EWR": (40.6895, -74.1745),
    "IAD": (38.9531, -77.4565),
    "JFK": (40.6413, -73.7781),
    "LAX": (33.9416, -118.4085),
    "MEX": (19.4361, -99.0719),
    "MIA": (25.7959, -80.2870),
    "ORD": (41.9742, -87.9073),
    "SEA": (47.4502, -122.3088),
    "SFO": (37.6213, -122.3790),
    "YVR": (49.1967, -123.1815),
    "YYZ": (43.6777, -79.6248),
    # ── South America ────────────────────────────────────────────
    "EZE": (-34.8222, -58.5358),
    "GRU": (-23.4356, -46.4731),
    # ── Europe ───────────────────────────────────────────────────
    "AMS": (52.3105, 4.7683),
    "BCN": (41.2974, 2.0833),
    "CDG": (49.0097, 2.5479),
    "CPH": (55.6180, 12.6508),
    "DUB": (53.4264, -6.2499),
    "FCO": (41.8003, 12.2389),
    "FRA": (50.0379, 8.5622),
    "IST": (41.2753, 28.7519),
    "LGW": (51.1537, -0.1821),
    "LHR": (51.4700, -0.4543),
    "MAD": (40.4983, -3.5676),
    "MUC": (48.3537, 11.7750),
    "WAW": (52.1657, 20.9671),
    "ZRH": (47.4647, 8.5492),
    # ── Middle East / Africa ─────────────────────────────────────
    "AUH": (24.4330, 54.6511),
    "CAI": (30.1219, 31.4056),
    "DOH": (25.2731, 51.6081),
    "DXB": (25.2532, 55.3657),
    "JNB": (-26.1392, 28.2460),
    # ── Asia / Pacific ───────────────────────────────────────────
    "AKL": (-37.0082, 174.7850),
    "BKK": (13.6900, 100.7501),
    "BOM": (19.0896, 72.8656),
    "DEL": (28.5562, 77.1000),
    "HKG": (22.3080, 113.9185),
    "HND": (35.5494, 139.7798),
    "ICN": (37.4602, 126.4407),
    "KUL": (2.7456, 101.7072),
    "MEL": (-37.6690, 144.8410),
    "NRT": (35.7720, 140.3929),
    "PEK": (40.0799, 116.6031),
    "PVG": (31.1443, 121.8083),
    "SIN": (1.3644, 103.9915),
    "SYD": (-33.9399, 151.1753),
}


def lookup_coords(code: str | None) -> Optional[Coords]:
    """Return coordinates for *code* or ``None`` when it is not in the table."""
    if not code:
        return None
    return AIRPORT_COORDS.get(code.upper())


__all__ = ["AIRPORT_COORDS", "Coords", "lookup_coords"]
