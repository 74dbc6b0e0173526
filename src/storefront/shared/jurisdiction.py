"""Postal code to state/territory lookup.

Ranges are inclusive on the five-digit prefix of a ZIP or ZIP+4 code and
do not overlap. Military (AA/AE/AP) ranges are absent: the
merchant does not ship there.
"""

import re

ZIP_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")

_ZIP_RANGES: tuple[tuple[int, int, str], ...] = (
    (600, 799, "PR"),
    (800, 899, "VI"),
    (900, 999, "PR"),
    (1000, 2799, "MA"),
    (2800, 2999, "RI"),
    (3000, 3899, "NH"),
    (3900, 4999, "ME"),
    (5000, 5999, "VT"),
    (6000, 6999, "CT"),
    (7000, 8999, "NJ"),
    (10000, 14999, "NY"),
    (15000, 19699, "PA"),
    (19700, 19999, "DE"),
    (20000, 20599, "DC"),
    (20600, 21999, "MD"),
    (22000, 24699, "VA"),
    (24700, 26999, "WV"),
    (27000, 28999, "NC"),
    (29000, 29999, "SC"),
    (30000, 31999, "GA"),
    (32000, 34999, "FL"),
    (35000, 36999, "AL"),
    (37000, 38599, "TN"),
    (38600, 39799, "MS"),
    (39800, 39999, "GA"),
    (40000, 42799, "KY"),
    (43000, 45999, "OH"),
    (46000, 47999, "IN"),
    (48000, 49999, "MI"),
    (50000, 52899, "IA"),
    (53000, 54999, "WI"),
    (55000, 56799, "MN"),
    (57000, 57799, "SD"),
    (58000, 58899, "ND"),
    (59000, 59999, "MT"),
    (60000, 62999, "IL"),
    (63000, 65899, "MO"),
    (66000, 67999, "KS"),
    (68000, 69399, "NE"),
    (70000, 71599, "LA"),
    (71600, 72999, "AR"),
    (73000, 74999, "OK"),
    (75000, 79999, "TX"),
    (80000, 81699, "CO"),
    (82000, 83199, "WY"),
    (83200, 83899, "ID"),
    (84000, 84799, "UT"),
    (85000, 86599, "AZ"),
    (87000, 88499, "NM"),
    (88500, 88599, "TX"),
    (88900, 89899, "NV"),
    (90000, 96199, "CA"),
    (96700, 96798, "HI"),
    (96799, 96799, "AS"),
    (96800, 96899, "HI"),
    (96910, 96932, "GU"),
    (96950, 96952, "MP"),
    (97000, 97999, "OR"),
    (98000, 99499, "WA"),
    (99500, 99999, "AK"),
)

DOMESTIC_STATES = frozenset(state for _, _, state in _ZIP_RANGES)


def is_valid_zip(zip_code: str | None) -> bool:
    return bool(zip_code) and ZIP_PATTERN.match(zip_code) is not None


def state_for_zip(zip_code: str | None) -> str | None:
    """Return the two-letter state for a ZIP code, or None when unrecognised."""
    if not is_valid_zip(zip_code):
        return None

    prefix = int(zip_code[:5])
    for low, high, state in _ZIP_RANGES:
        if low <= prefix <= high:
            return state
    return None


def normalize_state(state: str | None) -> str | None:
    if not state:
        return None
    state = state.strip().upper()
    return state or None
