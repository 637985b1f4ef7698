"""
Constellation line data — J2000 RA (hours) / Dec (degrees).

Line endpoints name their stars by display name; the catalog store binds
them to star ids once per catalog change. Segments whose stars are not in
the catalog are skipped. The cached coordinates place labels and outlines
even when the endpoint stars are missing.
"""

# (id, name, localized_name, abbreviation, [(from, to, ra1, dec1, ra2, dec2), ...])
CONSTELLATION_DATA = [
    (1, "Orion", "الجبار", "Ori", [
        ("Betelgeuse", "Alnilam", 5.9195,   7.4071, 5.6030, -1.2020),
        ("Alnilam",    "Saiph",   5.6030,  -1.2020, 5.6790, -9.6700),
    ]),
    (2, "Ursa Major", "الدب الأكبر", "UMa", [
        ("Dubhe", "Merak",  11.0620, 61.7510, 11.7670, 49.3130),
        ("Merak", "Alkaid", 11.7670, 49.3130, 13.7920, 49.3130),
    ]),
]


def get_constellation_data() -> list:
    return CONSTELLATION_DATA
