"""
Naked-eye planets shown on the dome.

Format: (id, name, localized_name, symbol, color, radius, orbit_radius)
  radius       — relative display size (Jupiter = 1.0)
  orbit_radius — mean distance from the Sun, 10^6 km (informational)
"""

PLANET_DATA = [
    (1, "Mercury", "عطارد",   "☿", 0x8C7853, 0.4,   57.9),
    (2, "Venus",   "الزهرة",  "♀", 0xFFC649, 0.9,  108.2),
    (3, "Mars",    "المريخ",  "♂", 0xFF0000, 0.5,  227.9),
    (4, "Jupiter", "المشتري", "♃", 0xFFA726, 1.0,  778.5),
    (5, "Saturn",  "زحل",     "♄", 0xF4C542, 0.8, 1434.0),
]
