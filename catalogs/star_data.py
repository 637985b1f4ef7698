"""
Embedded bright-star sample.

Format: (id, name, localized_name, bayer, ra_hours, dec_deg, mag, spectral_type, distance_ly)
J2000 positions. Extra stars come from an external source merged at startup.
"""

STAR_DATA = [
    (1, "Sirius",  "الشعرى اليمانية", "α CMa",  6.7525, -16.7161, -1.46, "A1V",   8.6),
    (2, "Canopus", "سهيل",           "α Car",  6.3992, -52.6957, -0.72, "F0II", 310.0),
    (3, "Vega",    "النسر الواقع",    "α Lyr", 18.6156,  38.7836,  0.03, "A0V",  25.3),
]
