"""Grammar constants for WKT-like polygon text."""

from __future__ import annotations

# Shape keywords, stripped before splitting.  MULTIPOLYGON is checked first.
MULTIPOLYGON_PREFIX = "MULTIPOLYGON "
POLYGON_PREFIX = "POLYGON "

# Boundary between two rings: "...5 6), (7 8...".
RING_DELIMITER = "), ("

# Boundary between two points inside a ring: "1 2, 3 4".
POINT_DELIMITER = ", "

# Separator between longitude and latitude inside a point: "1 2".
COORDINATE_SEPARATOR = " "

# Parentheses left over at the first and last ring by the ring split.
GROUPING_CHARS = str.maketrans("", "", "()")

# Number of coordinates in a point token.
POINT_DIMENSIONS = 2
