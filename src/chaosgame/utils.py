import math

# Far outside any grid, yet exact as both a float and an int64
COORDINATE_LIMIT = 2 ** 52


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero (C ``round``)."""
    fraction, whole = math.modf(abs(value))
    rounded = whole + 1 if fraction >= 0.5 else whole
    return int(math.copysign(rounded, value))


def saturate_coordinate(value: float) -> int:
    """
    Round a grid coordinate, pinning runaway values at +-COORDINATE_LIMIT.

    Values this large are off every grid either way; pinning keeps later
    jumps finite when the percentage extrapolates (above 200 % the distance
    to the vertex grows with every jump).
    """
    if math.isnan(value):
        return COORDINATE_LIMIT
    if abs(value) >= COORDINATE_LIMIT:
        return int(math.copysign(COORDINATE_LIMIT, value))
    return round_half_away_from_zero(value)
