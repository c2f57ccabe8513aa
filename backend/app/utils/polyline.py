"""Encoded polyline decoding (Google polyline algorithm, precision 5)."""


def _read_value(encoded: str, index: int) -> tuple[int, int]:
    shift = 0
    result = 0
    while True:
        if index >= len(encoded):
            raise ValueError("Truncated polyline")
        b = ord(encoded[index]) - 63
        if b < 0 or b > 63:
            raise ValueError(f"Invalid polyline character at position {index}")
        index += 1
        result |= (b & 0x1f) << shift
        shift += 5
        if b < 0x20:
            break
    value = ~(result >> 1) if result & 1 else result >> 1
    return value, index


def decode_polyline(encoded: str, precision: int = 5) -> list[list[float]]:
    """Decode a polyline string into ``[lat, lon]`` pairs.

    Raises:
        ValueError: If the string contains characters outside the polyline
            alphabet, ends mid-value, or decodes to out-of-range coordinates.
        TypeError: If ``encoded`` is not a string.
    """
    if not isinstance(encoded, str):
        raise TypeError(f"Polyline must be a string, got {type(encoded).__name__}")
    if not encoded:
        return []

    factor = 10 ** precision
    points = []
    index = 0
    lat = 0
    lng = 0

    while index < len(encoded):
        d_lat, index = _read_value(encoded, index)
        d_lng, index = _read_value(encoded, index)
        lat += d_lat
        lng += d_lng

        point_lat = round(lat / factor, precision)
        point_lng = round(lng / factor, precision)
        if abs(point_lat) > 90 or abs(point_lng) > 180:
            raise ValueError("Polyline decodes to out-of-range coordinates")
        points.append([point_lat, point_lng])

    return points
