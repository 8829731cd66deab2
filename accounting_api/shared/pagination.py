def clamp(value: int, low: int, high: int) -> int:
    """Bound a requested page size into [low, high]"""
    return min(max(value, low), high)
