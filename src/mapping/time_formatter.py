from __future__ import annotations


def format_time(minutes: int) -> str:
    """Render a duration in minutes as a Vietnamese label.

    45 -> "45 phút", 60 -> "1 giờ", 90 -> "1 giờ 30 phút".
    """
    if minutes < 0:
        raise ValueError(f"minutes must be non-negative, got {minutes}")

    if minutes < 60:
        return f"{minutes} phút"

    hours, rem = divmod(minutes, 60)
    if rem == 0:
        return f"{hours} giờ"
    return f"{hours} giờ {rem} phút"
