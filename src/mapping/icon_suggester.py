from __future__ import annotations

import unicodedata
from typing import Optional, Tuple

DEFAULT_ICON = "tag"

# Order matters: the first keyword found in the topic name wins.
ICON_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("họp", "users"),
    ("meeting", "users"),
    ("lập trình", "code"),
    ("phát triển", "code"),
    ("code", "code"),
    ("dev", "code"),
    ("học", "book"),
    ("study", "book"),
    ("learn", "book"),
    ("marketing", "megaphone"),
    ("quảng cáo", "megaphone"),
    ("thiết kế", "palette"),
    ("design", "palette"),
    ("sức khỏe", "heart"),
    ("health", "heart"),
    ("gym", "heart"),
    ("tài chính", "dollar-sign"),
    ("finance", "dollar-sign"),
    ("mua sắm", "shopping-cart"),
    ("shopping", "shopping-cart"),
    ("gia đình", "home"),
    ("family", "home"),
    ("du lịch", "plane"),
    ("travel", "plane"),
    ("email", "mail"),
    ("công việc", "briefcase"),
    ("work", "briefcase"),
)


def suggest_icon(topic_name: Optional[str]) -> str:
    if not topic_name:
        return DEFAULT_ICON

    folded = unicodedata.normalize("NFC", topic_name).casefold()
    for keyword, icon in ICON_KEYWORDS:
        if keyword in folded:
            return icon
    return DEFAULT_ICON
