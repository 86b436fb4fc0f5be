"""Sign records and render requests.

A sign is one entry of the sign data file. Its keys are Chinese in the
published data (签号, 幸运指数, ...); English keys are accepted as well.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple


STAR = "★"

# Display order of the categorized fortunes
CATEGORY_ORDER: Tuple[str, ...] = (
    "健康",
    "财运",
    "感情",
    "考学",
    "事业",
    "人际",
    "纠纷",
    "远行",
)

# Translation key for each category title
CATEGORY_LABEL_KEYS: Dict[str, str] = {
    "健康": "healthTitle",
    "财运": "wealthLuckTitle",
    "感情": "loveLifeTitle",
    "考学": "examsTitle",
    "事业": "careerTitle",
    "人际": "interpersonalRelationshipsTitle",
    "纠纷": "disputesTitle",
    "远行": "longJourneysTitle",
}

# attribute -> (data file key, english key)
_FIELD_KEYS: Dict[str, Tuple[str, str]] = {
    "id": ("签号", "id"),
    "luck_index": ("幸运指数", "luck_index"),
    "prophecy_text": ("远古预言", "prophecy_text"),
    "fortune_text": ("整体运程", "fortune_text"),
    "summary_text": ("总结", "summary_text"),
    "outfit_advice": ("穿搭建议", "outfit_advice"),
    "lucky_charm": ("开运锦囊", "lucky_charm"),
    "mantra_title": ("文件标题", "mantra_title"),
    "mantra_sanskrit": ("梵文", "mantra_sanskrit"),
    "mantra_meaning": ("咒语含义", "mantra_meaning"),
    "mantra_file": ("文件名", "mantra_file"),
    "example_text": ("解读举例", "example_text"),
}


class LuckTier(Enum):
    """Theme tier picked from the star rating."""

    VERY_LUCKY = "very-lucky"
    LUCKY = "lucky"
    NEUTRAL = "neutral"
    UNLUCKY = "unlucky"
    VERY_UNLUCKY = "very-unlucky"


def luck_tier(level: int) -> LuckTier:
    """Map a star count to its theme tier.

    Six stars share the five-star tier; the rating scale tops out at 6 but
    the themes only go to 5.
    """
    if level in (5, 6):
        return LuckTier.VERY_LUCKY
    if level == 4:
        return LuckTier.LUCKY
    if level == 3:
        return LuckTier.NEUTRAL
    if level == 2:
        return LuckTier.UNLUCKY
    return LuckTier.VERY_UNLUCKY


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class SignRecord:
    """One fortune sign."""

    id: str = ""
    luck_index: str = ""
    prophecy_text: str = ""
    fortune_text: str = ""
    summary_text: str = ""
    categorized_fortunes: Mapping[str, str] = field(default_factory=dict)
    outfit_advice: str = ""
    lucky_charm: str = ""
    mantra_title: str = ""
    mantra_sanskrit: str = ""
    mantra_meaning: str = ""
    mantra_file: str = ""
    example_text: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SignRecord":
        """Build a record from a sign data entry.

        Missing or null fields become empty strings.
        """
        values: Dict[str, Any] = {}
        for attr, (zh_key, en_key) in _FIELD_KEYS.items():
            raw = data.get(zh_key, data.get(en_key))
            values[attr] = _text(raw)

        categories = data.get("分类运程", data.get("categorized_fortunes")) or {}
        if not isinstance(categories, Mapping):
            categories = {}
        values["categorized_fortunes"] = MappingProxyType(
            {str(k): _text(v) for k, v in categories.items()}
        )
        return cls(**values)

    @property
    def luck_level(self) -> int:
        """Number of stars in the luck index."""
        return self.luck_index.count(STAR)

    @property
    def tier(self) -> LuckTier:
        return luck_tier(self.luck_level)

    def fortunes_in_order(self) -> List[Tuple[str, str]]:
        """Categorized fortunes in display order, skipping absent categories."""
        return [
            (key, self.categorized_fortunes[key])
            for key in CATEGORY_ORDER
            if key in self.categorized_fortunes
        ]


@dataclass(frozen=True)
class RenderRequest:
    """Everything the card composer needs for one render."""

    sign: SignRecord
    user_request: str = ""
    language: str = "zh"
    translations: Mapping[str, str] = field(default_factory=dict)
    issued_on: date = field(default_factory=date.today)

    def label(self, key: str, default: str) -> str:
        """Translated label, or the built-in default when missing or empty."""
        return self.translations.get(key) or default
