# luachcal/daf_hayomi.py
"""
Daf HaYomi (דף היומי)

Maps a civil date onto the 2,711-day Daf Yomi cycle.

  format_daf(pos)               → "Berachos 2"
  format_daf(pos, hebrew=True)  → "ברכות דף ב׳"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

from .const import DAF_YOMI_EPOCH, DAF_YOMI_EPOCH_CYCLE
from .luach_lib.helper import int_to_hebrew

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Masechta:
    name: str
    name_hebrew: str
    pages: int

    @property
    def last_daf(self) -> int:
        return self.pages + 1


@dataclass(frozen=True)
class ReadingPosition:
    masechta: str
    masechta_hebrew: str
    daf: int
    daf_hebrew: str
    cycle_number: int
    day_in_cycle: int           # 1-based


# Each masechta starts at daf 2, so pages = last daf - 1.
# Meilah carries the Kinnim, Tamid and Middos pages.
MASECHTOS: tuple[Masechta, ...] = (
    Masechta("Berachos", "ברכות", 63),
    Masechta("Shabbos", "שבת", 156),
    Masechta("Eruvin", "עירובין", 104),
    Masechta("Pesachim", "פסחים", 120),
    Masechta("Shekalim", "שקלים", 21),
    Masechta("Yoma", "יומא", 87),
    Masechta("Sukkah", "סוכה", 55),
    Masechta("Beitzah", "ביצה", 39),
    Masechta("Rosh Hashanah", "ראש השנה", 34),
    Masechta("Taanis", "תענית", 30),
    Masechta("Megillah", "מגילה", 31),
    Masechta("Moed Katan", "מועד קטן", 28),
    Masechta("Chagigah", "חגיגה", 26),
    Masechta("Yevamos", "יבמות", 121),
    Masechta("Kesubos", "כתובות", 111),
    Masechta("Nedarim", "נדרים", 90),
    Masechta("Nazir", "נזיר", 65),
    Masechta("Sotah", "סוטה", 48),
    Masechta("Gittin", "גיטין", 89),
    Masechta("Kiddushin", "קידושין", 81),
    Masechta("Bava Kamma", "בבא קמא", 118),
    Masechta("Bava Metzia", "בבא מציעא", 118),
    Masechta("Bava Basra", "בבא בתרא", 175),
    Masechta("Sanhedrin", "סנהדרין", 112),
    Masechta("Makkos", "מכות", 23),
    Masechta("Shevuos", "שבועות", 48),
    Masechta("Avodah Zarah", "עבודה זרה", 75),
    Masechta("Horayos", "הוריות", 13),
    Masechta("Zevachim", "זבחים", 119),
    Masechta("Menachos", "מנחות", 109),
    Masechta("Chullin", "חולין", 141),
    Masechta("Bechoros", "בכורות", 60),
    Masechta("Arachin", "ערכין", 33),
    Masechta("Temurah", "תמורה", 33),
    Masechta("Kerisus", "כריתות", 27),
    Masechta("Meilah", "מעילה", 36),
    Masechta("Niddah", "נדה", 72),
)

CYCLE_LENGTH = sum(m.pages for m in MASECHTOS)  # = 2711


def compute_daf_yomi(today: date | datetime) -> ReadingPosition:
    """Today's page. Dates before the epoch count back into earlier cycles."""
    if isinstance(today, datetime):
        today = today.date()

    days_since = (today - DAF_YOMI_EPOCH).days
    cycle_offset = days_since % CYCLE_LENGTH
    cycle_number = DAF_YOMI_EPOCH_CYCLE + days_since // CYCLE_LENGTH

    remaining = cycle_offset
    for masechta in MASECHTOS[:-1]:
        if remaining < masechta.pages:
            break
        remaining -= masechta.pages
    else:
        masechta = MASECHTOS[-1]   # Niddah takes whatever is left

    daf = remaining + 2
    _LOGGER.debug("Daf Yomi for %s: %s %s", today, masechta.name, daf)
    return ReadingPosition(
        masechta=masechta.name,
        masechta_hebrew=masechta.name_hebrew,
        daf=daf,
        daf_hebrew=int_to_hebrew(daf),
        cycle_number=cycle_number,
        day_in_cycle=cycle_offset + 1,
    )


def format_daf(position: ReadingPosition, hebrew: bool = False) -> str:
    if hebrew:
        return f"{position.masechta_hebrew} דף {position.daf_hebrew}"
    return f"{position.masechta} {position.daf}"
