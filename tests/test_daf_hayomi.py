from __future__ import annotations

from datetime import date, datetime, timedelta

from luachcal.const import DAF_YOMI_EPOCH
from luachcal.daf_hayomi import CYCLE_LENGTH, MASECHTOS, compute_daf_yomi, format_daf


def test_table():
    assert len(MASECHTOS) == 37
    assert CYCLE_LENGTH == 2711
    assert MASECHTOS[0].last_daf == 64


def test_epoch():
    pos = compute_daf_yomi(DAF_YOMI_EPOCH)
    assert (pos.masechta, pos.daf, pos.cycle_number, pos.day_in_cycle) == ("Berachos", 2, 14, 1)


def test_known_dates():
    pos = compute_daf_yomi(date(2020, 3, 7))
    assert (pos.masechta, pos.daf) == ("Berachos", 64)
    pos = compute_daf_yomi(date(2020, 3, 8))
    assert (pos.masechta, pos.daf) == ("Shabbos", 2)


def test_cycle_boundaries():
    last = compute_daf_yomi(DAF_YOMI_EPOCH + timedelta(days=CYCLE_LENGTH - 1))
    assert (last.masechta, last.daf, last.cycle_number) == ("Niddah", 73, 14)
    assert last.day_in_cycle == CYCLE_LENGTH

    first = compute_daf_yomi(DAF_YOMI_EPOCH + timedelta(days=CYCLE_LENGTH))
    assert (first.masechta, first.daf, first.cycle_number) == ("Berachos", 2, 15)

    before = compute_daf_yomi(DAF_YOMI_EPOCH - timedelta(days=1))
    assert (before.masechta, before.daf, before.cycle_number) == ("Niddah", 73, 13)


def test_consecutive_days_are_continuous():
    prev = compute_daf_yomi(DAF_YOMI_EPOCH)
    for offset in range(1, CYCLE_LENGTH + 5):
        cur = compute_daf_yomi(DAF_YOMI_EPOCH + timedelta(days=offset))
        if cur.masechta == prev.masechta:
            assert cur.daf == prev.daf + 1
        else:
            assert cur.daf == 2
        prev = cur


def test_accepts_datetime():
    assert compute_daf_yomi(datetime(2020, 3, 8, 23, 59)) == compute_daf_yomi(date(2020, 3, 8))


def test_format_daf():
    pos = compute_daf_yomi(DAF_YOMI_EPOCH)
    assert format_daf(pos) == "Berachos 2"
    assert format_daf(pos, hebrew=True) == "ברכות דף ב׳"


def test_one_cycle_covers_every_page_once():
    seen = {}
    for offset in range(CYCLE_LENGTH):
        pos = compute_daf_yomi(DAF_YOMI_EPOCH + timedelta(days=offset))
        seen[pos.masechta] = seen.get(pos.masechta, 0) + 1
    assert seen == {m.name: m.pages for m in MASECHTOS}
