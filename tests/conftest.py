"""Shared fixtures for LINGQIAN tests."""

import json
from datetime import date

import pytest

from lingqian.card.fonts import FontBook
from lingqian.core.sign import RenderRequest, SignRecord


def fixed_advance(size: float):
    """Width function with full-width CJK glyphs and half-width everything else."""

    def measure(text: str) -> float:
        return sum(size if ord(ch) >= 0x2E80 else size / 2 for ch in text)

    return measure


def fake_measurer(spec):
    return fixed_advance(spec.size)


SIGN_DATA = {
    "签号": "17",
    "幸运指数": "★★★★☆",
    "远古预言": "风起青萍之末，浪成微澜之间。\n守得云开见月明。",
    "整体运程": "近期诸事顺遂，宜静不宜动。",
    "总结": "中吉",
    "分类运程": {"事业": "稳中求进", "健康": "注意休息", "天气": "unused"},
    "穿搭建议": "浅色衣物",
    "解读举例": "问财运：宜守不宜攻",
    "文件标题": "六字大明咒",
    "梵文": "Om Mani Padme Hum",
    "咒语含义": "愿众生离苦得乐",
    "文件名": "om.mp3",
}


@pytest.fixture
def sign():
    return SignRecord.from_dict(SIGN_DATA)


@pytest.fixture
def request_for(sign):
    def make(**overrides):
        params = {
            "sign": sign,
            "user_request": "今年的事业运如何？",
            "language": "zh",
            "translations": {},
            "issued_on": date(2026, 10, 17),
        }
        params.update(overrides)
        return RenderRequest(**params)

    return make


@pytest.fixture(scope="session")
def font_book():
    return FontBook()


@pytest.fixture
def data_dirs(tmp_path):
    data_dir = tmp_path / "data"
    lang_dir = tmp_path / "lang"
    data_dir.mkdir()
    lang_dir.mkdir()

    (data_dir / "data.json").write_text(
        json.dumps([SIGN_DATA, {"签号": "18", "幸运指数": "★★", "总结": "小凶"}], ensure_ascii=False),
        encoding="utf-8",
    )
    (data_dir / "data-en.json").write_text(
        json.dumps([{"id": "17", "luck_index": "★★★★☆", "summary_text": "Good fortune"}]),
        encoding="utf-8",
    )
    (lang_dir / "zh.json").write_text(
        json.dumps({"appTitle": "灵签玄机", "noDataLabel": "(暂无数据)"}, ensure_ascii=False),
        encoding="utf-8",
    )
    (lang_dir / "en.json").write_text(
        json.dumps({"appTitle": "Oracle Sign", "ancientProphecyTitle": "Ancient Prophecy"}),
        encoding="utf-8",
    )
    return data_dir, lang_dir
