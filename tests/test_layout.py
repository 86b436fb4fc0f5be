"""Tests for the card layout pass."""

from datetime import date

import pytest

from lingqian.card.fonts import FontFamily
from lingqian.card.geometry import DEFAULT_GEOMETRY as G
from lingqian.card.layout import (
    CARD_BLOCKS,
    Alignment,
    BlockKind,
    block_texts,
    format_card_date,
    plan_card,
)
from lingqian.core.sign import SignRecord
from tests.conftest import fake_measurer


def test_blocks_follow_card_sequence(request_for):
    plan = plan_card(request_for(), fake_measurer)
    assert [b.spec.key for b in plan.blocks] == [spec.key for spec in CARD_BLOCKS]
    assert [b.spec.key for b in plan.blocks] == [
        "title",
        "request",
        "date",
        "luck",
        "prophecy_title",
        "prophecy_body",
        "fortune_title",
        "fortune_body",
        "summary",
        "qr",
    ]


def test_content_height_sums_blocks_and_spacing(request_for):
    plan = plan_card(request_for(), fake_measurer)
    expected = (
        G.top_padding
        + G.title_size + G.space_after_title
        + G.request_size * G.request_line_ratio + G.space_after_request
        + G.date_size + G.space_after_date
        + G.luck_size * G.luck_line_ratio + G.space_after_luck
        + G.section_title_size + G.space_after_section_title
        + 2 * G.body_size * G.body_line_ratio + G.space_between_sections
        + G.section_title_size + G.space_after_section_title
        + G.body_size * G.body_line_ratio + G.space_before_summary
        + G.summary_size * G.summary_line_ratio + G.space_after_summary
        + G.space_before_qr + G.qr_size
        + G.bottom_padding
    )
    assert plan.content_height == pytest.approx(expected)
    assert plan.content_height == pytest.approx(668.2)


def test_short_card_uses_minimum_height(request_for):
    plan = plan_card(request_for(), fake_measurer)
    assert plan.total_height == G.min_height
    assert plan.width == G.width


def test_long_card_grows_past_minimum(request_for, sign):
    long_sign = SignRecord(
        id="1",
        luck_index="★",
        prophecy_text="\n".join(["命运之轮缓缓转动"] * 40),
        fortune_text="近期诸事顺遂",
        summary_text="凶",
    )
    plan = plan_card(request_for(sign=long_sign), fake_measurer)
    assert plan.total_height > G.min_height
    assert plan.total_height >= plan.content_height
    assert plan.total_height - plan.content_height < 1


def test_blocks_are_stacked_without_gaps(request_for):
    plan = plan_card(request_for(), fake_measurer)
    text_blocks = [b for b in plan.blocks if b.spec.kind is BlockKind.TEXT]
    assert text_blocks[0].start_y == G.top_padding
    for prev, nxt in zip(text_blocks, text_blocks[1:]):
        gap = getattr(G, prev.spec.space_after)
        assert nxt.start_y == pytest.approx(prev.end_y + gap)


def test_qr_sits_on_bottom_edge(request_for):
    plan = plan_card(request_for(), fake_measurer)
    qr = plan.block("qr")
    assert qr.start_y == plan.total_height - G.bottom_padding - G.qr_size
    assert qr.end_y + G.bottom_padding == plan.total_height


def test_empty_request_keeps_its_spacing(request_for):
    long_sign = SignRecord(prophecy_text="\n".join(["守得云开见月明"] * 40))
    empty = plan_card(request_for(sign=long_sign, user_request=""), fake_measurer)
    one_line = plan_card(request_for(sign=long_sign, user_request="事业"), fake_measurer)

    assert empty.block("request").lines == ()
    assert one_line.block("request").lines == ("事业",)
    assert one_line.content_height - empty.content_height == pytest.approx(
        G.request_size * G.request_line_ratio
    )
    assert empty.block("date").start_y == pytest.approx(
        empty.block("request").start_y + G.space_after_request
    )
    assert empty.total_height > G.min_height


def test_two_paragraph_prophecy(request_for):
    sign = SignRecord(prophecy_text="一" * 30 + "\n" + "二" * 5)
    plan = plan_card(request_for(sign=sign), fake_measurer)
    body = plan.block("prophecy_body")

    # 19px glyphs in a 430px column: 22 per line
    assert body.lines == ("一" * 22, "一" * 8, "二" * 5)
    assert body.height == pytest.approx(3 * G.body_size * G.body_line_ratio)


def test_missing_fields_use_no_data_label(request_for):
    plan = plan_card(request_for(sign=SignRecord()), fake_measurer)
    assert plan.block("prophecy_body").lines == ("(No Data)",)
    assert plan.block("fortune_body").lines == ("(No Data)",)
    assert plan.block("summary").lines == ("(No Data)",)
    assert plan.block("luck").lines == ("",)


def test_translations_override_labels(request_for):
    translations = {
        "appTitle": "Oracle",
        "ancientProphecyTitle": "预言",
        "noDataLabel": "(暂无数据)",
    }
    texts = block_texts(request_for(sign=SignRecord(), translations=translations))
    assert texts["title"] == "Oracle"
    assert texts["prophecy_title"] == "预言"
    assert texts["fortune_title"] == "Overall Fortune"
    assert texts["summary"] == "(暂无数据)"


def test_default_title(request_for):
    assert block_texts(request_for())["title"] == "灵签玄机"


def test_font_stack_follows_language(request_for):
    zh = plan_card(request_for(language="zh"), fake_measurer)
    en = plan_card(request_for(language="en"), fake_measurer)

    assert zh.block("prophecy_body").font.family is FontFamily.CJK_SERIF
    assert en.block("prophecy_body").font.family is FontFamily.LATIN_SERIF
    assert en.block("title").font.family is FontFamily.LATIN_SERIF

    for plan in (zh, en):
        assert plan.block("luck").font.family is FontFamily.SANS
        assert plan.block("date").font.italic

    assert zh.block("date").font.family is FontFamily.CJK_SERIF
    assert en.block("date").font.family is FontFamily.LATIN_SERIF


def test_unknown_language_uses_default_stack(request_for):
    plan = plan_card(request_for(language="ja"), fake_measurer)
    assert plan.block("summary").font.family is FontFamily.CJK_SERIF


def test_section_styles(request_for):
    plan = plan_card(request_for(), fake_measurer)
    assert plan.block("prophecy_title").spec.alignment is Alignment.LEFT
    assert plan.block("prophecy_body").spec.alignment is Alignment.LEFT
    assert plan.block("summary").spec.alignment is Alignment.CENTER
    assert plan.block("summary").font.size == G.summary_size
    assert plan.block("summary").font.bold
    assert [b.spec.key for b in plan.blocks if b.spec.divider] == [
        "prophecy_title",
        "fortune_title",
        "summary",
    ]


def test_date_formats():
    day = date(2026, 10, 17)
    assert format_card_date(day, "zh") == "2026年10月17日"
    assert format_card_date(day, "en") == "October 17, 2026"
    assert format_card_date(day, "fr") == "October 17, 2026"


def test_date_block_uses_request_date(request_for):
    texts = block_texts(request_for(issued_on=date(2025, 1, 2), language="en"))
    assert texts["date"] == "January 2, 2025"
