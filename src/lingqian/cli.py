"""
Command line entry point for LINGQIAN.

Draws a fortune sign and exports it as a share card image.
"""

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from lingqian.card.composer import CardComposer, share_card
from lingqian.card.fonts import FontBook
from lingqian.core.sign import CATEGORY_LABEL_KEYS, RenderRequest, SignRecord
from lingqian.data.repository import SignRepository, TranslationCatalog
from lingqian.errors import LingqianError
from lingqian.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lingqian", description="Draw a fortune sign")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--lang", help="Language code (zh, en)")
    parser.add_argument("--data-dir", type=Path, help="Directory with data*.json")
    parser.add_argument("--lang-dir", type=Path, help="Directory with <lang>.json translations")

    sub = parser.add_subparsers(dest="command", required=True)

    draw = sub.add_parser("draw", help="Draw a sign and export its share card")
    draw.add_argument("--request", default="", help="What you are asking about")
    draw.add_argument("--sign", help="Use this sign id instead of a random one")
    draw.add_argument("--seed", type=int, help="Random seed for the draw")
    draw.add_argument("--out", type=Path, help="PNG output path")
    draw.add_argument("--data-uri", action="store_true", help="Print the image as a data URI")

    show = sub.add_parser("show", help="Print a sign as text")
    show.add_argument("--sign", help="Sign id (random when omitted)")
    show.add_argument("--seed", type=int, help="Random seed for the draw")

    return parser


def _pick_sign(repo: SignRepository, language: str, sign_id: Optional[str], seed: Optional[int]) -> SignRecord:
    if sign_id:
        sign = repo.find(language, sign_id)
        if sign is None:
            raise LingqianError(f"No sign with id {sign_id}")
        return sign
    return repo.draw(language, random.Random(seed) if seed is not None else None)


def cmd_draw(args: argparse.Namespace, settings: Settings, language: str) -> int:
    repo = SignRepository(args.data_dir or settings.data_dir, settings.default_language)
    catalog = TranslationCatalog(args.lang_dir or settings.lang_dir, settings.default_language)

    sign = _pick_sign(repo, language, args.sign, args.seed)
    request = RenderRequest(
        sign=sign,
        user_request=args.request,
        language=language,
        translations=catalog.load(language),
    )

    composer = CardComposer(
        fonts=FontBook(settings.card.font_dirs),
        qr_url=settings.card.qr_url,
    )
    result = share_card(composer, request)
    if not result.ok:
        print(result.error_message, file=sys.stderr)
        return 1

    if args.data_uri:
        print(result.card.data_uri)
        return 0

    out = args.out or settings.output_dir / f"sign-{sign.id or 'card'}.png"
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(result.card.png)
    print(out)
    return 0


def cmd_show(args: argparse.Namespace, settings: Settings, language: str) -> int:
    repo = SignRepository(args.data_dir or settings.data_dir, settings.default_language)
    translations = TranslationCatalog(
        args.lang_dir or settings.lang_dir, settings.default_language
    ).load(language)
    no_data = translations.get("noDataLabel") or "(暂无数据)"

    sign = _pick_sign(repo, language, args.sign, args.seed)
    print(f"#{sign.id}  {sign.luck_index}  [{sign.tier.value}]")
    print()
    print(translations.get("ancientProphecyTitle") or "远古预言")
    print(sign.prophecy_text or no_data)
    print()
    print(translations.get("overallFortuneTitle") or "整体运程")
    print(sign.fortune_text or no_data)
    print()
    print(sign.summary_text or no_data)

    fortunes = sign.fortunes_in_order()
    if fortunes:
        print()
        for key, text in fortunes:
            label = translations.get(CATEGORY_LABEL_KEYS[key]) or key
            print(f"{label}: {text or no_data}")

    def label(key: str, default: str) -> str:
        return translations.get(key) or default

    print()
    print(f"[{label('outfitAdviceButton', '开运锦囊')}]")
    print(label("outfitAdviceSubTitle", "穿搭建议"))
    print(sign.outfit_advice or no_data)
    print(label("luckyCharmPouchSubTitle", "开运锦囊"))
    print(sign.lucky_charm or no_data)

    print()
    print(f"[{label('interpretationExampleButton', '解读举例')}]")
    print(sign.example_text or no_data)

    print()
    print(f"[{label('mantraBlessingButton', '佛咒加持')}]")
    mantra = sign.mantra_title or no_data
    if sign.mantra_file:
        mantra = f"{mantra} ({sign.mantra_file})"
    print(mantra)
    print(f"{label('sanskritLabel', '梵文：')}{sign.mantra_sanskrit or no_data}")
    print(f"{label('meaningLabel', '咒语含义：')}{sign.mantra_meaning or no_data}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(args.debug or settings.debug)
    language = args.lang or settings.language

    try:
        if args.command == "draw":
            return cmd_draw(args, settings, language)
        return cmd_show(args, settings, language)
    except LingqianError as exc:
        logger.error(f"{exc}")
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
