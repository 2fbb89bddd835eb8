"""
main.py — Command-line entry point.

    python main.py front.jpg back.jpg label.jpg
    python main.py photo.jpg --chain openai/gpt-4o,google/gemini-2.0-flash --timeout 30

All photos given on one command line are treated as the same garment. The
result envelope is printed to stdout as JSON; the exit code is 0 when a listing
was produced and 1 when the pipeline reported a failure.
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import config
from models import ImageSet
from pipeline import analyse_item
from providers.manager import build_chain

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    # Log file lives under DATA_DIR so a single volume mount captures it.
    config.DATA_DIR.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        handlers=[
            # stdout carries the JSON result, so logs go to stderr
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(str(config.DATA_DIR / "pipeline.log"), encoding="utf-8"),
        ],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Analyse garment photos and print a marketplace listing as JSON.",
    )
    parser.add_argument("images", nargs="+", type=Path, metavar="IMAGE",
                        help="photos of one garment (front, back, labels, details)")
    parser.add_argument("--chain", default=None,
                        help="comma-separated provider names, tried in order "
                             f"(default: {','.join(config.PROVIDER_CHAIN)})")
    parser.add_argument("--timeout", type=float, default=None,
                        help="seconds allowed per provider attempt "
                             f"(default: {config.PROVIDER_TIMEOUT_SECONDS:g})")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> dict:
    image_set = ImageSet.from_paths(args.images)
    names = [n.strip() for n in args.chain.split(",") if n.strip()] if args.chain else None
    try:
        chain = build_chain(names)
    except RuntimeError as exc:
        logger.error("%s", exc)
        return {"success": False, "error": str(exc), "items": []}
    return await analyse_item(image_set, chain=chain, timeout=args.timeout)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging()

    missing = [str(p) for p in args.images if not p.is_file()]
    if missing:
        logger.error("Image file(s) not found: %s", ", ".join(missing))
        return 1

    try:
        envelope = asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return 1

    json.dump(envelope, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0 if envelope["success"] else 1


if __name__ == "__main__":
    sys.exit(main())
