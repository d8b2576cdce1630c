"""Command line front end: analyze images without an MCP client."""
from dataclasses import replace
from typing import List, Optional, Sequence
import argparse
import glob
import json
import logging
import os
import sys

from .config import load_config, setup_logging
from .json_api import handle_json_request
from .references import is_data_uri, is_file_url, is_url

logger = logging.getLogger(__name__)


def expand_image_args(patterns: Sequence[str]) -> List[str]:
    """Expand glob masks and make local paths absolute; URLs pass through."""
    result: List[str] = []
    for p in patterns:
        if is_url(p) or is_file_url(p) or is_data_uri(p):
            result.append(p)
            continue
        expanded = sorted(glob.glob(p)) or [p]
        result.extend(os.path.abspath(e) if os.path.exists(e) else e for e in expanded)
    # Drop duplicates, keep order
    seen = set()
    uniq: List[str] = []
    for p in result:
        if p not in seen:
            seen.add(p)
            uniq.append(p)
    return uniq


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mcp-vision-analyze",
        description="Send images and an instruction to Gemini and print the raw answer.",
    )
    parser.add_argument(
        "images",
        nargs="+",
        help="Images as https:// URLs, file:// URLs, data URIs or file paths (glob masks allowed).",
    )
    parser.add_argument("-i", "--instruction", required=True, help="Natural language task for the image(s).")
    parser.add_argument("-P", "--provider", choices=("ais", "vertex"), help="Override GEMINI_PROVIDER.")
    parser.add_argument("-m", "--model", help="Override GEMINI_MODEL.")
    parser.add_argument("-k", "--api-key", dest="api_key", help="Override GEMINI_API_KEY.")
    parser.add_argument("--project", help="Override GOOGLE_CLOUD_PROJECT.")
    parser.add_argument("--location", help="Override GEMINI_LOCATION.")
    parser.add_argument(
        "--max-long-edge",
        dest="max_long_edge",
        type=int,
        help="Override VISION_MAX_LONG_EDGE (pixels, 0 disables resizing).",
    )
    parser.add_argument("-T", "--timeout", type=int, help="Override VISION_TIMEOUT (seconds).")
    parser.add_argument("--image-quality", dest="image_quality", type=int, help="Override IMAGE_QUALITY.")
    parser.add_argument("--json", dest="as_json", action="store_true", help="Print the JSON response object.")
    parser.add_argument("--debug", action="store_true", help="Verbose logging to stderr.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    cfg = load_config()

    overrides = {
        field: getattr(args, field)
        for field in ("provider", "model", "api_key", "project", "location", "max_long_edge", "timeout", "image_quality")
        if getattr(args, field) is not None
    }
    if args.debug:
        overrides["log_level"] = "DEBUG"
    elif args.quiet:
        overrides["log_level"] = "ERROR"
    cfg = replace(cfg, **overrides)
    setup_logging(cfg.log_level)

    images = expand_image_args(args.images)
    logger.info("model=%s provider=%s images=%d", cfg.model, cfg.provider, len(images))

    resp = handle_json_request({"action": "analyze", "images": images, "instruction": args.instruction}, cfg)
    if args.as_json:
        print(json.dumps(resp, ensure_ascii=False, indent=2))
        if not resp["ok"]:
            sys.exit(1)
        return
    if not resp["ok"]:
        sys.exit("ERROR: " + "; ".join(resp["errors"]))
    print(resp["text"])
