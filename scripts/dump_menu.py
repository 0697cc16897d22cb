#!/usr/bin/env python3
"""
Export the weekly menu as JSON.

Reads the live menu page (or a saved copy with --in) and writes the parsed
week, Monday to Friday, to a JSON file that is easy to inspect when the page
markup changes.
"""

from __future__ import annotations

import argparse
import json
import os
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.koedo import get_config
from src.koedo.errors import KoedoError
from src.koedo.fetch import fetch_menu_source, load_menu_source
from src.koedo.menu import menu_to_dict, parse_menu


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--in", dest="input_path", default=None, help="Saved menu page (default: fetch the live page)")
    parser.add_argument(
        "--out",
        dest="output_path",
        default="menu_week.json",
        help="Output JSON path (default: menu_week.json)",
    )
    args = parser.parse_args()

    config = get_config()
    try:
        if args.input_path:
            source_name = args.input_path
            if not Path(source_name).exists():
                print(f"[ERR] Menu file not found: {source_name}")
                return 1
            markup = load_menu_source(source_name)
        else:
            source_name = config.menu_url
            markup = fetch_menu_source(config.menu_url)
    except KoedoError as e:
        print(f"[ERR] {e}")
        return 1

    week = menu_to_dict(parse_menu(markup, config.markup), config.markup)
    payload = {
        "source": source_name,
        "num_days": len(week),
        "num_dishes": sum(len(dishes) for dishes in week.values()),
        "days": week,
    }

    out_path = Path(args.output_path)
    out_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"[OK] Wrote {out_path} ({payload['num_dishes']} dishes, {payload['num_days']} days)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
