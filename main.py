#!/usr/bin/env python3
"""PC Build Normalizer: main entry point.

Usage:
    python main.py --products catalog.json --configs builds.jsonl [--save] [--lang en] [--debug]
"""
import json
import logging
import sys
import os
from datetime import datetime

from config import Config
from aggregator import build_persistence_payload, default_meta
from discounts import normalize_items
from models import MalformedComponentError, configuration_to_dict
from persistence import save_configuration
from stream import ConfigurationFeed, iter_events
from taxonomy import map_for_editing
from output.terminal import render_configurations_table, render_products_table
from output.html import render_html_report, update_index

logger = logging.getLogger(__name__)


def _setup_logging(logs_dir: str):
    os.makedirs(logs_dir, exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(
                os.path.join(logs_dir, f"run_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"),
                encoding="utf-8",
            ),
        ],
    )


def _load_env(path: str = ".env"):
    """Load key=value pairs from .env file into os.environ."""
    if not os.path.exists(path):
        return
    with open(path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, _, value = line.partition("=")
                os.environ.setdefault(key.strip(), value.strip())


def _arg_value(flag: str, argv: list[str]) -> str | None:
    if flag not in argv:
        return None
    i = argv.index(flag)
    return argv[i + 1] if i + 1 < len(argv) else None


def _load_products(path: str) -> list:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    # The catalog API wraps lists as {"products": [...]} on some endpoints
    if isinstance(data, dict):
        data = data.get("products", [])
    return data


def _write_editable(mappings: list, output_dir: str) -> str:
    """Dump the editor-slot view of each build as JSON for the manual editor."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, f"editable_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json")
    records = [
        {
            "status": result.status,
            "reason": result.reason,
            "components": configuration_to_dict(result.components),
        }
        for result in mappings
    ]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(records, f, ensure_ascii=False, indent=2)
    return path


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    _load_env()
    config = Config()
    if _arg_value("--lang", argv):
        config.language = _arg_value("--lang", argv)

    _setup_logging(config.logs_dir)
    if "--debug" in argv:
        logging.getLogger().setLevel(logging.DEBUG)

    products_path = _arg_value("--products", argv)
    configs_path = _arg_value("--configs", argv)
    save = "--save" in argv
    policy = config.threshold_policy()

    logger.info("=" * 60)
    logger.info("PC Build Normalizer: starting")
    logger.info(f"Discount floor: {policy.min_percent}% or {policy.min_absolute:,.0f}")
    logger.info("=" * 60)

    if products_path:
        items = normalize_items(_load_products(products_path), policy)
        logger.info(f"Normalized {len(items)} products from {products_path}")
        print(render_products_table(items))

    if not configs_path:
        return 0

    feed = ConfigurationFeed()
    for event in iter_events(configs_path):
        feed.receive(event)
    logger.info(f"Received {len(feed)} configurations ({feed.rejected} rejected)")

    results = {}
    mappings = []
    for index, build in enumerate(feed.configurations):
        editable = map_for_editing(build)
        if editable.is_degraded:
            logger.warning(f"Build #{index + 1}: {editable.reason}")
        mappings.append(editable)

        if not save:
            continue
        try:
            payload = build_persistence_payload(build, default_meta(index))
        except MalformedComponentError as e:
            results[index] = {"status": "failed", "error": str(e)}
            logger.error(f"Build #{index + 1}: cannot build save payload: {e}")
            continue
        ok = save_configuration(
            payload,
            config.persistence_url,
            headers=config.persistence_headers(),
            timeout=config.persistence_timeout,
        )
        results[index] = {"status": "saved"} if ok else {"status": "failed", "error": "API rejected or unreachable"}

    print(render_configurations_table(feed.configurations, language=config.language))

    html_path = render_html_report(
        feed.configurations,
        output_dir=config.results_dir,
        statuses={i: r["status"] for i, r in results.items()},
        language=config.language,
    )
    update_index(config.results_dir)
    logger.info(f"HTML report saved to: {html_path}")
    editable_path = _write_editable(mappings, config.results_dir)
    logger.info(f"Editor slots saved to: {editable_path}")

    if save:
        print("\n--- Save Status ---")
        for index, result in results.items():
            if result["status"] == "saved":
                print(f"  Build #{index + 1}: saved")
            else:
                print(f"  Build #{index + 1}: FAILED: {result.get('error', 'unknown')}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
