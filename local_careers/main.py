# local_careers/main.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from local_careers.config import DEFAULT_CONFIG_PATH, load_config, resolve_config_path
from local_careers.engine import build_engine
from local_careers.errors import LocalCareersError


def run(config_path: str = DEFAULT_CONFIG_PATH) -> List[Dict[str, Any]]:
    """
    Import every configured source. A failing source is reported and left
    untouched in the store; the others still run.
    """
    config_file = resolve_config_path(config_path)
    print(f"[DEBUG] Using config file: {config_file}")

    cfg = load_config(str(config_file))
    if not cfg.sources:
        raise ValueError("No sources configured under sources: ...")

    engine = build_engine(cfg)
    print(f"[DEBUG] Snapshot: {engine.store.path}")

    summary: List[Dict[str, Any]] = []
    for source_cfg in cfg.sources:
        label = source_cfg.id or source_cfg.name or source_cfg.url
        try:
            result = engine.import_from_source(source_cfg)
            print(f"[IMPORT] {label}: imported={result.total}")
            summary.append({"source": label, "imported": result.total})
        except LocalCareersError as e:
            print(f"[ERROR] {label}: {e}")
            summary.append({"source": label, "imported": 0, "error": str(e)})

    print(f"\nStore now holds {len(engine.list_jobs())} jobs from {len(engine.list_sources())} sources")
    return summary


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    run()
