# scripts/validate_feeds.py
import sys

import yaml

from local_careers.config import DEFAULT_CONFIG_PATH, load_config, resolve_config_path
from local_careers.errors import UpstreamError
from local_careers.sources.json_feed import JsonFeedSource

CONFIG_PATH = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CONFIG_PATH


def main():
    cfg = load_config(str(resolve_config_path(CONFIG_PATH)))

    ok, bad = [], []
    for src in cfg.sources:
        label = src.id or src.name or src.url
        if not src.url:
            bad.append((label, "no url"))
            print(f"[BAD]  {label} -> no url")
            continue
        try:
            items = JsonFeedSource(src.url, timeout_s=cfg.feeds.timeout_s).fetch_items()
        except UpstreamError as e:
            bad.append((label, str(e)))
            print(f"[ERR]  {label} -> {e}")
            continue
        if items:
            ok.append(label)
            print(f"[OK]   {label} ({len(items)} items)")
        else:
            bad.append((label, "no items"))
            print(f"[BAD]  {label} -> no items")

    out = {"valid_feeds": ok, "invalid_feeds": [list(b) for b in bad]}
    out_path = cfg.resolved_data_path().parent / "feed_validation.yaml"
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(yaml.safe_dump(out, sort_keys=False), encoding="utf-8")
    print(f"\nWrote: {out_path}")


if __name__ == "__main__":
    main()
