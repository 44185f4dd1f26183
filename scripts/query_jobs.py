# scripts/query_jobs.py
import argparse
import json
from pathlib import Path

from local_careers.config import DEFAULT_CONFIG_PATH, load_config, resolve_config_path
from local_careers.engine import build_engine


def main():
    parser = argparse.ArgumentParser(
        description="List stored jobs, optionally within a radius (miles) of a point."
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--lat")
    parser.add_argument("--lng")
    parser.add_argument("--radius")
    parser.add_argument("--grouped", action="store_true", help="Group jobs sharing a location.")
    parser.add_argument("--out", default="data/results/jobs.json")
    args = parser.parse_args()

    engine = build_engine(load_config(str(resolve_config_path(args.config))))

    if args.grouped:
        locations = engine.query_locations(args.lat, args.lng, args.radius)
        payload = {"locations": [loc.to_json_dict() for loc in locations]}
        found = sum(loc.count for loc in locations)
        print(f"Found {found} jobs at {len(locations)} locations")
    else:
        jobs = engine.query_jobs(args.lat, args.lng, args.radius)
        payload = {"jobs": [j.to_json_dict() for j in jobs]}
        print(f"Found {len(jobs)} jobs")

    out_path = Path(args.out).expanduser().resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    print(f"Wrote → {out_path}")


if __name__ == "__main__":
    main()
