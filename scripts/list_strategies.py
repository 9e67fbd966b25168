from __future__ import annotations

import argparse
import json

from strategy_lab.strategy import default_registry, params_to_dict


def main() -> None:
    parser = argparse.ArgumentParser(description="List registered strategies.")
    parser.add_argument("--params", action="store_true", help="include default parameters")
    args = parser.parse_args()

    registry = default_registry()
    for info in registry.list():
        print(f"{info.id:<24} {info.name}")
        print(f"    {info.description}")
        if args.params:
            strategy = registry.get_by_id(info.id)
            print(f"    {json.dumps(params_to_dict(strategy.default_params()))}")


if __name__ == "__main__":
    main()
