import argparse
from pathlib import Path

from strategy_lab.config import freeze_config, load_config, verify_config_lock


def main() -> None:
    parser = argparse.ArgumentParser(description="Write a hash lock next to a backtest config.")
    parser.add_argument("config")
    parser.add_argument("--lock", default=None)
    args = parser.parse_args()

    path = Path(args.config)
    load_config(path)
    lock_path = freeze_config(path, args.lock)
    ok = verify_config_lock(path, lock_path)
    status = "ok" if ok else "mismatch"
    print(f"Frozen {path} -> {lock_path} ({status})")


if __name__ == "__main__":
    main()
