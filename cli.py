#!/usr/bin/env python3
import argparse

from docpager.orchestrator import run_once


def main():
    parser = argparse.ArgumentParser(description="docpager CLI")
    parser.add_argument("--config", required=True, help="Path to YAML config")
    parser.add_argument("--page-size", dest="page_size", type=int, help="Override page_size of every paginate stage")
    parser.add_argument("--out-dir", dest="out_dir", type=str, help="Override output.dir")
    args = parser.parse_args()

    overrides = {
        "page_size": args.page_size,
        "out_dir": args.out_dir,
    }

    run_once(args.config, overrides=overrides)


if __name__ == "__main__":
    main()
