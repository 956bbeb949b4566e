"""Command line interface for fixation and scan-index analysis."""
from __future__ import annotations

import argparse
import logging

import pandas as pd

from .config import FixationConfig, ScanIndexConfig, SessionConfig
from .pipeline import analyze_session
from .scan_index import ScanIndexClassifier, save_scan_index


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="AOI fixation and scanning-index analysis")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    fixations = sub.add_parser("fixations", help="Write per-trial AOI fixation sequences")
    fixations.add_argument("input", help="EyeLink .mat export containing edfStruct")
    fixations.add_argument("subject", help="Subject code used as the output file name")
    fixations.add_argument("output_dir", help="Base output directory")
    fixations.add_argument(
        "--min-saccade", type=float, default=10.0, help="Dispersion threshold in px"
    )
    fixations.add_argument(
        "--min-samples", type=int, default=20, help="Qualifying pairs before a run is a fixation"
    )
    fixations.add_argument(
        "--switch-trial", type=int, default=8, help="Trial after which the block 2 layout is used"
    )
    fixations.add_argument("--capacity", type=int, default=20, help="Label slots per trial row")
    fixations.add_argument(
        "--no-checkpoint",
        dest="checkpoint",
        action="store_false",
        help="Write the output file once at the end instead of after every trial",
    )

    scan = sub.add_parser("scan-index", help="Compute horizontal/vertical scan indices")
    scan.add_argument("input", help="CSV written by the fixations command")
    scan.add_argument("--trials-per-block", type=int, default=8)
    scan.add_argument("--blocks", type=int, default=2)
    scan.add_argument("--save", help="Optional .mat path for the result matrices")

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "fixations":
        result = analyze_session(
            args.input,
            args.subject,
            args.output_dir,
            fixation_config=FixationConfig(
                min_saccade=args.min_saccade, min_sample_run=args.min_samples
            ),
            session_config=SessionConfig(
                block_switch_trial=args.switch_trial, fixation_capacity=args.capacity
            ),
            checkpoint=args.checkpoint,
        )
        print(f"{len(result.records)} trials written to {result.output_path}")
        if result.skipped_trials:
            print(f"{result.skipped_trials} trials skipped (event timestamp not found)")
        return

    if args.command == "scan-index":
        cfg = ScanIndexConfig(trials_per_block=args.trials_per_block, number_of_blocks=args.blocks)
        result = ScanIndexClassifier(cfg).classify_file(args.input)
        trials, blocks = result.to_frames()
        with pd.option_context("display.max_rows", None):
            print(trials.to_string(index=False))
            print()
            print(blocks.to_string(index=False))
        if args.save:
            save_scan_index(args.save, result)
        return


if __name__ == "__main__":
    main()
