import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from outpaint.config.settings import Settings
from outpaint.logging.logger import Log
from outpaint.processing.landmarks import LANDMARKS
from outpaint.workflow.models import AttemptOutcome, OutcomeStatus
from outpaint.workflow.workflow import OutpaintWorkflow, build_workflow


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="outpaint",
        description="Place a photo in front of a landmark (pay once per session).",
    )
    parser.add_argument("image", nargs="?", type=Path, help="Photo to process (max 10MB)")
    parser.add_argument(
        "-l",
        "--location",
        action="append",
        dest="locations",
        metavar="LABEL",
        help="Landmark label; repeat to render several backdrops in one session",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory the result is saved to (default: current directory)",
    )
    parser.add_argument(
        "--list-locations",
        action="store_true",
        help="Print the available landmark labels and exit",
    )
    args = parser.parse_args(argv)
    if not args.list_locations and args.image is None:
        parser.error("the following arguments are required: image")
    return args


def _report_failure(outcome: AttemptOutcome) -> None:
    hint = " (retry possible)" if outcome.retryable else ""
    print(f"Error: {outcome.error}{hint}", file=sys.stderr)


def _run_attempt(workflow: OutpaintWorkflow, location: str, target_dir: Path) -> bool:
    outcome = workflow.process(location)
    if outcome.status is OutcomeStatus.AWAITING_PAYMENT:
        print(f"Payment of {workflow.payment_amount / 100:.2f} required, confirming...")
        outcome = workflow.confirm_payment()
    if not outcome.ok:
        _report_failure(outcome)
        return False

    saved = workflow.download(target_dir)
    print(f"{location}: saved {saved}")
    return True


def location_dirname(location: str) -> str:
    """'Eiffel Tower (Paris, France)' -> 'eiffel-tower-paris-france'."""
    words = "".join(c if c.isalnum() else " " for c in location.lower()).split()
    return "-".join(words)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: settings -> logging -> session -> one attempt per location."""
    args = _parse_args(argv)
    if args.list_locations:
        for label in LANDMARKS:
            print(label)
        return 0

    settings = Settings()
    Log.configure(settings.log_level)
    locations = args.locations or [settings.default_location]

    with build_workflow(settings) as workflow:
        selected = workflow.select_image(args.image)
        if not selected.ok:
            _report_failure(selected)
            return 1
        failures = 0
        for location in locations:
            target_dir = args.output_dir
            if len(locations) > 1:
                target_dir = target_dir / location_dirname(location)
            if not _run_attempt(workflow, location, target_dir):
                failures += 1
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
