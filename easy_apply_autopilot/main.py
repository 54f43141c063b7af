"""Easy Apply autopilot - command line entry point"""

import argparse
import logging

from easy_apply_autopilot import config
from easy_apply_autopilot.browser.playwright_document import PlaywrightDocument
from easy_apply_autopilot.browser.session import launch_browser
from easy_apply_autopilot.data.answer_cache import AnswerCache
from easy_apply_autopilot.data.store import JsonFileStore, MemoryStore
from easy_apply_autopilot.debug import unresolved_collector
from easy_apply_autopilot.inference.backends import backend_for
from easy_apply_autopilot.inference.bridge import InferenceBridge
from easy_apply_autopilot.navigator import StepNavigator
from easy_apply_autopilot.perception.extractor import FieldExtractor
from easy_apply_autopilot.reasoning.resolver import AnswerResolver
from easy_apply_autopilot.runner import JobRunner, load_job_links
from easy_apply_autopilot.state.control import ControlState
from easy_apply_autopilot.state.detector import ErrorDetector
from easy_apply_autopilot.state.quota import QuotaTracker
from easy_apply_autopilot.utils.logging import configure_logging
from easy_apply_autopilot.utils.timing import Pacer

logger = logging.getLogger(__name__)


def build_navigator(document, store, settings, control, pacer):
    """Wire the automaton's collaborators around one document"""
    return StepNavigator(
        document=document,
        extractor=FieldExtractor(document, pacer),
        resolver=AnswerResolver(AnswerCache(store)),
        bridge=InferenceBridge(backend_for(settings)),
        detector=ErrorDetector(document, pacer),
        pacer=pacer,
        control=control,
        max_steps=settings.max_steps,
    )


def positive_int(value):
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer")
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"{value} must be greater than zero")
    return parsed


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Easy Apply autopilot - multi-step application form automation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Speed profiles:
  --speed dev_test   40-50%% faster - balanced testing
  --speed super_dev  70-80%% faster - maximum speed
  (default)          Production pacing

Examples:
  python -m easy_apply_autopilot.main "https://www.linkedin.com/jobs/view/123456789/"
  python -m easy_apply_autopilot.main --links-file jobs.txt --daily-limit 10
        """,
    )
    parser.add_argument("job_url", nargs="?", help="Job URL to apply to")
    parser.add_argument(
        "--links-file",
        help="File containing job URLs (one per line) for batch processing",
    )
    parser.add_argument(
        "--speed",
        choices=sorted(config.SPEED_PROFILES),
        help="Pacing profile applied to every delay tier",
    )
    parser.add_argument(
        "--store",
        default=config.DEFAULT_STORE_PATH,
        help=f"JSON file holding settings, answer cache and daily count (default: {config.DEFAULT_STORE_PATH})",
    )
    parser.add_argument(
        "--no-persist",
        action="store_true",
        help="Keep settings and cached answers in memory only",
    )
    parser.add_argument("--daily-limit", type=positive_int, help="Override the stored daily application limit")
    parser.add_argument("--max-steps", type=positive_int, help="Override the per-attempt step limit")
    parser.add_argument(
        "--debug-unresolved",
        action="store_true",
        help="Record unresolved questions to debug_unresolved.jsonl (observability only)",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    if not args.job_url and not args.links_file:
        parser.error("Either job_url or --links-file must be provided")
    if args.job_url and args.links_file:
        parser.error("Cannot use both job_url and --links-file")
    return args


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.verbose)

    job_urls = load_job_links(args.links_file) if args.links_file else [args.job_url]
    if args.links_file:
        logger.info(f"📋 Batch mode: {len(job_urls)} jobs loaded from {args.links_file}")

    store = MemoryStore() if args.no_persist else JsonFileStore(args.store)
    settings = load_settings_from_args(store, args)
    if args.speed:
        logger.info(f"⚡ Speed profile: {args.speed}")

    if args.debug_unresolved:
        unresolved_collector.enable()
        logger.info(f"🔍 Recording unresolved questions to {config.DEBUG_UNRESOLVED_PATH}")

    control = ControlState()
    pacer = Pacer(settings.delays_ms, jitter=0.2)
    quota = QuotaTracker(store, settings.daily_limit)

    runner = None
    playwright, context, page = launch_browser()
    try:
        document = PlaywrightDocument(page)
        navigator = build_navigator(document, store, settings, control, pacer)
        runner = JobRunner(document, navigator, quota, control, pacer)
        runner.run(job_urls)
    except KeyboardInterrupt:
        logger.info("Interrupted - stopping")
        control.stop()
    finally:
        logger.info("Closing browser...")
        context.close()
        playwright.stop()

    print("\n" + "=" * 60)
    print("RUN COMPLETE")
    print("=" * 60)
    counts = runner.summary() if runner else {}
    for status, count in sorted(counts.items()):
        print(f"  {status}: {count}")
    print(f"  Applications today: {quota.get_daily_count()}/{quota.daily_limit}")


def load_settings_from_args(store, args):
    return config.load_settings(
        store,
        speed=args.speed,
        daily_limit=args.daily_limit,
        max_steps=args.max_steps,
    )


if __name__ == "__main__":
    main()
