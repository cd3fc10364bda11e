"""Translation CLI commands."""

from nihonto.backends import open_backend
from nihonto.catalog.models import CatalogError
from nihonto.config import ConfigError
from nihonto.transcription.completion import CompletionClient
from nihonto.transcription.ocr import VisionOcr
from nihonto.transcription.pipeline import TranscriptionPipeline
from nihonto.transcription.runner import ITEM_DELAY_SECONDS, translate_pending

from .common import banner, settings_from_args


def cmd_translate(args):
    """OCR, correct, and translate every untranslated setsumei page."""
    settings = settings_from_args(args)
    if settings is None:
        return 1

    try:
        settings.require_completion()
        backend = open_backend(settings)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    banner("OSHI3 NIHONTO TRANSLATION PIPELINE")

    pipeline = TranscriptionPipeline(
        ocr=VisionOcr(),
        completion=CompletionClient(settings.openrouter_api_key),
        catalog=backend.catalog,
        vision_model=settings.vision_model,
        text_model=settings.text_model,
    )

    try:
        summary = translate_pending(backend.catalog, pipeline, delay=args.delay, limit=args.limit)
    except CatalogError as e:
        print(f"Database error: {e}")
        return 1
    finally:
        backend.close()

    if summary.total == 0:
        print("No items to translate. All done!")
        return 0

    banner("TRANSLATION SUMMARY")
    print(f"✓ Successful: {summary.successful}")
    print(f"✗ Failed: {summary.failed}")
    print(f"Total: {summary.total}\n")

    if summary.failures:
        print("Failed items:")
        for result in summary.failures:
            print(f"  - Vol{result.volume} Item {result.item_number}: {result.error}")

    # item failures are reported, not fatal
    return 0


def setup_translate_commands(subparsers):
    """Setup translation subcommands."""
    translate_parser = subparsers.add_parser("translate", help="Translate untranslated setsumei pages")
    translate_parser.add_argument("--limit", type=int, help="Process at most this many items")
    translate_parser.add_argument(
        "--delay", type=float, default=ITEM_DELAY_SECONDS, help="Seconds to wait between items (default: 2)"
    )
    translate_parser.set_defaults(func=cmd_translate)
