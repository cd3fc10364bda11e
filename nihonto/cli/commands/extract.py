"""Extraction CLI commands."""

from nihonto.backends import open_backend
from nihonto.config import ConfigError
from nihonto.extraction.extractor import extract_volumes
from nihonto.extraction.volumes import VolumeSpec, add_volume, load_volumes

from .common import banner, settings_from_args


def cmd_extract(args):
    """Extract oshigata/setsumei pairs from one or more volumes."""
    settings = settings_from_args(args)
    if settings is None:
        return 1

    registered = load_volumes(settings.data_dir)
    numbers = args.volume or list(registered)

    missing = [n for n in numbers if n not in registered]
    if missing:
        print(f"Unknown volume(s): {', '.join(map(str, missing))}. Use add-volume first.")
        return 1

    if (args.start is not None or args.end is not None) and len(numbers) != 1:
        print("Error: --start/--end require exactly one --volume")
        return 1

    try:
        volumes = [registered[n].bounded(args.start, args.end) for n in numbers]
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.dry_run:
        banner("OSHI3 NIHONTO EXTRACTION (dry run)")
        # nothing is uploaded or inserted
        results = extract_volumes(volumes, None, None, dry_run=True)
    else:
        try:
            backend = open_backend(settings)
        except ConfigError as e:
            print(f"Error: {e}")
            return 1

        banner("OSHI3 NIHONTO EXTRACTION")
        try:
            results = extract_volumes(volumes, backend.store, backend.catalog)
        finally:
            backend.close()

    for result in results:
        if result.error:
            print(f"✗ Volume {result.volume} failed: {result.error}")
            continue
        print(
            f"✓ Volume {result.volume} complete: {result.created} items processed "
            f"({result.pages} pages, {result.skipped} pairs skipped, {result.failed} failed)"
        )
        for error in result.errors[:3]:  # Show first 3 errors
            print(f"    - {error}")

    return 1 if any(r.error for r in results) else 0


def cmd_add_volume(args):
    """Register a source PDF as a volume."""
    settings = settings_from_args(args)
    if settings is None:
        return 1

    try:
        spec = VolumeSpec(args.number, args.pdf, args.start, args.end)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    add_volume(settings.data_dir, spec)
    print(f"Added volume {spec.number}: {spec.filename} (pages {spec.content_start}-{spec.content_end})")
    return 0


def cmd_list_volumes(args):
    """List built-in and registered volumes."""
    settings = settings_from_args(args)
    if settings is None:
        return 1

    print("Volumes:")
    for spec in load_volumes(settings.data_dir).values():
        print(f"  - {spec.number}: {spec.filename} (pages {spec.content_start}-{spec.content_end})")
    return 0


def setup_extract_commands(subparsers):
    """Setup extraction subcommands."""
    extract_parser = subparsers.add_parser("extract", help="Rasterize volumes and store oshigata/setsumei pairs")
    extract_parser.add_argument("--volume", type=int, action="append", help="Volume number (repeatable; default: all)")
    extract_parser.add_argument("--start", type=int, help="First PDF page of a test range")
    extract_parser.add_argument("--end", type=int, help="Last PDF page of a test range")
    extract_parser.add_argument("--dry-run", action="store_true", help="Classify and pair without uploading")
    extract_parser.set_defaults(func=cmd_extract)

    add_volume_parser = subparsers.add_parser("add-volume", help="Register a source PDF")
    add_volume_parser.add_argument("number", type=int, help="Volume number")
    add_volume_parser.add_argument("--pdf", required=True, help="Path to the volume PDF")
    add_volume_parser.add_argument("--start", type=int, required=True, help="First content page")
    add_volume_parser.add_argument("--end", type=int, required=True, help="Last content page")
    add_volume_parser.set_defaults(func=cmd_add_volume)

    list_volumes_parser = subparsers.add_parser("list-volumes", help="List known volumes")
    list_volumes_parser.set_defaults(func=cmd_list_volumes)
