import argparse
import sys

from raptor.client import RaptorClient
from raptor.config.settings import Settings
from raptor.exceptions import RaptorError
from raptor.lifecycle.models import ProcessOptions
from raptor.logging.logger import Log


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="raptor-process",
        description="Upload one document to Raptor and wait for its chunks.",
    )
    parser.add_argument("path", help="file to upload")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--no-wait", action="store_true", help="return after submission")
    mode.add_argument("--stream", action="store_true", help="print progress events")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build client -> process one file."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        with RaptorClient(settings) as client:
            if args.stream:
                for event in client.process_stream(args.path):
                    print(f"{event.stage}: {event.percent}% {event.message}")
                return 0

            result = client.process(args.path, ProcessOptions(wait=not args.no_wait))
    except RaptorError as exc:
        Log.error(f"Processing failed: {exc}")
        return 1

    print(f"document_id={result.document_id} variant_id={result.variant_id}")
    print(f"version={result.version_number} chunks={len(result.chunks)}")
    if result.is_duplicate:
        print(f"duplicate of {result.canonical_document_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
