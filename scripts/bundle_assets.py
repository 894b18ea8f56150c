#!/usr/bin/env python3
"""Bundle a directory of JS or CSS files into a single file for production."""
import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from organizer import BundleKind, ConfigManager, Organizer

SUFFIXES = {BundleKind.SCRIPT: ".js", BundleKind.STYLE: ".css"}


def collect(source_dir: Path, kind: BundleKind, priority: list[str]) -> list[str]:
    """Priority files first, then the remaining files alphabetically."""
    names: list[str] = []
    for name in priority:
        if (source_dir / name).is_file():
            names.append(name)
    for path in sorted(source_dir.glob(f"*{SUFFIXES[kind]}")):
        if path.name not in names:
            names.append(path.name)
    return names


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("source_dir", type=Path)
    parser.add_argument("output", type=Path)
    parser.add_argument("--kind", choices=[k.value for k in BundleKind], default=BundleKind.SCRIPT.value)
    parser.add_argument("--name", default="bundle")
    parser.add_argument("--version", default="1.0")
    parser.add_argument("--priority", nargs="*", default=[], help="Files that must load first")
    parser.add_argument("--minify", action="store_true")
    parser.add_argument("--signature", action="store_true")
    args = parser.parse_args(argv)

    kind = BundleKind(args.kind)
    config = ConfigManager(config={
        "signature": args.signature,
        kind.value: {"base_path": str(args.source_dir), "cache": False, "minify": args.minify},
    })
    organizer = Organizer(config, cache=_NullCache())

    files = collect(args.source_dir, kind, args.priority)
    bundle = organizer.bundle(kind, args.name, files, args.version)

    args.output.write_text(bundle.embed_here(), encoding="utf-8")
    print(f"Bundled {len(files)} files into {args.output} ({args.output.stat().st_size:,} bytes)")
    return 0


class _NullCache:
    """Cache that never holds anything; the output file is the artifact."""

    def put(self, key, value):
        pass

    def get(self, key):
        return None

    def is_usable(self, key):
        return False


if __name__ == "__main__":
    sys.exit(main())
