import argparse
import codecs
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from PAKLib.Archive import DecoderRegistry, unpack
from PAKLib.Exceptions import ConfigurationException, PAKLibException
from PAKLib.Formats import Pak1ArchiveDecoder
from PAKLib.Misc import DEFAULT_ENCODING
from PAKLib.Output import FileSaverHdd

log = logging.getLogger("PAKTool")


def args_parse(args=None, namespace=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract Twilight Frontier and Leaf PAK archives from a file or directory.")
    parser.add_argument("input", help="Path to an archive or a directory that contains archives.")
    parser.add_argument("output", help="Directory where extracted files will be written.")
    parser.add_argument("--pattern", default="*.pak", help="Archive glob used when input is a directory.")
    parser.add_argument("--fmt", default=None, help="Skip recognition and use this decoder.")
    parser.add_argument("--pak-version", type=int, choices=(1, 2), default=None, help="Leaf PAK version (1 or 2).")
    parser.add_argument("--codepage", default=DEFAULT_ENCODING, help="Encoding of the file names stored in the archives.")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(args=args, namespace=namespace)


def build_registry(pak_version: Optional[int], codepage: str) -> DecoderRegistry:
    try:
        codecs.lookup(codepage)
    except LookupError as e:
        raise ConfigurationException(f"Unknown codepage: {codepage}") from e

    registry = DecoderRegistry()
    for decoder in registry.decoders:
        decoder.encoding = codepage
        if isinstance(decoder, Pak1ArchiveDecoder) and pak_version is not None:
            decoder.set_version(pak_version)
    return registry


def _gather_archives(root: Path, pattern: str) -> List[Path]:
    archives: List[Path] = [path for path in root.rglob(pattern) if path.is_file()]
    archives.sort()
    return archives


def _extract_archive(source: Path, destination: Path, registry: DecoderRegistry, fmt: Optional[str]) -> bool:
    with open(source, "rb") as fp:
        try:
            decoder = registry.get(fmt) if fmt else registry.detect(fp, source.name)
            log.info("Extracting %s (%s) -> %s", source, decoder.name, destination)
            with tqdm(desc=source.name, unit="file", ncols=150) as pbar:
                summary = unpack(
                    fp,
                    decoder,
                    FileSaverHdd(destination),
                    progress=lambda _: pbar.update(1),
                    started=lambda total: pbar.reset(total=total),
                )
        except PAKLibException as e:
            log.error("%s: %s", source, e.message)
            return False
    return summary.failed == 0


def main(argv=None) -> int:
    args = args_parse(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s")

    input_path = Path(args.input).expanduser().resolve()
    output_path = Path(args.output).expanduser().resolve()

    if not input_path.exists():
        log.error("Input path does not exist: %s", input_path)
        return 1
    if output_path.exists() and not output_path.is_dir():
        log.error("Output path must be a directory: %s", output_path)
        return 1

    try:
        registry = build_registry(args.pak_version, args.codepage)
    except PAKLibException as e:
        log.error(e.message)
        return 1

    if input_path.is_dir():
        archives = _gather_archives(input_path, args.pattern)
        if not archives:
            log.warning("No archives matching %s found in %s.", args.pattern, input_path)
            return 0
        jobs = [(archive, output_path / archive.relative_to(input_path).with_suffix("")) for archive in archives]
    else:
        jobs = [(input_path, output_path)]

    ok = True
    for source, destination in jobs:
        ok = _extract_archive(source, destination, registry, args.fmt) and ok
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
