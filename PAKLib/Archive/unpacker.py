import logging
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional

from .decoder_base import ArchiveDecoder

log = logging.getLogger(__name__)


@dataclass
class UnpackSummary:
    total: int = 0
    composed: int = 0
    saved: int = 0
    failed: int = 0


def unpack(
    container: BinaryIO,
    decoder: ArchiveDecoder,
    saver,
    progress: Optional[Callable[[str], None]] = None,
    started: Optional[Callable[[int], None]] = None,
) -> UnpackSummary:
    """Extract every entry of `container` through `saver`.

    Composite files are produced first; entries folded into them are skipped
    afterwards. Structural errors propagate and abort the archive.
    `started` receives the number of entries once the table is read.
    """
    meta = decoder.read_meta(container)
    decoder.check_options()

    summary = UnpackSummary(total=len(meta))
    if started is not None:
        started(summary.total)
    summary.composed, summary.failed = decoder.preprocess(container, meta, saver)
    log.debug("%d of %d entries left after preprocessing", len(meta.pending()), summary.total)

    for index in range(len(meta)):
        output_file = decoder.read_file(container, meta, index)
        if output_file is not None:
            if saver.save(output_file.path, output_file.data):
                summary.saved += 1
            else:
                summary.failed += 1
        if progress is not None:
            progress(meta[index].path)

    log.info("%d entries, %d composed, %d saved, %d failed", summary.total, summary.composed, summary.saved, summary.failed)
    return summary


__all__ = ["UnpackSummary", "unpack"]
