# lcd_pipeline.py
#
# ============================================================
# LCD Asset Code: batch pipeline
# ============================================================
#
# For every input row, in input order:
#
#   row text -> identifier -> checksum -> encoding table -> 48-bit pattern
#            -> 256x1 image -> image sink (<identifier>.png)
#
# Fail-fast: the first error on any row stops the whole run. Rows already
# written stay on disk, but the run reports failure and nothing is retried.
#
# Row sources and image sinks are small protocols so the pipeline can run
# against in-memory collaborators as well as files.
#
# ============================================================

from __future__ import annotations

from contextlib import closing
from pathlib import Path
from typing import Dict, Generator, List, Protocol, Tuple

from PIL import Image

from lcd_config import PipelineConfig
from lcd_digits import ID_LENGTH, Asset, build_asset
from lcd_errors import AssetIOError, DigitParseError, RowLengthError
from lcd_logging import get_logger
from lcd_render import render_pixel_row

logger = get_logger(__name__)

DIGIT_CHARS = "0123456789"


# ============================================================
# Collaborators
# ============================================================

class RowSource(Protocol):
    def rows(self) -> Generator[Tuple[int, str], None, None]:
        """Yield (1-based row number, row text without line terminator)."""
        ...


class ImageSink(Protocol):
    def write(self, asset: Asset, image: Image.Image) -> str:
        """Persist one rendered image and return where it went."""
        ...


class FileRowSource:
    """Reads one identifier per line from a text file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def rows(self) -> Generator[Tuple[int, str], None, None]:
        try:
            with self.path.open("r", encoding="utf-8", newline="\n") as fh:
                for row_number, line in enumerate(fh, start=1):
                    yield row_number, _strip_line_end(line)
        except (OSError, UnicodeDecodeError) as error:
            raise AssetIOError(f"Failed to read input file {self.path}: {error}") from error


class ListRowSource:
    """Serves rows from memory, numbered from 1."""

    def __init__(self, lines: List[str]) -> None:
        self.lines = list(lines)

    def rows(self) -> Generator[Tuple[int, str], None, None]:
        for row_number, line in enumerate(self.lines, start=1):
            yield row_number, line


class DirectoryImageSink:
    """Writes <identifier>.png into a directory, creating it if absent."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def write(self, asset: Asset, image: Image.Image) -> str:
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise AssetIOError(f"Failed to create output directory {self.output_dir}: {error}") from error

        out_path = self.output_dir / f"{asset.id_str}.png"
        try:
            image.save(out_path, format="PNG")
        except OSError as error:
            raise AssetIOError(f"Failed to write image {out_path}: {error}") from error

        logger.debug("image_written", path=str(out_path))
        return str(out_path)


class MemoryImageSink:
    """Keeps rendered images in a dict keyed by identifier."""

    def __init__(self) -> None:
        self.images: Dict[str, Image.Image] = {}

    def write(self, asset: Asset, image: Image.Image) -> str:
        self.images[asset.id_str] = image
        return asset.id_str


def _strip_line_end(line: str) -> str:
    # Rows end at "\n" only; one "\r" before it is dropped.
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


# ============================================================
# Row parsing and processing
# ============================================================

def parse_row(text: str, row_number: int) -> Tuple[int, ...]:
    """
    Parse one input row into a 4-digit identifier.

    Raises:
      RowLengthError : row is not exactly 4 characters
      DigitParseError: a character is not 0..9 (the first offending one is named)
    """
    if len(text) != ID_LENGTH:
        raise RowLengthError(row_number, text)

    digits: List[int] = []
    for ch in text:
        if ch not in DIGIT_CHARS:
            raise DigitParseError(row_number, ch)
        digits.append(int(ch))
    return tuple(digits)


def process_row(text: str, row_number: int, sink: ImageSink) -> Asset:
    """Run one row through parse -> encode -> render -> persist."""
    identifier = parse_row(text, row_number)
    asset, meta = build_asset(identifier)
    image = render_pixel_row(asset.pattern)
    location = sink.write(asset, image)
    logger.debug(
        "asset_rendered",
        row=row_number,
        identifier=meta["identifier"],
        checksum=meta["checksum_digits"],
        location=location,
    )
    return asset


def run_pipeline(source: RowSource, sink: ImageSink) -> int:
    """
    Process every row of the source in order.

    Returns the number of rows processed. The first error propagates to the
    caller and ends the run.
    """
    count = 0
    with closing(source.rows()) as rows:
        for row_number, text in rows:
            process_row(text, row_number, sink)
            count += 1

    logger.info("Done", rows=count)
    return count


def run_from_config(config: PipelineConfig) -> int:
    """File-based run: input_file -> output_dir."""
    return run_pipeline(FileRowSource(config.input_file), DirectoryImageSink(config.output_dir))
