"""Utility functions for reading source files and writing generated code.

This module provides the file-system glue around the parsers and
generators: loading input text, finding convertible files and writing
generated files below an output directory.
"""

from pathlib import Path
from typing import Iterable, List, Union

from .diagnostics import ConverterError
from .logging_config import get_logger

logger = get_logger(__name__)

PROCESS_EXTENSIONS = (".process", ".bwp")
SCHEMA_EXTENSIONS = (".xsd",)
CONVERTIBLE_EXTENSIONS = PROCESS_EXTENSIONS + SCHEMA_EXTENSIONS


class FileLoaderError(ConverterError):
    """Custom exception for file loading and writing errors."""

    pass


def is_process_file(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lower() in PROCESS_EXTENSIONS


def is_schema_file(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lower() in SCHEMA_EXTENSIONS


def read_text(file_path: Union[str, Path]) -> str:
    """Read a UTF-8 source file.

    Args:
        file_path: Path to the file.

    Returns:
        File content.

    Raises:
        FileNotFoundError: If file doesn't exist.
        FileLoaderError: If file cannot be read or decoded.
    """
    file_path = Path(file_path)
    logger.debug(f"Reading source file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        logger.error(f"File is not valid UTF-8: {file_path}")
        raise FileLoaderError(f"File is not valid UTF-8: {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise FileLoaderError(f"Error reading file {file_path}: {e}") from e


def find_convertible_files(
    input_path: Union[str, Path], extensions: Iterable[str] = CONVERTIBLE_EXTENSIONS
) -> List[Path]:
    """Find process and schema files.

    Args:
        input_path: A file or a directory searched recursively.
        extensions: Accepted file suffixes.

    Returns:
        Sorted list of matching files. A single file is returned as is,
        whatever its suffix; callers decide whether it is supported.

    Raises:
        FileNotFoundError: If the path doesn't exist.
    """
    input_path = Path(input_path)
    if not input_path.exists():
        raise FileNotFoundError(f"Input path not found: {input_path}")

    if input_path.is_file():
        return [input_path]

    wanted = {ext.lower() for ext in extensions}
    files = sorted(
        path
        for path in input_path.rglob("*")
        if path.is_file() and path.suffix.lower() in wanted
    )
    logger.info(f"Found {len(files)} convertible file(s) under {input_path}")
    return files


def write_generated_files(generated_files, output_dir: Union[str, Path]) -> List[Path]:
    """Write generated files below the output directory.

    Args:
        generated_files: Iterable of GeneratedFile records.
        output_dir: Root directory; created when missing.

    Returns:
        Paths written, in input order.

    Raises:
        FileLoaderError: If a file would land outside the output directory
            or cannot be written.
    """
    root = Path(output_dir).resolve()
    written = []

    for generated in generated_files:
        target = (root / generated.path).resolve()
        if root not in target.parents:
            raise FileLoaderError(f"Refusing to write outside {root}: {generated.path}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(generated.content, encoding="utf-8")
        except OSError as e:
            logger.error(f"Error writing {target}: {e}", exc_info=True)
            raise FileLoaderError(f"Error writing {target}: {e}") from e

        logger.debug(f"Wrote {target}")
        written.append(target)

    return written
