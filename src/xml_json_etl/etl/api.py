"""
ETL Python API
--------------
Import this module to use the converter as a library from other Python code.

Example usage:
    from xml_json_etl.etl.api import convert_file, convert_directory
    from xml_json_etl.etl.transform import ConvertConfig, ListDetection

    cfg = ConvertConfig.build(ignore_attributes=["schemaLocation"], list_detection=ListDetection.STEM)
    doc = convert_file("data/xml/workbooks.xml", cfg)
    report = convert_directory("data/xml", "data/json", cfg, root_key="tsResponse")
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from xml_json_etl.constants import JSON_INDENT, JSON_SUFFIX, XML_SUFFIX
from xml_json_etl.errors import ConversionError, DocumentConversionError
from xml_json_etl.etl.load.json_writer import select_root, write_json
from xml_json_etl.etl.transform.config import ConvertConfig
from xml_json_etl.etl.transform.xml_to_json import xml_file_to_json, xml_to_json
from xml_json_etl.logging_setup import get_logger

log = get_logger(__name__)


@dataclass
class BatchReport:
    converted: List[Tuple[Path, Path]] = field(default_factory=list)
    planned: List[Tuple[Path, Path]] = field(default_factory=list)
    failed: Dict[Path, str] = field(default_factory=dict)
    skipped: List[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def convert_string(data: Union[bytes, str], config: Optional[ConvertConfig] = None) -> dict:
    """Convert an XML document held in memory into {root: value}."""
    return xml_to_json(data, config)


def convert_file(path: Union[str, Path], config: Optional[ConvertConfig] = None) -> dict:
    """Convert one XML file into {root: value}.

    Any conversion failure is re-raised as DocumentConversionError naming the file.
    """
    try:
        return xml_file_to_json(path, config)
    except ConversionError as exc:
        raise DocumentConversionError(Path(path), exc) from exc


def output_path_for(input_path: Path, output_dir: Path) -> Path:
    return (Path(output_dir) / input_path.stem).with_suffix(JSON_SUFFIX)


def iter_xml_files(input_dir: Union[str, Path]) -> Tuple[List[Path], List[Path]]:
    """Split the entries of `input_dir` (non-recursive) into XML files and skipped entries."""
    xml_files: List[Path] = []
    skipped: List[Path] = []
    for entry in sorted(Path(input_dir).iterdir()):
        if entry.is_file() and entry.suffix == XML_SUFFIX:
            xml_files.append(entry)
        else:
            skipped.append(entry)
    return xml_files, skipped


def convert_directory(
    input_dir: Union[str, Path],
    output_dir: Union[str, Path],
    config: Optional[ConvertConfig] = None,
    *,
    root_key: Optional[str] = None,
    indent: Optional[int] = JSON_INDENT,
    keep_going: bool = False,
    dry_run: bool = False,
) -> BatchReport:
    """Convert every `*.xml` file in `input_dir` into `<output_dir>/<stem>.json`.

    By default the first failing document aborts the batch by raising
    DocumentConversionError. With `keep_going` failures are logged and
    collected in the report instead.
    """
    config = config or ConvertConfig()
    input_dir = Path(input_dir)
    output_dir = Path(output_dir)
    if not input_dir.is_dir():
        raise NotADirectoryError(f"Input directory not found: {input_dir}")

    report = BatchReport()
    xml_files, report.skipped = iter_xml_files(input_dir)
    for entry in report.skipped:
        log.debug("Skipping entry", path=str(entry))

    for xml_path in xml_files:
        out_path = output_path_for(xml_path, output_dir)
        if dry_run:
            log.info("Conversion planned", input=str(xml_path), output=str(out_path))
            report.planned.append((xml_path, out_path))
            continue

        try:
            document = convert_file(xml_path, config)
            try:
                value = select_root(document, root_key)
            except ConversionError as exc:
                raise DocumentConversionError(xml_path, exc) from exc
        except DocumentConversionError as exc:
            if not keep_going:
                raise
            log.error("Failed to convert", input=str(xml_path), error=str(exc.cause))
            report.failed[xml_path] = str(exc.cause)
            continue

        write_json(value, out_path, indent=indent)
        log.info("File written", input=str(xml_path), output=str(out_path))
        report.converted.append((xml_path, out_path))

    log.info(
        "Batch finished",
        converted=len(report.converted),
        failed=len(report.failed),
        skipped=len(report.skipped),
        dry_run=dry_run,
    )
    return report
