"""Write converted documents to JSON files."""
from __future__ import annotations

import json
from pathlib import Path
from typing import IO, Any, Dict, Optional, Union

from xml_json_etl.constants import JSON_ENCODING, JSON_INDENT
from xml_json_etl.errors import UnexpectedRootError


def select_root(document: Dict[str, Any], root_key: Optional[str]) -> Any:
    """Return the value to write for a converted document.

    Without a `root_key` the whole {root: value} document is kept. With one,
    the root element must carry that name and only its value is returned.
    """
    if root_key is None:
        return document
    (found,) = document.keys()
    if found != root_key:
        raise UnexpectedRootError(root_key, found)
    return document[root_key]


def dumps_json(value: Any, indent: Optional[int] = JSON_INDENT) -> str:
    return json.dumps(value, ensure_ascii=False, indent=indent)


def dump_json(value: Any, fh: IO[str], indent: Optional[int] = JSON_INDENT) -> None:
    json.dump(value, fh, ensure_ascii=False, indent=indent)
    fh.write("\n")


def write_json(
    value: Any, output_path: Union[str, Path], indent: Optional[int] = JSON_INDENT
) -> Path:
    outp = Path(output_path)
    outp.parent.mkdir(parents=True, exist_ok=True)
    with open(outp, "w", encoding=JSON_ENCODING) as fh:
        dump_json(value, fh, indent=indent)
    return outp
