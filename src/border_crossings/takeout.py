"""Reading Google Takeout location history exports"""

import zipfile
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from .config import DEFAULT_RECORDS_MEMBER
from .errors import InputReadError
from .logging import get_logger
from .models import RawRecord, TakeoutDocument

logger = get_logger(__name__)

SUPPORTED_SUFFIXES = (".zip", ".json")


def read_takeout_bytes(
    path: Union[str, Path], records_member: str = DEFAULT_RECORDS_MEMBER
) -> bytes:
    """
    Read the raw Records.json document from a .zip archive or a .json file.

    Args:
        path: Takeout archive or extracted Records.json
        records_member: Location of Records.json inside the archive

    Raises:
        InputReadError: if the file cannot be read or has an unsupported type
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".zip":
        try:
            with zipfile.ZipFile(path) as archive:
                data = archive.read(records_member)
        except KeyError as e:
            raise InputReadError(
                f"could not extract {records_member!r} from {str(path)!r}: member not found"
            ) from e
        except (OSError, zipfile.BadZipFile) as e:
            raise InputReadError(f"could not open {str(path)!r}: {e}") from e
    elif suffix == ".json":
        try:
            data = path.read_bytes()
        except OSError as e:
            raise InputReadError(f"could not read file {str(path)!r}: {e}") from e
    else:
        raise InputReadError(
            f"could not handle unknown filetype, must be one of "
            f"{{{', '.join(SUPPORTED_SUFFIXES)}}}: {suffix or str(path)!r}"
        )

    logger.debug("Read Takeout document", path=str(path), size_bytes=len(data))
    return data


def parse_raw_records(data: bytes) -> List[RawRecord]:
    """
    Parse a Records.json document into raw records.

    Raises:
        InputReadError: if the bytes are not UTF-8 JSON with a ``locations`` array
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InputReadError(f"could not read Records.json as utf-8: {e}") from e

    try:
        document = TakeoutDocument.model_validate_json(text)
    except ValidationError as e:
        raise InputReadError(f"could not deserialize json: {e}") from e

    logger.info("Parsed Takeout records", records=len(document.locations))
    return document.locations


def load_takeout_records(
    path: Union[str, Path], records_member: str = DEFAULT_RECORDS_MEMBER
) -> List[RawRecord]:
    """Read and parse a Takeout export in one step"""
    return parse_raw_records(read_takeout_bytes(path, records_member))
