"""Extraction of multi-valued request sources into a ParameterBag.

Query strings, url-encoded forms and multipart forms all arrive as
``key -> [value, ...]``. HTML array inputs are unwrapped so that

    <input name="tags[]" />
    <input name="tags[]" />

ends up as ``tags -> Multiple(...)`` while a bare ``name`` keeps only its
first value.
"""

from typing import Any, Dict, List, Mapping, Sequence

from python_multipart import FormParser
from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import parse_options_header

from paramconverter.params import Multiple, ParameterBag, Single

ARRAY_SUFFIX = "[]"


def extract_data_from(values: Mapping[str, Sequence[str]], data: ParameterBag) -> ParameterBag:
    """Merge ``values`` into ``data`` and return ``data``.

    Args:
        values: Source keys mapped to their ordered values
        data: Bag being built; existing keys are overwritten

    Returns:
        The same bag, for chaining
    """
    for key, val in values.items():
        if key.endswith(ARRAY_SUFFIX):
            data[key[:-len(ARRAY_SUFFIX)]] = Multiple(tuple(val))
        else:
            data[key] = Single(val[0] if val else "")

    return data


def multi_values(multidict: Any) -> Dict[str, List[str]]:
    """Group a Starlette multi-dict (query params, form data) by key.

    Uploaded files are skipped; only string values are kept.
    """
    grouped: Dict[str, List[str]] = {}
    for key, value in multidict.multi_items():
        if isinstance(value, str):
            grouped.setdefault(key, []).append(value)
    return grouped


def parse_multipart_fields(body: bytes, content_type: str, max_memory: int) -> Dict[str, List[str]]:
    """Parse the non-file fields of a multipart/form-data body.

    File parts are held in memory up to ``max_memory`` bytes, spill to a
    temporary file beyond that, and are closed and dropped once parsed.

    Raises:
        MultipartParseError: missing boundary or malformed body
    """
    _, options = parse_options_header(content_type)
    boundary = options.get(b"boundary")
    if not boundary:
        raise MultipartParseError("Missing boundary in multipart/form-data content type")

    fields: Dict[str, List[str]] = {}
    files: List[Any] = []

    def on_field(field) -> None:
        if field.field_name is None:
            return
        name = field.field_name.decode("utf-8", errors="replace")
        value = (field.value or b"").decode("utf-8", errors="replace")
        fields.setdefault(name, []).append(value)

    def on_file(file) -> None:
        files.append(file)

    parser = FormParser(
        "multipart/form-data",
        on_field,
        on_file,
        boundary=boundary,
        config={"MAX_MEMORY_FILE_SIZE": max(max_memory, 0)},
    )
    try:
        parser.write(body)
        parser.finalize()
    finally:
        for file in files:
            file.close()

    return fields
