"""Message catalog for ptree diagnostics.

Messages are keyed templates using ``{}`` placeholders that are filled
positionally, so the same wording is shared by exceptions and log lines.
"""

MESSAGES: dict[str, str] = {
    "pt.no_shorties": "Pairtree path ({}) contains no shorties",
    "pt.bad_segment_length": "Pairtree path ({}) has parts of incorrect length",
    "pt.empty_encapsulating_dir": "Pairtree path ({}) ends with an empty encapsulating directory",
    "pt.truncated_escape": "Truncated hex escape at position {} in ({})",
    "pt.bad_hex": "Invalid hex digits '{}' at position {} in ({})",
    "pt.bad_utf8": "Escaped bytes in ({}) are not valid UTF-8",
    "pt.cant_mkdirs": "Unable to create pairtree directory: {}",
    "pt.object_retrieved1": "Retrieved pairtree object {} for ID '{}'",
    "pt.object_retrieved2": "Retrieved pairtree object {} for prefix '{}' and ID '{}'",
    "pt.root_created": "Initialized pairtree root at: {}",
    "pt.bad_version_file": "Pairtree root {} is missing its version file",
    "pt.prefix_mismatch": "Pairtree root {} has prefix '{}', not '{}'",
    "pt.empty_id": "Identifier '{}' leaves nothing to store under {} once its prefix is removed",
    "pt.not_object_dir": "Path ({}) is not a pairtree object directory",
    "pt.bad_separator": "Path separator {} cannot be used for directories on this system",
}


def format_message(key: str, *args) -> str:
    """Fill a catalog template with positional arguments.

    Placeholders without a matching argument are left as a literal ``{}``.

    Raises:
        KeyError: If the key is not in the catalog
    """
    template = MESSAGES[key]
    parts = template.split("{}")
    out = [parts[0]]
    for index, part in enumerate(parts[1:]):
        out.append(str(args[index]) if index < len(args) else "{}")
        out.append(part)
    return "".join(out)


__all__ = ["MESSAGES", "format_message"]
