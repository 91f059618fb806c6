"""Lenient INI reader/writer for ARK server configuration files.

The format is deliberately minimal: ``[Section]`` headers and ``Key=Value``
lines. Anything else (comments, blank lines, stray text, pairs before the first
header) is skipped instead of raising, because server files in the wild are full
of vendor comments and hand edits.

Documents are plain insertion-ordered dicts::

    {"ServerSettings": {"XPMultiplier": "2.0", ...}, ...}
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

ConfigDocument = Dict[str, Dict[str, str]]


def _section_name(line: str) -> Optional[str]:
    if len(line) >= 2 and line.startswith("[") and line.endswith("]"):
        return line[1:-1]
    return None


def parse(text: str) -> ConfigDocument:
    """Parse raw ini text into an ordered section -> key -> value mapping.

    Values are everything after the first ``=`` (so they may contain ``=``
    themselves); both key and value are stripped. A repeated header re-opens the
    existing section and later keys overwrite earlier ones.
    """
    doc: ConfigDocument = {}
    current: Optional[str] = None
    # Split on "\n" only; strip() takes care of "\r"
    for raw in text.split("\n"):
        line = raw.strip()
        name = _section_name(line)
        if name is not None:
            # "[]" behaves like no header at all
            current = name or None
            if current is not None:
                doc.setdefault(current, {})
            continue
        if current is None or "=" not in line:
            continue
        key, value = line.split("=", 1)
        doc[current][key.strip()] = value.strip()
    return doc


def serialize(doc: ConfigDocument) -> str:
    """Render a document back to text.

    Each section is emitted as its header, one ``Key=Value`` line per entry and
    a terminating blank line, in document order.
    """
    out = []
    for section, settings in doc.items():
        out.append(f"[{section}]\n")
        for key, value in settings.items():
            out.append(f"{key}={value}\n")
        out.append("\n")
    return "".join(out)


def copy_document(doc: ConfigDocument) -> ConfigDocument:
    return {section: dict(settings) for section, settings in doc.items()}


def get_value(doc: ConfigDocument, section: str, key: str, default: str = "") -> str:
    return doc.get(section, {}).get(key, default)


FRAGMENT_SEPARATOR = "\n\n"


def compose(raw_text: str, fragment: str) -> str:
    """Append ``fragment`` after a blank line.

    Plain concatenation: nothing is merged or de-duplicated, so appending a
    fragment whose section already exists produces a repeated header that the
    parser folds back into the same section.
    """
    return raw_text + FRAGMENT_SEPARATOR + fragment


def update_text(text: str, doc: ConfigDocument) -> str:
    """Rewrite ``text`` in place so that it parses to ``doc``.

    Only the lines that differ are touched: a changed value rewrites the last
    occurrence of its key (the one ``parse`` keeps), removed keys and sections
    lose their lines, new keys go after the last line of their section and new
    sections are appended at the end. Comments, blank lines and repeated keys
    such as ``LevelExperienceRampOverrides`` survive.
    """
    current = parse(text)
    if current == doc:
        return text

    lines = text.split("\n")
    # Per line: (section, key) for pairs, (section, None) for headers, None otherwise
    layout: List[Optional[Tuple[str, Optional[str]]]] = []
    last_line: Dict[str, int] = {}
    last_pair: Dict[Tuple[str, str], int] = {}
    section: Optional[str] = None
    for i, raw in enumerate(lines):
        line = raw.strip()
        name = _section_name(line)
        if name is not None:
            section = name or None
            layout.append((section, None) if section is not None else None)
            if section is not None:
                last_line[section] = i
            continue
        if section is None or "=" not in line:
            layout.append(None)
            continue
        key = line.split("=", 1)[0].strip()
        layout.append((section, key))
        last_line[section] = i
        last_pair[(section, key)] = i

    out: List[str] = []
    for i, raw in enumerate(lines):
        slot = layout[i]
        keep = True
        if slot is not None:
            sec, key = slot
            if sec not in doc:
                keep = False
            elif key is not None:
                if key not in doc[sec]:
                    keep = False
                elif last_pair[(sec, key)] == i and doc[sec][key] != current[sec][key]:
                    raw = f"{key}={doc[sec][key]}"
        if keep:
            out.append(raw)
        if slot is not None and slot[0] in doc and last_line[slot[0]] == i:
            known = current.get(slot[0], {})
            out.extend(f"{k}={v}" for k, v in doc[slot[0]].items() if k not in known)

    result = "\n".join(out)
    added = {sec: keys for sec, keys in doc.items() if sec not in current}
    if added:
        if result and not result.endswith("\n"):
            result += "\n"
        if result.strip() and not result.endswith("\n\n"):
            result += "\n"
        result += serialize(added)
    return result
