"""
Text extractors for libscout.

Stateless helpers that turn raw component, script and markdown text into
structured fragments: props, emitted events, imports, exports, constants,
functions, templates, markdown sections, fenced code samples and the
Props/Events documentation tables.

None of these ever raise on malformed input. If the pattern isn't there,
you get an empty result. I don't parse JavaScript, I squint at it.
"""

import re
from typing import List, Optional, Tuple

from libscout.models import (
    CodeExample,
    Constant,
    Event,
    EventDoc,
    Function,
    MarkdownSection,
    Prop,
    PropDoc,
)

# --- Component Patterns ---

_PROPS_OBJECT = re.compile(r"\bprops\s*:\s*\{")
_PROPS_ARRAY = re.compile(r"\bprops\s*:\s*\[([^\]]*)\]")
_PROP_OPENER = re.compile(r"(\w+)\s*:\s*\{")
_PROP_SHORTHAND = re.compile(r"(\w+)\s*:\s*(\[[^\]]*\]|[A-Za-z_]\w*)\s*(?=,|\n|$)")
_PROP_TYPE = re.compile(r"\btype\s*:\s*(\[[^\]]*\]|\w+)")
_PROP_DEFAULT = re.compile(r"\bdefault\s*:\s*([^,}\n]+)")

_EMIT_CALL = re.compile(r"\$emit\(\s*['\"`]([^'\"`]+)['\"`]")
_MIXINS = re.compile(r"\bmixins\s*:\s*\[([^\]]*)\]")
_TEMPLATE = re.compile(r"<template[^>]*>(.*)</template>", re.DOTALL)

# --- Script Patterns ---

_IMPORT_FROM = re.compile(r"\bimport\s+[^;'\"`]*?\bfrom\s+['\"`]([^'\"`]+)['\"`]")
_NAMED_EXPORTS = re.compile(r"\bexport\s*\{([^}]*)\}")
_DEFAULT_EXPORT = re.compile(
    r"\bexport\s+default\s+(?:async\s+)?(?:function\s*\*?\s*|class\s+)?(\w+)"
)
_DIRECT_EXPORT = re.compile(
    r"\bexport\s+(?:async\s+)?(?:(?:const|let|var|class)\s+|function\s*\*?\s*)(\w+)"
)
_CONSTANT = re.compile(r"^(export\s+)?const\s+(\w+)\s*=\s*", re.MULTILINE)
_FUNCTION_DECL = re.compile(
    r"(\bexport\s+(?:default\s+)?)?(?:async\s+)?\bfunction\s*\*?\s*(\w+)\s*\("
)
_ARROW_FUNCTION = re.compile(
    r"(\bexport\s+)?\b(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s+)?"
    r"(?:\([^)]*\)|\w+)\s*=>"
)

# --- Markdown Patterns ---

_HEADING = re.compile(r"^(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
_FENCE = re.compile(r"^\s*(```|~~~)")
_CODE_BLOCK = re.compile(r"```([\w+#.-]*)[^\n]*\n(.*?)```", re.DOTALL)
_TABLE_SEPARATOR = re.compile(r"^\|?\s*:?-{2,}:?\s*(\|\s*:?-{2,}:?\s*)*\|?$")

_CLOSERS = {"{": "}", "[": "]", "(": ")"}


def _matching_close(text: str, open_index: int) -> int:
    """Index of the bracket closing the one at open_index.

    Quoted strings and comments are skipped. Unbalanced input returns len(text).
    """
    opener = text[open_index]
    closer = _CLOSERS[opener]
    depth = 0
    quote: Optional[str] = None
    i = open_index
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif text.startswith("//", i):
            newline = text.find("\n", i)
            i = len(text) if newline == -1 else newline
            continue
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = len(text) if end == -1 else end + 2
            continue
        elif ch in ("'", '"', "`"):
            quote = ch
        elif ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return len(text)


def _top_level_entries(body: str) -> List[Tuple[str, Optional[str], Optional[str]]]:
    """Split a props object body into (name, entry body, shorthand type)."""
    entries: List[Tuple[str, Optional[str], Optional[str]]] = []
    depth = 0
    i = 0
    while i < len(body):
        ch = body[i]
        at_word_start = i == 0 or not (body[i - 1].isalnum() or body[i - 1] == "_")
        if depth == 0 and at_word_start:
            match = _PROP_OPENER.match(body, i)
            if match:
                open_index = match.end() - 1
                close_index = _matching_close(body, open_index)
                entries.append((match.group(1), body[open_index + 1:close_index], None))
                i = close_index + 1
                continue
            match = _PROP_SHORTHAND.match(body, i)
            if match:
                entries.append((match.group(1), None, match.group(2)))
                i = match.end()
                continue
        if ch in "{[(":
            depth += 1
        elif ch in "}])":
            depth -= 1
        i += 1
    return entries


def extract_props(content: str) -> List[Prop]:
    """Extract declared component props in declaration order."""
    match = _PROPS_OBJECT.search(content)
    if not match:
        array_match = _PROPS_ARRAY.search(content)
        if not array_match:
            return []
        names = re.findall(r"['\"`]([^'\"`]+)['\"`]", array_match.group(1))
        return [Prop(name=name) for name in names]

    open_index = match.end() - 1
    close_index = _matching_close(content, open_index)
    body = content[open_index + 1:close_index]

    props: List[Prop] = []
    for name, definition, shorthand in _top_level_entries(body):
        if definition is None:
            props.append(Prop(name=name, type=shorthand or "unknown"))
            continue

        type_match = _PROP_TYPE.search(definition)
        default_match = _PROP_DEFAULT.search(definition)
        props.append(Prop(
            name=name,
            type=type_match.group(1) if type_match else "unknown",
            default=default_match.group(1).strip() if default_match else None,
        ))
    return props


def extract_events(content: str) -> List[Event]:
    """Extract emitted event names, de-duplicated in first-seen order."""
    seen: List[str] = []
    for name in _EMIT_CALL.findall(content):
        if name not in seen:
            seen.append(name)
    return [Event(name=name, source="emit") for name in seen]


def extract_mixins(content: str) -> List[str]:
    match = _MIXINS.search(content)
    if not match:
        return []
    return re.findall(r"\w+", match.group(1))


def extract_imports(content: str) -> List[str]:
    """Module specifiers of every `import ... from '...'` statement."""
    return _IMPORT_FROM.findall(content)


def extract_template(content: str) -> str:
    match = _TEMPLATE.search(content)
    return match.group(1).strip() if match else ""


def extract_exports(content: str) -> List[str]:
    """Exported symbols: named lists, then the default export, then direct exports."""
    exports: List[str] = []

    for match in _NAMED_EXPORTS.finditer(content):
        exports.extend(
            name.strip() for name in match.group(1).split(",") if name.strip()
        )

    default_match = _DEFAULT_EXPORT.search(content)
    if default_match:
        exports.append(f"default: {default_match.group(1)}")

    exports.extend(_DIRECT_EXPORT.findall(content))
    return exports


def extract_constants(content: str) -> List[Constant]:
    """Top-level `const NAME = VALUE` declarations with their raw value."""
    constants: List[Constant] = []
    for match in _CONSTANT.finditer(content):
        start = match.end()
        if start < len(content) and content[start] in "{[":
            end = _matching_close(content, start)
            value = content[start:end + 1]
        else:
            end = start
            while end < len(content) and content[end] not in ";\n":
                end += 1
            value = content[start:end]

        value = value.strip().rstrip(";").strip()
        constants.append(Constant(
            name=match.group(2),
            value=value or None,
            exported=bool(match.group(1)),
        ))
    return constants


def extract_functions(content: str) -> List[Function]:
    """Named function declarations followed by arrow-function assignments."""
    functions = [
        Function(name=match.group(2), kind="function", exported=bool(match.group(1)))
        for match in _FUNCTION_DECL.finditer(content)
    ]
    functions.extend(
        Function(name=match.group(2), kind="arrow", exported=bool(match.group(1)))
        for match in _ARROW_FUNCTION.finditer(content)
    )
    return functions


# --- Markdown ---


def parse_markdown_sections(content: str) -> List[MarkdownSection]:
    """Split markdown on headings of any level into a flat, ordered list.

    Heading markers inside fenced code blocks are not treated as headings.
    Text before the first heading is dropped.
    """
    sections: List[MarkdownSection] = []
    title: Optional[str] = None
    level = 0
    lines: List[str] = []
    in_fence = False

    def flush() -> None:
        if title is not None:
            sections.append(MarkdownSection(
                title=title, content="\n".join(lines).strip(), level=level,
            ))

    for line in content.splitlines():
        if _FENCE.match(line):
            in_fence = not in_fence
        heading = None if in_fence else _HEADING.match(line)
        if heading and heading.group(2):
            flush()
            title = heading.group(2).strip()
            level = len(heading.group(1))
            lines = []
        else:
            lines.append(line)

    flush()
    return sections


def extract_code_examples(content: str) -> List[CodeExample]:
    return [
        CodeExample(language=language or "text", code=code.strip())
        for language, code in _CODE_BLOCK.findall(content)
    ]


def _table_section(content: str, heading: str) -> str:
    """Body of the first section titled `heading`, up to the next heading."""
    collected: List[str] = []
    inside = False
    for line in content.splitlines():
        match = _HEADING.match(line)
        if match:
            if inside:
                break
            inside = match.group(2).strip().lower() == heading.lower()
            continue
        if inside:
            collected.append(line)
    return "\n".join(collected)


def _table_rows(section: str, min_columns: int) -> List[List[str]]:
    rows: List[List[str]] = []
    for line in section.splitlines():
        line = line.strip()
        if not line.startswith("|") or _TABLE_SEPARATOR.match(line):
            continue
        cells = [cell.strip() for cell in line.strip("|").split("|")]
        if len(cells) >= min_columns:
            rows.append(cells)
    # First row is the header
    return rows[1:]


def extract_props_documentation(content: str) -> List[PropDoc]:
    """Rows of the "Props" table: name | type | default | description."""
    section = _table_section(content, "Props")
    return [
        PropDoc(name=row[0], type=row[1], default=row[2], description=row[3])
        for row in _table_rows(section, 4)
    ]


def extract_events_documentation(content: str) -> List[EventDoc]:
    """Rows of the "Events" table: name | type | description."""
    section = _table_section(content, "Events")
    return [
        EventDoc(name=row[0], type=row[1], description=row[2])
        for row in _table_rows(section, 3)
    ]


def extract_description(documentation: str) -> str:
    """One-line summary: first sentence of the first non-empty line."""
    if not documentation:
        return ""

    for line in documentation.splitlines():
        if line.strip():
            cleaned = re.sub(r"^#+\s*", "", line).strip()
            sentence = cleaned.split(".")[0]
            if len(sentence) > 100:
                return sentence[:100] + "..."
            return sentence

    return ""
