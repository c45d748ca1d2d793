"""Line-level scanning of board markdown with YAML front-matter."""

import re
from enum import Enum
from typing import NamedTuple

import yaml

from plainban.ids import is_valid_card_id
from plainban.text import normalize_newlines

_FRONT_MATTER = re.compile(r"\A---[ \t]*\n(?:(.*?)\n)?---[ \t]*(?:\n|\Z)", re.DOTALL)
_HEADING = re.compile(r"^##[ \t]+(?:\[([^\]\n]*)\][ \t]*)?(.*?)\s*$")
_CARD = re.compile(r"^-[ \t]+\[([ xX])\](?:[ \t]+(.*?))?\s*$")
_LEADING_ID = re.compile(r"^\[([^\]\n]*)\][ \t]*(.*)$")
_ANCHOR = re.compile(r"\^[A-Za-z0-9/_-]+")
_DUE = re.compile(r"due::[ \t]*([0-9]{4}-[0-9]{2}-[0-9]{2})")
_ARCHIVE_BLOCK = re.compile(
    r"^%%[ \t]*archive:start[ \t]*%%[ \t]*\n(.*?)^%%[ \t]*archive:end[ \t]*%%[ \t]*(?:\n|\Z)",
    re.DOTALL | re.MULTILINE,
)

ARCHIVE_START = "%% archive:start %%"
ARCHIVE_END = "%% archive:end %%"
INDENT = "  "


class HeaderLoader(yaml.SafeLoader):
    """SafeLoader that only reads true/false as booleans.

    Plain yes/no/on/off stay strings, so a title "Yes" or a column id "on"
    survives and ``kanban: yes`` is not taken as the board marker.
    """


HeaderLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:bool"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
HeaderLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


class BoardParseError(ValueError):
    """The text is not a readable board."""


class NotABoardError(BoardParseError):
    """The front-matter decoded fine but lacks ``kanban: true``."""


class LineKind(Enum):
    HEADING = "heading"
    CARD = "card"
    BLANK = "blank"
    ANCHOR = "anchor"
    DUE = "due"
    CONTINUATION = "continuation"
    OTHER = "other"


# Kinds that may follow a card line as part of its description block.
CONTINUATION_KINDS = frozenset({LineKind.BLANK, LineKind.ANCHOR, LineKind.DUE, LineKind.CONTINUATION})


class ScannedLine(NamedTuple):
    """One classified body line.

    ``text`` is the line with one indent level removed for continuation
    kinds, the raw line otherwise. ``id`` is None when the line carried no
    usable identifier.
    """

    kind: LineKind
    text: str
    id: str | None = None
    title: str = ""
    checked: bool = False
    due_date: str | None = None


def dedent_once(line: str) -> str:
    """Strip a single indent level (two spaces or one tab)."""
    if line.startswith(INDENT):
        return line[len(INDENT) :]
    if line.startswith("\t"):
        return line[1:]
    return line


def _split_card_rest(rest: str) -> tuple[str | None, str]:
    """Split "[id] title" into (id, title); invalid ids stay in the title."""
    match = _LEADING_ID.match(rest)
    if not match:
        return None, rest
    candidate = match.group(1).strip()
    if not candidate:
        return None, match.group(2)
    if is_valid_card_id(candidate):
        return candidate, match.group(2)
    return None, rest


def classify_line(line: str) -> ScannedLine:
    """Classify a body line as heading, card, description material, or other."""
    heading = _HEADING.match(line)
    if heading:
        col_id = (heading.group(1) or "").strip() or None
        return ScannedLine(LineKind.HEADING, line, id=col_id, title=heading.group(2).strip())

    card = _CARD.match(line)
    if card:
        card_id, title = _split_card_rest(card.group(2) or "")
        return ScannedLine(
            LineKind.CARD,
            line,
            id=card_id,
            title=title.strip(),
            checked=card.group(1).lower() == "x",
        )

    if not line.strip():
        return ScannedLine(LineKind.BLANK, dedent_once(line))

    if not (line.startswith(INDENT) or line.startswith("\t")):
        return ScannedLine(LineKind.OTHER, line)

    text = dedent_once(line)
    stripped = line.strip()
    if _ANCHOR.fullmatch(stripped):
        return ScannedLine(LineKind.ANCHOR, text, id=stripped[1:])
    due = _DUE.fullmatch(stripped)
    if due:
        return ScannedLine(LineKind.DUE, text, due_date=due.group(1))
    return ScannedLine(LineKind.CONTINUATION, text)


def scan_lines(text: str) -> list[ScannedLine]:
    """Classify every line of a body fragment."""
    return [classify_line(line) for line in normalize_newlines(text).split("\n")]


def is_due_line(text: str) -> bool:
    """True if the text, once trimmed, would be read back as a due line."""
    return _DUE.fullmatch(text.strip()) is not None


def split_front_matter(text: str) -> tuple[dict, str]:
    """Split the leading YAML block from the body.

    Raises BoardParseError when the block is missing, is not valid YAML,
    or does not decode to a mapping.
    """
    text = normalize_newlines(text).lstrip("\ufeff")
    match = _FRONT_MATTER.match(text)
    if not match:
        raise BoardParseError("Board is missing YAML front-matter.")

    try:
        meta = yaml.load(match.group(1) or "", Loader=HeaderLoader)
    except yaml.YAMLError as e:
        raise BoardParseError(f"Board front-matter could not be parsed as YAML: {e}") from e

    if not isinstance(meta, dict):
        raise BoardParseError("Board front-matter must be a YAML mapping.")

    return meta, text[match.end() :]


def dump_front_matter(meta: dict) -> str:
    """Render a mapping as a fenced YAML block, keys in insertion order."""
    body = yaml.safe_dump(meta, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return f"---\n{body.rstrip()}\n---"


def extract_archive(body: str) -> tuple[str | None, str]:
    """Pull the first archive block out of the body.

    Returns (archive_text, remaining_body). archive_text is None when the
    body has no complete start/end marker pair.
    """
    match = _ARCHIVE_BLOCK.search(body)
    if not match:
        return None, body
    return match.group(1), body[: match.start()] + body[match.end() :]
