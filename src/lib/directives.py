"""
Directive resolution for code blocks

Turns the directive sources carried by a code element into one immutable
DirectiveSet. Sources, highest precedence first:

1. Attribute fields (data-start-numbering, data-highlight-lines)
2. Info string tokens (the meta text after the language tag)
3. Class tokens (e.g., "showLineNumbers", "language-{2}", "no-line-numbers")
4. Caller defaults (settings)

Directive mini-language (case-insensitive, hyphens ignored in keys):
    showlinenumbers        number lines from 1
    showlinenumbers=<N>    number lines from N
    nolinenumbers          never number (beats every other source)
    {<ranges>}             highlight lines, e.g. {2,4-6}
    trimblanklines         drop a blank first/last line
    keepouterblankline     keep a blank first/last line

Malformed numbers and range items are ignored, never raised.

Example:
    >>> parser = DirectiveParser(meta="{2} showLineNumbers")
    >>> directives = parser.parse()
    >>> directives.numbering
    <LineNumbering.ON: 'on'>
    >>> directives.highlighted_is(2)
    True
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Set

from ..models.directives import (
    DirectiveSet,
    DirectiveToken,
    ExtractedDirectives,
    LineNumbering,
    LineRange,
    DIRECTIVE_KEYS,
    DIRECTIVE_ATTRIBUTES,
    SHOW_LINE_NUMBERS,
    NO_LINE_NUMBERS,
    TRIM_BLANK_LINES,
    KEEP_OUTER_BLANK_LINE,
    START_NUMBERING_ATTRIBUTE,
    HIGHLIGHT_LINES_ATTRIBUTE,
    LANGUAGE_PREFIX,
    directiveKey_normalize,
)
from ..models.tree import Element


RANGE_GROUP = re.compile(r'\{([\d\s,.\-]*)\}')
RANGE_ITEM = re.compile(r'(\d+)(?:(?:-|\.\.)(\d+))?')
NUMBER = re.compile(r'\d+')


def ranges_parse(text: Optional[str]) -> Set[LineRange]:
    """
    Parse a comma/dash range list into inclusive ranges of line numbers

    Args:
        text: Range text such as "2,4-6" or "1..3, 8" (None allowed)

    Returns:
        Set of LineRange; malformed items and zero are skipped

    Example:
        >>> sorted(ranges_parse("2,4-6"))
        [LineRange(first=2, last=2), LineRange(first=4, last=6)]
        >>> ranges_parse("")
        set()
    """
    lines: Set[LineRange] = set()
    if not text:
        return lines

    for item in re.sub(r'\s', '', text).split(','):
        match = RANGE_ITEM.fullmatch(item)
        if not match:
            continue
        first = int(match.group(1))
        last = int(match.group(2)) if match.group(2) else first
        if first > last:
            first, last = last, first
        if last < 1:
            continue
        lines.add(LineRange(max(first, 1), last))

    return lines


def number_parse(value: Any) -> Optional[int]:
    """
    Parse a start number, returning None for anything non-numeric

    Example:
        >>> number_parse("33")
        33
        >>> number_parse("true") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    text = str(value).strip().strip('"\'')
    if NUMBER.fullmatch(text):
        return int(text)
    return None


def token_parse(text: str) -> Optional[DirectiveToken]:
    """
    Parse one "key" or "key=value" word into a directive token

    Returns:
        DirectiveToken for recognized keys, None otherwise
    """
    key, _, value = text.partition('=')
    key = directiveKey_normalize(key)
    if key not in DIRECTIVE_KEYS:
        return None
    return DirectiveToken(key=key, value=value.strip() or None)


class DirectiveParser:
    """
    Resolver for the directives attached to one code element

    Handles:
    - Info string (meta) tokens and the first {...} range group
    - Directive class tokens, with or without a "language-" prefix
    - Attribute fields for start number and highlighted lines
    - Caller defaults, lowest precedence
    - Stripping directive markers from the element once applied
    """

    def __init__(
        self,
        meta: Optional[str] = None,
        classes: Optional[List[str]] = None,
        properties: Optional[Dict[str, Any]] = None,
        defaults: Optional[Iterable[str]] = None,
    ):
        """
        Initialize parser with directive sources

        Args:
            meta: Info string following the language tag
            classes: Class tokens of the code element
            properties: Attribute-like fields of the code element
            defaults: Canonical directive keys switched on by the caller

        Attributes:
            meta: Info string being parsed ("" when absent)
            classes: Class tokens being scanned
            properties: Attribute fields being read
            defaults: Default directive tokens
        """
        self.meta = meta or ''
        self.classes = list(classes or [])
        self.properties = dict(properties or {})
        self.defaults = [DirectiveToken(key=key) for key in (defaults or [])]

    @classmethod
    def fromElement(cls, code: Element, defaults: Optional[Iterable[str]] = None) -> "DirectiveParser":
        """Build a parser over a code element's meta, classes and properties"""
        return cls(
            meta=code.meta,
            classes=code.classes,
            properties=code.properties,
            defaults=defaults,
        )

    def meta_extract(self) -> ExtractedDirectives:
        """
        Extract directive tokens and the first range group from the info string

        Only braces holding range characters count as a group, so a
        placeholder such as {file} in a title is passed over.

        Example:
            Input meta: 'title="{file}.js" {1,3-4} showLineNumbers=5'
            Output: ExtractedDirectives(
                tokens=[DirectiveToken("showlinenumbers", "5")],
                ranges="1,3-4"
            )
        """
        meta = self.meta.lower()
        group = RANGE_GROUP.search(meta)
        ranges = group.group(1) if group else None

        tokens = []
        for word in RANGE_GROUP.sub(' ', meta).split():
            token = token_parse(word)
            if token:
                tokens.append(token)

        return ExtractedDirectives(tokens=tokens, ranges=ranges)

    def classes_extract(self) -> ExtractedDirectives:
        """
        Separate directive class tokens from ordinary classes

        A fenced block whose "language" is really a directive arrives as
        "language-showLineNumbers" or "language-{2}"; the prefix is ignored.

        Example:
            Input classes: ["language-{2}", "hljs", "no-line-numbers"]
            Output: ExtractedDirectives(
                tokens=[DirectiveToken("nolinenumbers")],
                ranges="2",
                remaining=["hljs"]
            )
        """
        extracted = ExtractedDirectives()

        for name in self.classes:
            body = name[len(LANGUAGE_PREFIX):] if name.startswith(LANGUAGE_PREFIX) else name

            group = RANGE_GROUP.match(body)
            if group:
                if extracted.ranges is None:
                    extracted.ranges = group.group(1)
                continue

            token = token_parse(body)
            if token:
                extracted.tokens.append(token)
            else:
                extracted.remaining.append(name)

        return extracted

    def start_resolve(self, meta: ExtractedDirectives, classes: ExtractedDirectives) -> Optional[int]:
        """
        Pick the start number by precedence: attribute, meta, then class

        Non-numeric candidates are skipped so a lower source can still apply.
        """
        candidates = [self.properties.get(START_NUMBERING_ATTRIBUTE)]
        candidates += meta.values(SHOW_LINE_NUMBERS)
        candidates += classes.values(SHOW_LINE_NUMBERS)

        for candidate in candidates:
            start = number_parse(candidate)
            if start is not None:
                return start
        return None

    def parse(self) -> DirectiveSet:
        """
        Resolve every directive source into one DirectiveSet

        Returns:
            Immutable DirectiveSet; check .is_noop before doing any work

        Example:
            >>> DirectiveParser(meta="{}").parse().is_noop
            True
            >>> DirectiveParser(meta="nolinenumbers", defaults=["showlinenumbers"]).parse().numbering
            <LineNumbering.OFF: 'off'>
        """
        meta = self.meta_extract()
        classes = self.classes_extract()
        sources = [meta, classes, ExtractedDirectives(tokens=self.defaults)]

        start = self.start_resolve(meta, classes)
        show = start is not None or any(source.has(SHOW_LINE_NUMBERS) for source in sources)

        if any(source.has(NO_LINE_NUMBERS) for source in sources) or not show:
            numbering = LineNumbering.OFF
        elif start is not None:
            numbering = LineNumbering.START_AT
        else:
            numbering = LineNumbering.ON

        ranges = meta.ranges if meta.ranges is not None else classes.ranges
        highlighted = ranges_parse(ranges)
        attribute_ranges = self.properties.get(HIGHLIGHT_LINES_ATTRIBUTE)
        if attribute_ranges is not None and not isinstance(attribute_ranges, bool):
            highlighted |= ranges_parse(str(attribute_ranges))

        return DirectiveSet(
            numbering=numbering,
            start=start if numbering is LineNumbering.START_AT else 1,
            highlighted=frozenset(highlighted),
            trim_blank_lines=any(source.has(TRIM_BLANK_LINES) for source in sources),
            keep_outer_blank_line=any(source.has(KEEP_OUTER_BLANK_LINE) for source in sources),
        )

    def markers_strip(self, code: Element) -> None:
        """
        Remove directive classes and attributes from the code element

        Only called once the directives are known to apply, so a no-op block
        keeps its markup untouched.
        """
        code.classes = self.classes_extract().remaining
        for name in DIRECTIVE_ATTRIBUTES:
            code.properties.pop(name, None)
