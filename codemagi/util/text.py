# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
String manipulation utilities.

Every helper that returns a string treats None input as "" so results can be
concatenated without checks.
"""

import logging
import re
import unicodedata
from typing import Optional

from ..common.decorators import deprecated
from .values import is_empty

logger = logging.getLogger(__name__)

HTTP_LINK_PATTERN = re.compile(r'https?://\S*')
FTP_LINK_PATTERN = re.compile(r'ftp://\S*')
NON_WORD_PATTERN = re.compile(r'\W')

_HTML_ENTITIES = [
    ("&nbsp;", " "),
    ("&rsquo;", "'"),
    ("&lsquo;", "'"),
    ("&apos;", "'"),
    ("&#39;", "'"),
    ("&ndash;", "-"),
    ("&mdash;", "-"),
    ("&quot;", '"'),
    ("&ldquo;", '"'),
    ("&rdquo;", '"'),
    ("&amp;", "&"),
]

# Extended ASCII control characters dropped by unicode_to_html
_DROPPED_EXTENDED = {129, 141, 143, 144, 157}


def is_equal(first: Optional[str], second: Optional[str]) -> bool:
    """True when both strings are non-None and equal."""
    if first is None or second is None:
        return False
    return first == second


def html_entity_encode(s: Optional[str]) -> str:
    """
    HTML entity-encode a string for output sanitisation.
    ASCII letters and digits are kept; everything else becomes &#<code>;
    """
    if is_empty(s):
        return ""

    out = []
    for c in s:
        if 'a' <= c <= 'z' or 'A' <= c <= 'Z' or '0' <= c <= '9':
            out.append(c)
        else:
            out.append(f"&#{ord(c)};")
    return "".join(out)


def substring(s: Optional[str], begin: int, end: Optional[int] = None) -> str:
    """
    Substring that never raises.

    A negative or out-of-range begin index yields "", and an end index past
    the end of the string is clamped.
    """
    if is_empty(s):
        return ""
    if end is None:
        end = len(s)
    if begin > end or begin < 0 or begin > len(s):
        return ""
    return s[begin:end]


def right(s: Optional[str], length: int) -> str:
    """Return the last ``length`` characters; the whole string when length is out of range."""
    if is_empty(s):
        return ""
    if length <= 0 or length >= len(s):
        return s
    return s[-length:]


def init_cap(s: Optional[str]) -> str:
    """Upper-case the first letter of every word and lower-case the rest."""
    if is_empty(s):
        return ""

    out = []
    prev = '.'
    for c in s:
        if c.isalpha() and not prev.isalpha():
            c = c.upper()
        else:
            c = c.lower()
        prev = c
        out.append(c)
    return "".join(out)


def strip_punctuation(s: Optional[str]) -> str:
    """Remove every Unicode punctuation character."""
    if is_empty(s):
        return ""
    return "".join(c for c in s if not unicodedata.category(c).startswith('P'))


def strip_non_unicode(s: Optional[str]) -> str:
    """Remove code points that are unassigned in the Unicode database."""
    if is_empty(s):
        return ""
    return "".join(c for c in s if unicodedata.category(c) != 'Cn')


def strip_non_ascii(s: Optional[str]) -> str:
    if is_empty(s):
        return ""
    return "".join(c for c in s if ord(c) < 128)


def strip_html(s: Optional[str]) -> str:
    """
    Convert an HTML fragment to plain text.

    Paragraphs and list boundaries become line breaks, list items become
    " * " bullets, all tags are removed (including a trailing unclosed tag),
    and the common named entities are decoded.
    """
    if is_empty(s):
        return ""

    s = re.sub(r'(?i)<P.*?>', "\n\n", s)
    s = re.sub(r'(?i)<BR.*?>', "\n", s)
    s = re.sub(r'(?i)<UL.*?>', "\n", s)
    s = re.sub(r'(?i)<OL.*?>', "\n", s)
    s = re.sub(r'(?i)</UL>', "\n\n", s)
    s = re.sub(r'(?i)</OL>', "\n\n", s)
    s = re.sub(r'(?i)<LI.*?>', "\n * ", s)

    s = re.sub(r'<.*?>', "", s)
    s = re.sub(r'<.*', "", s)

    for entity, plain in _HTML_ENTITIES:
        s = s.replace(entity, plain)
    return s


def truncate(s: Optional[str], length: int, ellipsis: Optional[str] = "") -> str:
    """Cut a string to ``length`` characters, appending ``ellipsis`` only when it was cut."""
    if is_empty(s):
        return ""
    if len(s) <= length:
        return s
    return s[:length] + (ellipsis or "")


def truncate_words(s: Optional[str], length: int, ellipsis: Optional[str] = "") -> str:
    """
    Cut a string at the first non-word character at or after ``length``.

    Whole words are kept: ``truncate_words("The quick brown fox", 8, "...")``
    gives ``"The quick..."``. If no word boundary follows ``length`` the
    input is returned unchanged.
    """
    if is_empty(s):
        return ""
    if len(s) <= length:
        return s

    match = NON_WORD_PATTERN.search(s, max(length, 0))
    if match:
        return s[:match.start()] + (ellipsis or "")
    return s


def trim_non_numbers(s: Optional[str]) -> str:
    """Remove everything except digits."""
    if is_empty(s):
        return ""
    return "".join(c for c in s if c.isdigit())


def trim_punctuation(s: Optional[str]) -> str:
    """Remove everything except letters, digits and space characters."""
    if is_empty(s):
        return ""
    return "".join(
        c for c in s
        if c.isalnum() or unicodedata.category(c).startswith('Z')
    )


def trim(s: Optional[str]) -> str:
    if is_empty(s):
        return ""
    return s.strip()


def unquote(s: Optional[str]) -> str:
    """Trim whitespace, then remove leading and trailing double quotes."""
    output = trim(s)
    if not output:
        return ""
    return output.strip('"')


def paragraph_format(s: Optional[str], width: int) -> str:
    """
    Insert line breaks so lines run roughly ``width`` characters.

    Breaks happen only between whitespace-separated words, so a line may run
    past ``width`` and URLs are never split. Existing line breaks reset the
    column count.
    """
    if s is None:
        return ""

    output = []
    position = 0
    last_line_break = 0

    for token in re.findall(r'\S+\s*|\s+', s):
        position += len(token)

        if "\n" in token:
            last_line_break = position
        elif position > last_line_break + width:
            token = token.rstrip(" \t") + "\n"
            last_line_break = position

        output.append(token)

    return "".join(output)


def clean(s: Optional[str]) -> str:
    """Collapse runs of spaces to a single space and trim."""
    if is_empty(s):
        return ""
    return replace(s, "  ", " ", recursive=True).strip()


def format_html(s: Optional[str]) -> str:
    """Link http, https and ftp URLs and turn line breaks into <BR> tags."""
    if is_empty(s):
        return ""

    output = HTTP_LINK_PATTERN.sub(r'<A HREF="\g<0>">\g<0></A>', s)
    output = FTP_LINK_PATTERN.sub(r'<A HREF="\g<0>">\g<0></A>', output)

    output = output.replace("\r\n", "<BR>")
    output = output.replace("\n", "<BR>")
    output = output.replace("\r", "<BR>")
    return output


def to_upper(s: Optional[str]) -> str:
    if is_empty(s):
        return ""
    return s.upper()


def to_lower(s: Optional[str]) -> str:
    if is_empty(s):
        return ""
    return s.lower()


def concat(first: Optional[str], second: Optional[str], separator: Optional[str] = "") -> str:
    """Join two strings, placing the separator only when both are non-empty."""
    output = first or ""
    if not is_empty(first) and not is_empty(second):
        output += separator or ""
    if second is not None:
        output += second
    return output


def replace(s: Optional[str], target: str, replacement: Optional[str],
            recursive: bool = False) -> Optional[str]:
    """
    Replace every occurrence of ``target``.

    In recursive mode the scan restarts at the replacement point, so text
    produced by a replacement can match again ("   " -> " " when replacing
    two spaces with one).
    """
    if is_empty(s) or not target:
        return s

    replacement = replacement or ""
    if not recursive:
        return s.replace(target, replacement)

    if target in replacement:
        raise ValueError("recursive replacement must not contain the target")

    index = s.find(target)
    while index != -1:
        s = s[:index] + replacement + s[index + len(target):]
        index = s.find(target, index)
    return s


def escape_xml(s: Optional[str]) -> str:
    """Escape &, <, > and ' as entities and double quotes with a backslash."""
    if s is None:
        return ""
    s = s.replace("&", "&amp;")
    s = s.replace("<", "&lt;")
    s = s.replace(">", "&gt;")
    s = s.replace("'", "&apos;")
    s = s.replace('"', '\\"')
    return s


def unescape_xml(s: Optional[str]) -> str:
    """Reverse of escape_xml."""
    if s is None:
        return ""
    s = s.replace('\\"', '"')
    s = s.replace("&lt;", "<")
    s = s.replace("&gt;", ">")
    s = s.replace("&apos;", "'")
    s = s.replace("&amp;", "&")
    return s


@deprecated("Use escape_xml or html_entity_encode instead.")
def warp_html(s: Optional[str]) -> str:
    """Escape ampersands for browser display of form values."""
    if s is None:
        return ""
    return s.replace("&", "&amp;")


def _unicode_char_to_html(c: str, translate_ampersands: bool) -> str:
    code = ord(c)
    if code < 32 or code == 127:
        return ""
    if c == "&":
        return "&amp;" if translate_ampersands else "&"
    if code < 127:
        return c
    if code in _DROPPED_EXTENDED:
        return ""
    return f"&#{code};"


def unicode_to_html(s: Optional[str], preserve_full_html_tags: bool = False) -> str:
    """
    Replace non-ASCII characters with numeric HTML entities.

    ASCII control characters are dropped. Ampersands are escaped unless
    ``preserve_full_html_tags`` is set. Minor HTML tags survive as-is.
    """
    if s is None:
        return ""
    translate = not preserve_full_html_tags
    return "".join(_unicode_char_to_html(c, translate) for c in s)


def unicode_to_ascii(s: Optional[str]) -> str:
    """Replace every character above 127 with a space."""
    if s is None:
        return ""
    return "".join(c if ord(c) <= 127 else " " for c in s)


def bytes_to_hex_string(data: Optional[bytes]) -> str:
    """Render bytes as space-separated upper-case hex pairs ("0A FF ")."""
    if not data:
        return ""
    return "".join(f"{b:02X} " for b in data)


def escape_quotes(s: Optional[str]) -> str:
    if s is None:
        return ""
    return s.replace('"', "&quot;")


def single_quote(s: Optional[str], escape: str = "'") -> str:
    """Wrap in single quotes, prefixing embedded single quotes with ``escape``."""
    if is_empty(s):
        return ""
    return "'" + s.replace("'", escape + "'") + "'"


def filter_chars(s: Optional[str], chars: str) -> str:
    """Remove every character that appears in ``chars``."""
    if s is None:
        return ""
    if not chars:
        return s
    return s.translate({ord(c): None for c in chars})


def to_binary_string(s: Optional[str]) -> str:
    """Render the UTF-8 bytes of a string as concatenated 8-bit binary."""
    if s is None:
        return ""
    return "".join(f"{b:08b}" for b in s.encode('utf-8'))


def pad(s: Optional[str], length: int, char: str = " ") -> str:
    """Left-pad with ``char`` up to ``length``."""
    if s is None:
        s = ""
    if len(s) >= length:
        return s
    return char * (length - len(s)) + s


def pad_zeros(s: Optional[str], length: int) -> str:
    return pad(s, length, "0")


def diff(first: Optional[str], second: Optional[str]) -> str:
    """
    Line diff of two strings based on their longest common subsequence.

    Lines only in ``first`` are prefixed "< " and lines only in ``second``
    are prefixed "> ", one per output line.
    """
    x = (first or "").split("\n")
    y = (second or "").split("\n")
    m, n = len(x), len(y)

    # opt[i][j] = length of LCS of x[i:] and y[j:]
    opt = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m - 1, -1, -1):
        for j in range(n - 1, -1, -1):
            if x[i] == y[j]:
                opt[i][j] = opt[i + 1][j + 1] + 1
            else:
                opt[i][j] = max(opt[i + 1][j], opt[i][j + 1])

    output = []
    i = j = 0
    while i < m and j < n:
        if x[i] == y[j]:
            i += 1
            j += 1
        elif opt[i + 1][j] >= opt[i][j + 1]:
            output.append(f"< {x[i]}\n")
            i += 1
        else:
            output.append(f"> {y[j]}\n")
            j += 1

    while i < m:
        output.append(f"< {x[i]}\n")
        i += 1
    while j < n:
        output.append(f"> {y[j]}\n")
        j += 1

    logger.debug("diff produced %d changed lines", len(output))
    return "".join(output)
