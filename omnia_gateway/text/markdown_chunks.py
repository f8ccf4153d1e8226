"""
Markdown-aware splitting of streamed model text.

Chunks never cut through a markdown construct (code fence, header line,
list line, emphasis, inline code, link), so a client rendering partial text
never sees half a construct. Splitting is lossless: joining the chunks
gives back the input.
"""

import re
from typing import List

HEADER_RE = re.compile(r"#{1,6}\s")
BLOCKQUOTE_RE = re.compile(r">\s")
BULLET_RE = re.compile(r"\s*[•·∙‣⁃*\-]\s+")
NUMBERED_RE = re.compile(r"\s*\d+\.\s")
LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
WORD_RE = re.compile(r"\s*\S+\s*")

MARKDOWN_MARKERS = ("**", "`", "•", "#", ">", "[", "_", "*")


def _line(rest: str) -> str:
    end = rest.find("\n")
    return rest[:end + 1] if end > -1 else rest


def _delimited(rest: str, delimiter: str) -> str:
    """Span from the opening delimiter through the closing one, or the rest"""
    end = rest.find(delimiter, len(delimiter))
    return rest[:end + len(delimiter)] if end > -1 else rest


def _next_chunk(rest: str) -> str:
    if rest.startswith("```"):
        return _delimited(rest, "```")
    if HEADER_RE.match(rest) or BLOCKQUOTE_RE.match(rest):
        return _line(rest)
    if BULLET_RE.match(rest) or NUMBERED_RE.match(rest):
        return _line(rest)
    if rest.startswith("**"):
        return _delimited(rest, "**")
    if rest.startswith("_") and not rest.startswith("__"):
        return _delimited(rest, "_")
    if rest.startswith("*"):
        return _delimited(rest, "*")
    if rest.startswith("`"):
        return _delimited(rest, "`")
    if rest.startswith("["):
        match = LINK_RE.match(rest)
        return match.group(0) if match else rest
    return rest


def create_markdown_chunks(text: str) -> List[str]:
    """Split text into chunks that keep markdown constructs whole"""
    chunks = []
    pos = 0
    while pos < len(text):
        chunk = _next_chunk(text[pos:])
        chunks.append(chunk)
        pos += len(chunk)
    return chunks


def has_markdown(fragment: str) -> bool:
    return any(marker in fragment for marker in MARKDOWN_MARKERS)


def split_words(fragment: str) -> List[str]:
    """Word-by-word split; whitespace stays attached to the word before it"""
    if not fragment:
        return []
    words = WORD_RE.findall(fragment)
    return words or [fragment]


def stream_chunks(fragment: str) -> List[str]:
    """Segment one streamed fragment for incremental display.

    Markdown fragments go through create_markdown_chunks, plain text is
    emitted word by word. Whitespace-only pieces are folded into a
    neighbouring chunk. A fragment that is nothing but whitespace comes
    back as a single chunk.
    """
    if not fragment:
        return []

    pieces = create_markdown_chunks(fragment) if has_markdown(fragment) else split_words(fragment)

    chunks: List[str] = []
    pending = ""
    for piece in pieces:
        if piece.strip():
            chunks.append(pending + piece)
            pending = ""
        elif chunks:
            chunks[-1] += piece
        else:
            pending += piece

    if pending:
        chunks.append(pending)
    return chunks
