"""
Forecast discussion text formatting.

Turns a raw Area Forecast Discussion (uppercase, line-wrapped meteorological
prose) into paragraph HTML with weather vocabulary highlighted.

Pipeline:
- clean_text: strip boilerplate and bullets, normalize whitespace
- segment_paragraphs: structural breaks, else sentence reconstruction
  around section keywords, else forced breaks for one huge block
- break_long_paragraph: re-chunk anything still over the length limit
- highlight: ordered vocabulary rules over the wrapped HTML
"""

import html
import logging
import re
from typing import List

from boatsafe.highlighting import highlight

logger = logging.getLogger(__name__)

MIN_FRAGMENT_LENGTH = 15
SENTENCES_PER_PARAGRAPH = 3
FORCED_SENTENCES_PER_PARAGRAPH = 2
FORCE_BREAK_LENGTH = 600
LONG_PARAGRAPH_LENGTH = 700
CHUNK_LENGTH = 350

# Keywords that typically start new discussion sections
SECTION_KEYWORDS = (
    "SYNOPSIS",
    "DISCUSSION",
    "TONIGHT",
    "TOMORROW",
    "SUNDAY",
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "MARINE",
    "AVIATION",
    "FIRE WEATHER",
    "SHORT TERM",
    "LONG TERM",
    "NEAR TERM",
    "EXTENDED",
    "FORECAST",
    "OUTLOOK",
    "UPDATE",
)

_SECTION_START = re.compile(
    r"^(?:" + "|".join(re.escape(k) for k in SECTION_KEYWORDS) + r")(?:\.\.\.)?",
    re.IGNORECASE,
)
_SENTENCE_BOUNDARY = re.compile(r"\.\s+")
_STRUCTURAL_BREAK = re.compile(r"\n\n+|\.{3,}")

_CLEANING_STEPS = [
    # usa.gov references and everything after them until the next section
    (re.compile(r"usa\.gov.*?(?=\n\n|\n\s*\n|\Z)", re.IGNORECASE | re.DOTALL), ""),
    # Bullet list lines that tend to follow those references
    (re.compile(r"^\s*[•·\-\*]\s*[^\n]*$", re.MULTILINE), ""),
    # Leftover inline bullet glyphs
    (re.compile(r"\s*[•·▪▫]\s*"), " "),
    (re.compile(r"[ \t]+"), " "),
    (re.compile(r"\n[ \t]+"), "\n"),
    (re.compile(r"\n{3,}"), "\n\n"),
]


def clean_text(text: str) -> str:
    """Remove boilerplate and normalize whitespace in a raw discussion."""
    if not text:
        return ""
    for pattern, replacement in _CLEANING_STEPS:
        text = pattern.sub(replacement, text)
    return text.strip()


def split_sentences(text: str) -> List[str]:
    """Split text on ". " boundaries, restoring the period on each sentence.

    The final piece keeps whatever punctuation it already had.
    """
    pieces = _SENTENCE_BOUNDARY.split(text)
    sentences = []
    for i, piece in enumerate(pieces):
        sentence = piece.strip()
        if not sentence:
            continue
        if i < len(pieces) - 1:
            sentence += "."
        sentences.append(sentence)
    return sentences


def sentence_count(paragraph: str) -> int:
    return len(_SENTENCE_BOUNDARY.split(paragraph))


def starts_new_section(sentence: str, current_paragraph: str) -> bool:
    """Check whether a sentence opens a new discussion section.

    Never true while no paragraph is accumulating.
    """
    if not current_paragraph:
        return False
    return bool(_SECTION_START.match(sentence))


def _join(current: str, sentence: str) -> str:
    return f"{current} {sentence}" if current else sentence


def rebuild_paragraphs(text: str) -> List[str]:
    """Reassemble unbroken text into paragraphs from its sentences.

    A paragraph ends before a sentence that starts a section keyword, or
    once it holds three sentences.
    """
    paragraphs: List[str] = []
    current = ""

    for sentence in split_sentences(text):
        if starts_new_section(sentence, current):
            if current.strip():
                paragraphs.append(current.strip())
            current = sentence
        else:
            current = _join(current, sentence)

        if sentence_count(current) >= SENTENCES_PER_PARAGRAPH:
            paragraphs.append(current.strip())
            current = ""

    if current.strip():
        paragraphs.append(current.strip())
    return paragraphs


def force_paragraph_breaks(text: str) -> List[str]:
    """Break one long block into paragraphs of two sentences, ignoring keywords."""
    paragraphs: List[str] = []
    current = ""

    for sentence in split_sentences(text):
        if current and sentence_count(current) >= FORCED_SENTENCES_PER_PARAGRAPH:
            paragraphs.append(current.strip())
            current = sentence
        else:
            current = _join(current, sentence)

    if current.strip():
        paragraphs.append(current.strip())
    return paragraphs


def segment_paragraphs(cleaned: str) -> List[str]:
    """Split cleaned discussion text into paragraphs."""
    pieces = _STRUCTURAL_BREAK.split(cleaned)

    if len(pieces) == 1:
        paragraphs = rebuild_paragraphs(cleaned)
    else:
        paragraphs = [
            p.strip() for p in pieces if len(p.strip()) > MIN_FRAGMENT_LENGTH
        ]

    if len(paragraphs) == 1 and len(paragraphs[0]) > FORCE_BREAK_LENGTH:
        paragraphs = force_paragraph_breaks(paragraphs[0])

    return paragraphs


def break_long_paragraph(paragraph: str) -> List[str]:
    """Chunk a long paragraph at sentence boundaries.

    A chunk is flushed when the next sentence would push it past 350
    characters or when that sentence opens a new section.
    """
    chunks: List[str] = []
    current = ""

    for sentence in split_sentences(paragraph):
        if current and (
            len(f"{current} {sentence}") > CHUNK_LENGTH
            or starts_new_section(sentence, current)
        ):
            chunks.append(current.strip())
            current = sentence
        else:
            current = _join(current, sentence)

    if current.strip():
        chunks.append(current.strip())
    return chunks


def split_long_paragraphs(paragraphs: List[str]) -> List[str]:
    """Apply break_long_paragraph to every paragraph over the length limit."""
    result: List[str] = []
    for paragraph in paragraphs:
        if len(paragraph) > LONG_PARAGRAPH_LENGTH:
            result.extend(break_long_paragraph(paragraph))
        else:
            result.append(paragraph)
    return result


def wrap_paragraph(paragraph: str) -> str:
    return f"<p>{html.escape(paragraph, quote=False)}</p>"


def format_text(text: str) -> str:
    """Format a raw discussion as highlighted paragraph HTML.

    Returns an empty string when there is nothing left after cleaning.
    """
    cleaned = clean_text(text)
    if not cleaned:
        return ""

    paragraphs = split_long_paragraphs(segment_paragraphs(cleaned))
    formatted = "".join(wrap_paragraph(p) for p in paragraphs)

    if not formatted:
        # Every structural fragment was too short to keep
        logger.debug("No paragraphs survived segmentation, wrapping cleaned text")
        formatted = "<p>{}</p>".format(
            html.escape(cleaned, quote=False).replace("\n", "<br>")
        )

    return highlight(formatted)
