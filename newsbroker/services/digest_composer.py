"""
Digest Composer

Ranks deduplicated items into four fixed newsletter sections and builds the
citation list.

Each section ranks the full candidate list independently, so a single item
can show up in more than one section. Scores are deliberately coarse: a
keyword hit scores MATCH_SCORE, anything else BASE_SCORE, so non-matching
items still fill short sections in their original order.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from newsbroker.models import Citation, Digest, DigestEntry, Item, Section
from newsbroker.services.item_normalizer import utc_now_iso

logger = logging.getLogger(__name__)

# Configuration
MATCH_SCORE = 4
BASE_SCORE = 1
MAX_CITATIONS = 200
BLURB_LIMIT = 400  # characters
DIGEST_TITLE = 'Digital-first brief'
SUMMARY_UNAVAILABLE = 'Summary unavailable.'


@dataclass(frozen=True)
class SectionDefinition:
    """A named bucket and the keywords that pull items into it."""
    name: str
    pattern: re.Pattern


SECTION_DEFINITIONS: tuple[SectionDefinition, ...] = (
    SectionDefinition(
        name='New digital-first launches',
        pattern=re.compile(
            r'\b(?:launch\w*|announc\w*|debut\w*|premier\w*|unveil\w*|introduc\w*|rolls? out|new)\b'
        ),
    ),
    SectionDefinition(
        name='Formats & creator series to watch',
        pattern=re.compile(
            r'\b(?:series|episod\w*|shorts|season\w*|format\w*|show|web series|vertical video|spinoff)\b'
        ),
    ),
    SectionDefinition(
        name='Platform moves & monetization',
        pattern=re.compile(
            r'\b(?:monetiz\w*|revenue\w*|payouts?|ads?|advertis\w*|polic\w*|algorithm\w*'
            r'|partner program|subscriptions?|fund|brand deals?|commerce)\b'
        ),
    ),
    SectionDefinition(
        name='Examples (what to steal—in a legal way)',
        pattern=re.compile(
            r'\b(?:case stud\w*|playbook\w*|lessons?|strateg\w*|how \w+ (?:grew|built|used|won)'
            r'|breakdown|examples?|tactics?|blueprint)\b'
        ),
    ),
)


def score(item: Item, section: SectionDefinition) -> int:
    """Keyword relevance of item for section."""
    text = f"{item.title} {item.snippet}".lower()
    return MATCH_SCORE if section.pattern.search(text) else BASE_SCORE


def truncate_blurb(text: str, limit: int = BLURB_LIMIT) -> str:
    """Truncate snippet text to the blurb limit."""
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + '…'


def render_entry(item: Item) -> DigestEntry:
    return DigestEntry(
        headline=item.title,
        blurb=truncate_blurb(item.snippet) if item.snippet else SUMMARY_UNAVAILABLE,
        urls=(item.url,),
    )


def build_section(
    items: Sequence[Item],
    section: SectionDefinition,
    max_items: int,
) -> Section:
    # sorted() is stable: ties keep dedup order
    ranked = sorted(items, key=lambda item: score(item, section), reverse=True)
    return Section(
        name=section.name,
        items=tuple(render_entry(item) for item in ranked[:max_items]),
    )


def build_citations(items: Sequence[Item], limit: int = MAX_CITATIONS) -> tuple[Citation, ...]:
    return tuple(
        Citation(url=item.url, title=item.title, source=item.source)
        for item in items[:limit]
    )


def compose(
    items: Sequence[Item],
    sections: Sequence[SectionDefinition] = SECTION_DEFINITIONS,
    max_items_per_section: int = 6,
    now: Optional[datetime] = None,
) -> Digest:
    """
    Compose a digest from deduplicated items.

    Args:
        items: Candidate items in dedup order
        sections: Section definitions, in output order
        max_items_per_section: Cap per section
        now: Composition time (defaults to current UTC time)

    Returns:
        Digest
    """
    items = list(items)
    max_items = max(0, int(max_items_per_section))

    built = tuple(build_section(items, section, max_items) for section in sections)
    digest = Digest(
        title=DIGEST_TITLE,
        generated_at=utc_now_iso(now),
        sections=built,
        citations=build_citations(items),
    )

    logger.info(
        f"Composed digest: {len(items)} items, "
        f"{sum(len(s.items) for s in built)} section entries, {len(digest.citations)} citations"
    )
    return digest
