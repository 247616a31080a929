"""
Data model for the News Broker

Plain frozen dataclasses. Nothing is persisted; every value lives for the
duration of one request. to_dict() produces the JSON wire shape.
"""
from dataclasses import dataclass, field
from typing import Optional


# ============================================================================
# Feeds
# ============================================================================

@dataclass(frozen=True)
class FeedDefinition:
    """
    A curated (query, domain set) bundle standing in for a trend source
    that has no API of its own.
    """
    feed_id: str
    name: str
    domains: tuple[str, ...]
    query: str
    homepage: Optional[str] = None
    content_type: Optional[str] = None

    def to_source_dict(self) -> dict:
        """Public listing shape used by GET /v1/sources."""
        data = {'feed_id': self.feed_id, 'name': self.name}
        if self.homepage:
            data['homepage'] = self.homepage
        if self.content_type:
            data['content_type'] = self.content_type
        return data


# ============================================================================
# Items
# ============================================================================

@dataclass(frozen=True)
class Classification:
    """
    Digital-first verdict for an item.

    digital_first is only ever True when excluded_reasons is empty.
    """
    digital_first: bool = False
    excluded_reasons: tuple[str, ...] = ()

    def __post_init__(self):
        if self.digital_first and self.excluded_reasons:
            raise ValueError('digital_first item cannot carry excluded_reasons')

    def to_dict(self) -> dict:
        return {
            'digital_first': self.digital_first,
            'excluded_reasons': list(self.excluded_reasons),
        }


@dataclass(frozen=True)
class Item:
    """Canonical article built from one provider record."""
    id: str
    title: str
    url: str
    source: str
    published_at: str
    snippet: str = ''
    labels: tuple[str, ...] = ()
    classification: Classification = field(default_factory=Classification)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'title': self.title,
            'url': self.url,
            'source': self.source,
            'published_at': self.published_at,
            'snippet': self.snippet,
            'labels': list(self.labels),
            'classification': self.classification.to_dict(),
        }


# ============================================================================
# Digest
# ============================================================================

@dataclass(frozen=True)
class DigestEntry:
    headline: str
    blurb: str
    urls: tuple[str, ...]

    def to_dict(self) -> dict:
        return {'headline': self.headline, 'blurb': self.blurb, 'urls': list(self.urls)}


@dataclass(frozen=True)
class Section:
    name: str
    items: tuple[DigestEntry, ...] = ()

    def to_dict(self) -> dict:
        return {'name': self.name, 'items': [entry.to_dict() for entry in self.items]}


@dataclass(frozen=True)
class Citation:
    url: str
    title: str
    source: str

    def to_dict(self) -> dict:
        return {'url': self.url, 'title': self.title, 'source': self.source}


@dataclass(frozen=True)
class Digest:
    """Sectioned, cited newsletter brief."""
    title: str
    generated_at: str
    sections: tuple[Section, ...] = ()
    citations: tuple[Citation, ...] = ()

    def to_dict(self) -> dict:
        return {
            'title': self.title,
            'generated_at': self.generated_at,
            'sections': [section.to_dict() for section in self.sections],
            'citations': [citation.to_dict() for citation in self.citations],
        }
