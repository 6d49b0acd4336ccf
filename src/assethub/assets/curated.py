"""Curated demo image collection with keyword and fuzzy matching."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from assethub.assets.base import BaseSource, page_slice, picsum_image, total_pages
from assethub.assets.similarity import similarity
from assethub.models.assets import AssetSearchParams, AssetSearchResponse

log = logging.getLogger(__name__)

FUZZY_THRESHOLD = 0.6
MAX_PER_PAGE = 12


@dataclass(frozen=True)
class CuratedImage:
    id: str
    keywords: tuple[str, ...]
    description: str
    seed: int

    def has_keyword(self, query: str) -> bool:
        return query in self.keywords

    def matches(self, query: str) -> bool:
        return any(k in query or query in k for k in self.keywords)

    def fuzzy_matches(self, query: str) -> bool:
        return any(similarity(k, query) > FUZZY_THRESHOLD for k in self.keywords)


def _img(id: str, keywords: str, description: str, seed: int) -> CuratedImage:
    return CuratedImage(id, tuple(keywords.split()), description, seed)


COLLECTION: dict[str, list[CuratedImage]] = {
    "nature": [
        _img("forest-1", "forest tree green nature woods", "Misty forest landscape", 1015),
        _img("mountain-1", "mountain landscape nature sky peak", "Mountain peak at sunrise", 1018),
        _img("ocean-1", "ocean sea water blue waves", "Ocean waves crashing", 1022),
        _img("flower-1", "flower bloom nature colorful garden", "Colorful wildflowers", 1061),
        _img("sunset-1", "sunset sun sky nature golden", "Golden sunset over lake", 1073),
        _img("waterfall-1", "waterfall water nature rocks", "Cascading waterfall", 433),
    ],
    "animals": [
        _img("cat-1", "cat pet animal cute feline", "Adorable orange cat", 1074),
        _img("dog-1", "dog pet animal cute canine", "Happy golden retriever", 1025),
        _img("bird-1", "bird animal wildlife flying", "Bird in flight", 1069),
        _img("butterfly-1", "butterfly insect colorful nature", "Colorful butterfly", 1063),
        _img("ant-1", "ant insect bug tiny worker", "Ant carrying food", 1070),
        _img("elephant-1", "elephant animal wildlife large", "Majestic elephant", 1071),
    ],
    "technology": [
        _img("laptop-1", "laptop computer technology work", "Modern laptop on desk", 1181),
        _img("phone-1", "phone mobile smartphone technology", "Smartphone with apps", 1051),
        _img("coding-1", "code programming developer screen", "Code on screen", 1194),
        _img("robot-1", "robot ai artificial intelligence", "Futuristic robot", 1065),
        _img("circuit-1", "circuit electronics technology board", "Circuit board close-up", 1066),
    ],
    "business": [
        _img("office-1", "office business work corporate", "Modern office space", 1072),
        _img("meeting-1", "meeting business teamwork discussion", "Business meeting", 1180),
        _img("handshake-1", "handshake business deal partnership", "Professional handshake", 1184),
        _img("chart-1", "chart graph data analytics", "Business analytics", 1067),
    ],
    "food": [
        _img("pizza-1", "pizza food italian delicious", "Fresh pizza slice", 1080),
        _img("coffee-1", "coffee drink cafe morning", "Perfect coffee cup", 1058),
        _img("salad-1", "salad healthy vegetables fresh", "Fresh garden salad", 1059),
        _img("fruit-1", "fruit healthy colorful fresh", "Colorful fruit bowl", 1060),
    ],
    "travel": [
        _img("city-1", "city urban skyline buildings", "Modern city skyline", 1190),
        _img("beach-1", "beach vacation sand tropical", "Tropical beach paradise", 1076),
        _img("bridge-1", "bridge architecture travel landmark", "Iconic bridge view", 1077),
        _img("road-1", "road travel journey adventure", "Open road adventure", 1078),
    ],
}

ALL_IMAGES: list[CuratedImage] = [img for group in COLLECTION.values() for img in group]


def match_curated(query: str, images: list[CuratedImage] = ALL_IMAGES) -> list[CuratedImage]:
    """Return the entries relevant to *query*, exact keyword hits first.

    Substring hits (either direction) win; fuzzy similarity is only consulted
    when nothing matches that way.
    """
    query = query.lower()
    matches = [img for img in images if img.matches(query)]
    if not matches:
        matches = [img for img in images if img.fuzzy_matches(query)]
    # sorted() is stable, so ties keep collection order
    return sorted(matches, key=lambda img: not img.has_keyword(query))


class CuratedSource(BaseSource):
    name = "curated-demo"
    kind = "image"

    async def search(self, params: AssetSearchParams) -> AssetSearchResponse:
        per_page = min(params.per_page, MAX_PER_PAGE)
        matches = match_curated(params.query)
        start, end = page_slice(params.page, per_page)
        log.debug("Curated search %r: %d matches", params.query, len(matches))

        assets = [
            picsum_image(
                asset_id=f"curated-{img.id}",
                seed=img.seed,
                params=params,
                alt=img.description,
                tags=[*img.keywords, "curated", "demo"],
                source=self.name,
                color="#888888",
                attribution=f"Demo: {img.description}",
                license="Free for demo purposes",
            )
            for img in matches[start:end]
        ]
        return AssetSearchResponse(
            assets=assets,
            total=len(matches),
            total_pages=total_pages(len(matches), per_page),
            current_page=params.page,
            has_more=end < len(matches),
        )
