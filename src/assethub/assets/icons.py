"""Built-in outline icon set rendered as inline SVG."""

from __future__ import annotations

from urllib.parse import quote

from assethub.assets.base import BaseSource, total_pages
from assethub.models.assets import AssetSearchParams, AssetSearchResponse, Icon, IconDownloadUrls

MAX_PER_PAGE = 20

ICON_CATEGORIES: tuple[str, ...] = (
    "arrow", "check", "close", "home", "user", "settings", "search", "heart",
    "star", "plus", "minus", "edit", "delete", "save", "share", "download",
    "upload", "refresh", "play", "pause", "stop", "next", "previous",
    "volume", "mute", "wifi", "battery", "location", "calendar", "clock",
    "mail", "phone", "message", "camera", "image", "video", "file", "folder",
)

# Inner SVG markup on a 24x24 grid. Names without an entry render "default".
ICON_PATHS: dict[str, str] = {
    "arrow": '<path d="M5 12h14m-7-7l7 7-7 7"/>',
    "check": '<path d="M20 6L9 17l-5-5"/>',
    "close": '<path d="M18 6L6 18M6 6l12 12"/>',
    "home": '<path d="M3 9l9-7 9 7v11a2 2 0 01-2 2H5a2 2 0 01-2-2z"/><polyline points="9,22 9,12 15,12 15,22"/>',
    "user": '<path d="M20 21v-2a4 4 0 00-4-4H8a4 4 0 00-4 4v2"/><circle cx="12" cy="7" r="4"/>',
    "settings": (
        '<circle cx="12" cy="12" r="3"/><path d="M19.4 15a1.65 1.65 0 00.33 1.82l.06.06a2 2 0 010 2.83 '
        "2 2 0 01-2.83 0l-.06-.06a1.65 1.65 0 00-1.82-.33 1.65 1.65 0 00-1 1.51V21a2 2 0 01-2 2 2 2 0 "
        "01-2-2v-.09A1.65 1.65 0 009 19.4a1.65 1.65 0 00-1.82.33l-.06.06a2 2 0 01-2.83 0 2 2 0 "
        "010-2.83l.06-.06a1.65 1.65 0 00.33-1.82 1.65 1.65 0 00-1.51-1H3a2 2 0 01-2-2 2 2 0 "
        "012-2h.09A1.65 1.65 0 004.6 9a1.65 1.65 0 00-.33-1.82l-.06-.06a2 2 0 010-2.83 2 2 0 "
        "012.83 0l.06.06a1.65 1.65 0 001.82.33H9a1.65 1.65 0 001-1.51V3a2 2 0 012-2 2 2 0 "
        "012 2v.09a1.65 1.65 0 001 1.51 1.65 1.65 0 001.82-.33l.06-.06a2 2 0 012.83 0 2 2 0 "
        "010 2.83l-.06.06a1.65 1.65 0 00-.33 1.82V9a1.65 1.65 0 001.51 1H21a2 2 0 012 2 2 2 0 "
        '01-2 2h-.09a1.65 1.65 0 00-1.51 1z"/>'
    ),
    "search": '<circle cx="11" cy="11" r="8"/><path d="M21 21l-4.35-4.35"/>',
    "heart": (
        '<path d="M20.84 4.61a5.5 5.5 0 00-7.78 0L12 5.67l-1.06-1.06a5.5 5.5 0 00-7.78 7.78'
        'l1.06 1.06L12 21.23l7.78-7.78 1.06-1.06a5.5 5.5 0 000-7.78z"/>'
    ),
    "star": '<polygon points="12,2 15.09,8.26 22,9.27 17,14.14 18.18,21.02 12,17.77 5.82,21.02 7,14.14 2,9.27 8.91,8.26"/>',
    "plus": '<path d="M12 5v14m-7-7h14"/>',
    "minus": '<path d="M5 12h14"/>',
    "edit": (
        '<path d="M11 4H4a2 2 0 00-2 2v14a2 2 0 002 2h14a2 2 0 002-2v-7"/>'
        '<path d="M18.5 2.5a2.12 2.12 0 013 3L12 15l-4 1 1-4 9.5-9.5z"/>'
    ),
    "delete": (
        '<polyline points="3,6 5,6 21,6"/>'
        '<path d="M19 6v14a2 2 0 01-2 2H7a2 2 0 01-2-2V6m3 0V4a2 2 0 012-2h4a2 2 0 012 2v2"/>'
    ),
    "save": (
        '<path d="M19 21H5a2 2 0 01-2-2V5a2 2 0 012-2h11l5 5v11a2 2 0 01-2 2z"/>'
        '<polyline points="17,21 17,13 7,13 7,21"/><polyline points="7,3 7,8 15,8"/>'
    ),
    "share": (
        '<circle cx="18" cy="5" r="3"/><circle cx="6" cy="12" r="3"/><circle cx="18" cy="19" r="3"/>'
        '<path d="M8.59 13.51l6.83 3.98m-.01-10.98l-6.82 3.98"/>'
    ),
    "download": '<path d="M21 15v4a2 2 0 01-2 2H5a2 2 0 01-2-2v-4m4-5l5 5 5-5m-5-5v12"/>',
    "upload": '<path d="M21 15v4a2 2 0 01-2 2H5a2 2 0 01-2-2v-4m4-7l5-5 5 5m-5 10V3"/>',
    "default": '<circle cx="12" cy="12" r="10"/><path d="M8 12h8m-4-4v8"/>',
}

_SVG_TEMPLATE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" '
    'fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">'
    "{body}</svg>"
)


def render_icon_svg(name: str) -> str:
    return _SVG_TEMPLATE.format(body=ICON_PATHS.get(name, ICON_PATHS["default"]))


def svg_data_url(svg: str) -> str:
    # Same escaping as JavaScript's encodeURIComponent
    return "data:image/svg+xml;charset=utf-8," + quote(svg, safe="-_.!~*'()")


def match_categories(query: str) -> list[str]:
    """Categories matching *query* by substring, or every category when none do."""
    query = query.lower()
    matched = [c for c in ICON_CATEGORIES if c in query or query in c]
    return matched or list(ICON_CATEGORIES)


def get_icon_svg(prefix: str, name: str) -> str:
    """SVG markup for ``prefix/name``; only the ``simple`` set is built in."""
    if prefix == "simple":
        return render_icon_svg(name)
    return render_icon_svg("default")


class SimpleIconSource(BaseSource):
    name = "simple-icons"
    kind = "icon"

    async def search(self, params: AssetSearchParams) -> AssetSearchResponse:
        per_page = min(params.per_page, MAX_PER_PAGE)
        categories = match_categories(params.query)
        start = (params.page - 1) * per_page
        end = min(start + per_page, len(categories))

        icons = []
        for i in range(start, end):
            category = categories[i]
            data_url = svg_data_url(render_icon_svg(category))
            icons.append(Icon(
                id=f"icon-{category}-{i}",
                url=data_url,
                alt=f"{category} icon",
                tags=[category, "icon", "simple", params.query],
                source=self.name,
                category="general",
                style="outline",
                format="svg",
                sizes=[24],
                vector_url=data_url,
                download_urls=IconDownloadUrls(svg=data_url),
                attribution="Built-in icon collection",
                license="Free for commercial and personal use",
            ))

        return AssetSearchResponse(
            assets=icons,
            total=len(categories),
            total_pages=total_pages(len(categories), per_page),
            current_page=params.page,
            has_more=end < len(categories),
        )
