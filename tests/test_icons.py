from urllib.parse import unquote

from assethub.assets.icons import (
    ICON_CATEGORIES,
    ICON_PATHS,
    SimpleIconSource,
    get_icon_svg,
    match_categories,
    render_icon_svg,
    svg_data_url,
)
from assethub.models.assets import AssetSearchParams


def test_match_categories_substring():
    assert match_categories("Home") == ["home"]


def test_match_categories_query_contains_category():
    # "playlist" contains "play"
    assert "play" in match_categories("playlist")


def test_match_categories_falls_back_to_all():
    assert match_categories("zebra") == list(ICON_CATEGORIES)


def test_render_unknown_name_uses_default():
    assert render_icon_svg("wifi") == render_icon_svg("default")
    assert ICON_PATHS["default"] in render_icon_svg("nope")


def test_render_known_icon():
    svg = render_icon_svg("check")
    assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg"')
    assert ICON_PATHS["check"] in svg
    assert svg.endswith("</svg>")


def test_svg_data_url_round_trips():
    svg = render_icon_svg("star")
    url = svg_data_url(svg)
    assert url.startswith("data:image/svg+xml;charset=utf-8,")
    assert " " not in url
    assert unquote(url.split(",", 1)[1]) == svg


def test_get_icon_svg_other_prefix_is_default():
    assert get_icon_svg("material", "home") == render_icon_svg("default")
    assert get_icon_svg("simple", "home") == render_icon_svg("home")


async def test_icon_search():
    result = await SimpleIconSource().search(AssetSearchParams(query="heart", type="icon"))
    assert result.total == 1
    icon = result.assets[0]
    assert icon.type == "icon"
    assert icon.id == "icon-heart-0"
    assert icon.tags == ["heart", "icon", "simple", "heart"]
    assert icon.download_urls.svg == icon.url == icon.vector_url
    assert icon.sizes == [24]
    assert result.has_more is False


async def test_icon_search_fallback_pages():
    result = await SimpleIconSource().search(AssetSearchParams(query="zebra", per_page=50, page=2))
    assert result.total == len(ICON_CATEGORIES)
    assert result.total_pages == 2
    assert [a.id for a in result.assets] == [
        f"icon-{c}-{i}" for i, c in enumerate(ICON_CATEGORIES) if i >= 20
    ]
    assert result.has_more is False


async def test_icon_search_past_the_end():
    result = await SimpleIconSource().search(AssetSearchParams(query="zebra", page=5))
    assert result.assets == []
