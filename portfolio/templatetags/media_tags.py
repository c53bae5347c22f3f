# portfolio/templatetags/media_tags.py
from django import template

from portfolio.media import classify

register = template.Library()


@register.filter
def media_kind(value):
    """{{ project.image_url|media_kind }} -> "youtube" | "vimeo" | "video" | "image" | "none"."""
    return classify(value).kind.value


@register.inclusion_tag("portfolio/_media.html")
def media_block(value, title="", compact=False):
    """
    One media block for a stored reference. ``compact`` is the dashboard
    thumbnail: hosted videos show a placeholder instead of a player.
    """
    ref = classify(value)
    return {
        "media": ref,
        "kind": ref.kind.value,
        "src": ref.embed if ref else "",
        "title": title,
        "compact": compact,
        "hosted": ref.is_hosted_video,
    }
