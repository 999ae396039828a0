"""Post Rules — per-type content validation for new posts.

Invariants:
    - validate_post_draft is PURE: returns an error descriptor or None, never raises
    - Shell (services/post_service.py) converts the descriptor into PostValidationError
    - article requires text content; photo/video require a media_url whose MIME
      prefix matches the type ("image/", "video/"), compared case-insensitively
    - MAX_MEDIA_BYTES (50 MiB) is the single source of truth for the size cap

Design Decisions:
    - Media bytes are stored by the external provider — only url/type/size reach us
    - Blank title/content normalize to None so the DB never holds "" for absent text
"""

from campus_connect.core.domain_types import PostType

MAX_MEDIA_BYTES: int = 50 * 1024 * 1024
MAX_TITLE_LENGTH: int = 200

_MEDIA_PREFIX: dict[PostType, str] = {
    PostType.PHOTO: "image/",
    PostType.VIDEO: "video/",
}
_MEDIA_LABEL: dict[PostType, str] = {
    PostType.PHOTO: "Image",
    PostType.VIDEO: "Video",
}


def clean_text(value: str | None) -> str | None:
    """Strip whitespace; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def normalize_media_type(value: str | None) -> str | None:
    """MIME types compare case-insensitively: strip and lowercase."""
    value = clean_text(value)
    return value.lower() if value else None


def _error(field: str, message: str) -> dict:
    return {"status": "error", "field": field, "message": message}


def validate_post_draft(
    post_type: PostType,
    title: str | None,
    content: str | None,
    media_url: str | None,
    media_type: str | None,
    media_size_bytes: int | None = None,
    max_media_bytes: int = MAX_MEDIA_BYTES,
) -> dict | None:
    """Check a post against its type rule. Pure — returns error dict or None."""
    title = clean_text(title)
    if title and len(title) > MAX_TITLE_LENGTH:
        return _error(
            "title", f"Title must be at most {MAX_TITLE_LENGTH} characters",
        )

    if post_type is PostType.ARTICLE:
        if not clean_text(content):
            return _error("content", "Article content is required")
        return None

    label = _MEDIA_LABEL[post_type]
    if not clean_text(media_url):
        return _error("media_url", f"{label} file is required")
    media_type = normalize_media_type(media_type)
    if media_type is None or not media_type.startswith(_MEDIA_PREFIX[post_type]):
        article = "an" if post_type is PostType.PHOTO else "a"
        return _error(
            "media_type", f"Please select {article} {label.lower()} file",
        )
    if media_size_bytes is not None and media_size_bytes > max_media_bytes:
        return _error(
            "media_size_bytes",
            f"File size must be less than {max_media_bytes // (1024 * 1024)}MB",
        )
    return None


def normalize_post_draft(
    post_type: PostType,
    title: str | None,
    content: str | None,
    media_url: str | None,
    media_type: str | None,
) -> dict:
    """Column values for a validated draft. Articles never carry media."""
    has_media = post_type is not PostType.ARTICLE
    return {
        "type": post_type.value,
        "title": clean_text(title),
        "content": clean_text(content),
        "media_url": clean_text(media_url) if has_media else None,
        "media_type": normalize_media_type(media_type) if has_media else None,
    }
