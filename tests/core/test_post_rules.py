"""Post Rules — per-type validation and normalization of drafts."""

from campus_connect.core.domain_types import PostType
from campus_connect.core.post_rules import (
    MAX_MEDIA_BYTES, clean_text, normalize_post_draft, validate_post_draft,
)


def test_article_requires_content():
    err = validate_post_draft(PostType.ARTICLE, "T", "   ", None, None)
    assert err["field"] == "content"
    assert err["message"] == "Article content is required"


def test_article_with_content_passes():
    assert validate_post_draft(PostType.ARTICLE, None, "Body", None, None) is None


def test_photo_requires_media_url():
    err = validate_post_draft(PostType.PHOTO, None, "caption", None, "image/png")
    assert err["field"] == "media_url"
    assert err["message"] == "Image file is required"


def test_video_requires_media_url():
    err = validate_post_draft(PostType.VIDEO, None, None, "", "video/mp4")
    assert err["message"] == "Video file is required"


def test_photo_rejects_non_image_mime():
    err = validate_post_draft(
        PostType.PHOTO, None, None, "https://cdn/x.mp4", "video/mp4",
    )
    assert err["field"] == "media_type"
    assert err["message"] == "Please select an image file"


def test_video_rejects_missing_mime():
    err = validate_post_draft(PostType.VIDEO, None, None, "https://cdn/x", None)
    assert err["message"] == "Please select a video file"


def test_media_size_cap():
    err = validate_post_draft(
        PostType.VIDEO, None, None, "https://cdn/x.mp4", "video/mp4",
        media_size_bytes=MAX_MEDIA_BYTES + 1,
    )
    assert err["field"] == "media_size_bytes"
    assert "50MB" in err["message"]
    assert validate_post_draft(
        PostType.VIDEO, None, None, "https://cdn/x.mp4", "video/mp4",
        media_size_bytes=MAX_MEDIA_BYTES,
    ) is None


def test_photo_caption_is_optional():
    assert validate_post_draft(
        PostType.PHOTO, None, None, "https://cdn/x.jpg", "image/jpeg",
    ) is None


def test_title_length_limit():
    err = validate_post_draft(PostType.ARTICLE, "x" * 201, "Body", None, None)
    assert err["field"] == "title"


def test_clean_text():
    assert clean_text(None) is None
    assert clean_text("   ") is None
    assert clean_text("  hi ") == "hi"


def test_normalize_drops_media_from_articles():
    row = normalize_post_draft(
        PostType.ARTICLE, "  ", " Body ", "https://cdn/x.jpg", "image/jpeg",
    )
    assert row == {
        "type": "article", "title": None, "content": "Body",
        "media_url": None, "media_type": None,
    }


def test_normalize_keeps_media_for_photos():
    row = normalize_post_draft(
        PostType.PHOTO, "Sunset", "", "https://cdn/x.jpg", "image/jpeg",
    )
    assert row["media_url"] == "https://cdn/x.jpg"
    assert row["media_type"] == "image/jpeg"
    assert row["content"] is None


def test_mime_prefix_is_case_insensitive():
    assert validate_post_draft(
        PostType.PHOTO, None, None, "https://cdn/x.png", " IMAGE/PNG ",
    ) is None
    assert validate_post_draft(
        PostType.VIDEO, None, None, "https://cdn/x.mp4", "Video/MP4",
    ) is None


def test_normalize_lowercases_media_type():
    row = normalize_post_draft(
        PostType.PHOTO, None, None, "https://cdn/x.png", " IMAGE/PNG ",
    )
    assert row["media_type"] == "image/png"


def test_blank_media_type_is_rejected():
    err = validate_post_draft(PostType.PHOTO, None, None, "https://cdn/x.png", "   ")
    assert err["message"] == "Please select an image file"
