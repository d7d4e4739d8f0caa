"""Declared ArbanTv schema.

Four collections back the video platform: creators (channel profiles),
videos, threaded comments and normalized tags. The collections themselves
are created in the Appwrite console; their IDs come from configuration.
"""

from arbantv_setup.core.config import Settings
from arbantv_setup.domain.entities.schema import (
    CollectionDescriptor,
    FieldDescriptor,
    FieldKind,
    IndexDescriptor,
    IndexKind,
)

TEXT = FieldKind.TEXT
INTEGER = FieldKind.INTEGER
BOOLEAN = FieldKind.BOOLEAN
TIMESTAMP = FieldKind.TIMESTAMP


CREATORS_FIELDS = (
    FieldDescriptor("user_id", TEXT, required=True, size=255),
    FieldDescriptor("channel_name", TEXT, required=True, size=256),
    FieldDescriptor("handle", TEXT, required=True, size=50),
    FieldDescriptor("avatar_url", TEXT, size=2048),
    FieldDescriptor("banner_url", TEXT, size=2048),
    FieldDescriptor("bio", TEXT, size=2000),
    FieldDescriptor("subscribers", INTEGER, required=True, default=0),
    FieldDescriptor("total_views", INTEGER, required=True, default=0),
    FieldDescriptor("is_verified", BOOLEAN, required=True, default=False),
)

CREATORS_INDEXES = (
    IndexDescriptor("user_id_index", IndexKind.KEY, ("user_id",)),
    IndexDescriptor("handle_index", IndexKind.UNIQUE, ("handle",)),
)

VIDEOS_FIELDS = (
    FieldDescriptor("title", TEXT, required=True, size=256),
    FieldDescriptor("description", TEXT, size=5000),
    FieldDescriptor("creator_id", TEXT, required=True, size=255),
    FieldDescriptor("video_file_id", TEXT, required=True, size=255),
    FieldDescriptor("thumbnail_url", TEXT, required=True, size=2048),
    FieldDescriptor("duration", INTEGER, required=True),
    FieldDescriptor("genre", TEXT, required=True, size=50),
    FieldDescriptor("tags", TEXT, size=5000, array=True),
    FieldDescriptor("status", TEXT, required=True, size=20, default="draft"),
    FieldDescriptor("view_count", INTEGER, required=True, default=0),
    FieldDescriptor("like_count", INTEGER, required=True, default=0),
    FieldDescriptor("is_premium", BOOLEAN, required=True, default=False),
    FieldDescriptor("release_date", TIMESTAMP, required=True),
)

VIDEOS_INDEXES = (
    IndexDescriptor("creator_index", IndexKind.KEY, ("creator_id",)),
    IndexDescriptor("status_genre_index", IndexKind.KEY, ("status", "genre")),
)

COMMENTS_FIELDS = (
    FieldDescriptor("video_id", TEXT, required=True, size=255),
    FieldDescriptor("user_id", TEXT, required=True, size=255),
    FieldDescriptor("content", TEXT, required=True, size=2000),
    # Set on replies only
    FieldDescriptor("parent_id", TEXT, size=255),
    FieldDescriptor("likes", INTEGER, required=True, default=0),
    FieldDescriptor("is_deleted", BOOLEAN, required=True, default=False),
)

COMMENTS_INDEXES = (
    IndexDescriptor("video_index", IndexKind.KEY, ("video_id",)),
    IndexDescriptor("parent_index", IndexKind.KEY, ("parent_id",)),
)

TAGS_FIELDS = (
    FieldDescriptor("name", TEXT, required=True, size=50),
    FieldDescriptor("count", INTEGER, required=True, default=0),
)

TAGS_INDEXES = (IndexDescriptor("name_index", IndexKind.UNIQUE, ("name",)),)


def build_collections(settings: Settings) -> list[CollectionDescriptor]:
    """Build the ArbanTv collection descriptors with their configured IDs.

    Args:
        settings: Settings holding the ``*_COLLECTION_ID`` values.

    Returns:
        Collections in the order they are applied.
    """
    return [
        CollectionDescriptor(
            collection_id=settings.creators_collection_id,
            name="Creators",
            summary="Channel profiles, stats, and verification",
            fields=CREATORS_FIELDS,
            indexes=CREATORS_INDEXES,
        ),
        CollectionDescriptor(
            collection_id=settings.videos_collection_id,
            name="Videos",
            summary="Video metadata, storage links, and engagement",
            fields=VIDEOS_FIELDS,
            indexes=VIDEOS_INDEXES,
        ),
        CollectionDescriptor(
            collection_id=settings.comments_collection_id,
            name="Comments",
            summary="Threaded comments for videos",
            fields=COMMENTS_FIELDS,
            indexes=COMMENTS_INDEXES,
        ),
        CollectionDescriptor(
            collection_id=settings.tags_collection_id,
            name="Tags",
            summary="Normalized tags for trending discovery",
            fields=TAGS_FIELDS,
            indexes=TAGS_INDEXES,
        ),
    ]
