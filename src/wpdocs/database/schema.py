"""ORM mapping of the existing WordPress/WPML tables (read-only)."""

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# BIGINT ids as in WordPress; SQLite only autoincrements INTEGER primary keys.
BigId = BigInteger().with_variant(Integer, "sqlite")

TABLE_PREFIX = "www_"

POST_TYPE_POST = "post"
POST_TYPE_PAGE = "page"
POST_TYPE_ATTACHMENT = "attachment"
POST_STATUS_PUBLISH = "publish"
TAXONOMY_POST_TAG = "post_tag"

# WPML element_type values: "post_post", "post_page", ... and "tax_post_tag"
ELEMENT_TYPE_POST_PATTERN = "post_%"
ELEMENT_TYPE_TAG = "tax_post_tag"


class Post(Base):
    __tablename__ = f"{TABLE_PREFIX}posts"

    ID = Column(BigId, primary_key=True)
    post_type = Column(String(20), nullable=False, default=POST_TYPE_POST)
    post_status = Column(String(20), nullable=False, default=POST_STATUS_PUBLISH)
    post_title = Column(Text, nullable=False, default="")
    post_content = Column(Text, nullable=False, default="")
    post_parent = Column(BigId, nullable=False, default=0, index=True)
    menu_order = Column(Integer, nullable=False, default=0)
    post_date_gmt = Column(DateTime, nullable=True)  # naive UTC
    post_modified_gmt = Column(DateTime, nullable=True)  # naive UTC
    post_mime_type = Column(String(100), nullable=False, default="")
    guid = Column(String(255), nullable=False, default="")


class PostMeta(Base):
    __tablename__ = f"{TABLE_PREFIX}postmeta"

    meta_id = Column(BigId, primary_key=True)
    post_id = Column(BigId, nullable=False, index=True)
    meta_key = Column(String(255), nullable=True)
    meta_value = Column(Text, nullable=True)

    __table_args__ = (
        Index("idx_postmeta_key_value", "meta_key"),
    )


class IclTranslation(Base):
    """WPML translation groups: rows sharing a trid are translations of each other."""
    __tablename__ = f"{TABLE_PREFIX}icl_translations"

    translation_id = Column(Integer, primary_key=True)
    element_type = Column(String(36), nullable=True)
    element_id = Column(BigId, nullable=True, index=True)
    trid = Column(BigId, nullable=False, index=True)
    language_code = Column(String(7), nullable=False)


class IclLocaleMap(Base):
    __tablename__ = f"{TABLE_PREFIX}icl_locale_map"

    code = Column(String(7), primary_key=True)
    locale = Column(String(35), primary_key=True)


class MenuEntry(Base):
    """Top-level menu pages per language."""
    __tablename__ = f"{TABLE_PREFIX}menu"

    id = Column(Integer, primary_key=True)
    post_id = Column(BigId, nullable=False)
    label = Column(String(255), nullable=False, default="")
    lang = Column(String(7), nullable=False, index=True)


class Term(Base):
    __tablename__ = f"{TABLE_PREFIX}terms"

    term_id = Column(BigId, primary_key=True)
    name = Column(String(200), nullable=False, default="")
    slug = Column(String(200), nullable=False, default="")


class TermTaxonomy(Base):
    __tablename__ = f"{TABLE_PREFIX}term_taxonomy"

    term_taxonomy_id = Column(BigId, primary_key=True)
    term_id = Column(BigId, nullable=False, index=True)
    taxonomy = Column(String(32), nullable=False)
    description = Column(Text, nullable=False, default="")
    parent = Column(BigId, nullable=False, default=0)
    count = Column(BigId, nullable=False, default=0)


class TermRelationship(Base):
    __tablename__ = f"{TABLE_PREFIX}term_relationships"

    object_id = Column(BigId, primary_key=True)
    term_taxonomy_id = Column(BigId, primary_key=True)
    term_order = Column(Integer, nullable=False, default=0)


class CategoryFamily(Base):
    """Parent terms grouping categories into families (types, themes, regions)."""
    __tablename__ = f"{TABLE_PREFIX}categories"

    term_id = Column(BigId, primary_key=True)
    label = Column(String(50), nullable=False)
    lang = Column(String(7), nullable=False, index=True)


class DataWarehouseLink(Base):
    """Link from a category term to its I.Stat data warehouse id."""
    __tablename__ = f"{TABLE_PREFIX}docs_joindw"

    id_wp = Column(BigId, primary_key=True)
    id_dw = Column(String(100), nullable=True)


class BlacklistedTag(Base):
    __tablename__ = f"{TABLE_PREFIX}blacklisted_tags"

    term_id = Column(BigId, primary_key=True)


# postmeta keys read by this layer
META_SHORT_TITLE = "titolobreve"
META_SUBTITLE = "sottotitolo"
META_PERIOD_DESCRIPTION = "descrizioneperiodo"
META_DESCRIPTION = "news"
META_ABSTRACT = "news_rss"
META_IMAGE = "image"
META_PUBLICATION_DATE = "data_pubblicazione"  # YYYYMMDD
META_PERIOD_START = "inizioperiodo"  # YYYYMMDD
META_PERIOD_END = "fineperiodo"  # YYYYMMDD
META_LINKED_SIDEPOSTS = "docs_linkedSideposts"  # PHP-serialized box list
