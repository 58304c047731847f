"""Tests for bucket URL lookup and bucket name parsing."""

import pytest

from app.infra.models import ConfigORM
from app.services.config_service import (
    BUCKET_URL_KEY,
    extract_bucket_name,
    get_bucket_base_url,
    resolve_bucket_name,
)

from conftest import BUCKET_NAME, BUCKET_URL


class TestExtractBucketName:

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://jose-myawsbucket1.s3.us-east-2.amazonaws.com/", "jose-myawsbucket1"),
            ("http://my-bucket.s3.amazonaws.com/", "my-bucket"),
            ("https://assets.s3.eu-west-1.amazonaws.com/imagenes/", "assets"),
        ],
    )
    def test_matches_virtual_hosted_urls(self, url, expected):
        assert extract_bucket_name(url) == expected

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "https://s3.us-east-2.amazonaws.com/my-bucket/",
            "https://cdn.example.com/",
            "ftp://bucket.s3.amazonaws.com/",
        ],
    )
    def test_returns_none_when_pattern_does_not_match(self, url):
        assert extract_bucket_name(url) is None


class TestBucketBaseUrl:

    def test_empty_string_when_row_missing(self, db):
        assert get_bucket_base_url(db) == ""

    def test_reads_configured_value(self, db, bucket_config):
        assert get_bucket_base_url(db) == BUCKET_URL

    def test_other_keys_are_ignored(self, db):
        db.add(ConfigORM(key="OTHER", value="https://x.s3.amazonaws.com/"))
        db.commit()
        assert get_bucket_base_url(db) == ""


class TestResolveBucketName:

    def test_derived_from_config(self, db, bucket_config):
        assert resolve_bucket_name(db) == BUCKET_NAME

    def test_override_wins(self, db, bucket_config):
        assert resolve_bucket_name(db, "env-bucket") == "env-bucket"

    def test_none_without_config(self, db):
        assert resolve_bucket_name(db) is None

    def test_none_for_unparseable_url(self, db):
        db.add(ConfigORM(key=BUCKET_URL_KEY, value="https://cdn.example.com/"))
        db.commit()
        assert resolve_bucket_name(db) is None
