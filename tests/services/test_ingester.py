import logging

import pytest

from blog_content.errors import (
    ContentError,
    MalformedFieldError,
    SchemaError,
    SlugCollisionError,
)
from blog_content.services.ingester import (
    build_collection,
    discover_sources,
    validate_sources,
)
from tests.conftest import NOW, make_markdown, make_settings, write_post


def test_build_collection_indexes_every_post(tmp_path):
    write_post(
        tmp_path,
        "day01.md",
        make_markdown(
            title="[Az] Day 01: Setup pulumi developer account",
            pubDatetime="2025-01-01T12:00:00Z",
            tags=["AKS", "Private", "Pulumi"],
        ),
    )
    write_post(
        tmp_path,
        "nested/docker.md",
        make_markdown(title="Docker basics", postSlug="docker", draft=True),
    )

    collection = build_collection(make_settings(tmp_path))

    assert len(collection) == 2
    post = collection.by_slug("az-day-01-setup-pulumi-developer-account")
    assert post in list(collection.published(NOW))
    assert post in list(collection.by_tag("aks", NOW))
    assert collection.by_slug("docker").draft is True
    assert [p.slug for p in collection.published(NOW)] == [post.slug]


def test_discover_sources_skips_underscored_and_non_markdown(tmp_path):
    write_post(tmp_path, "b.md", "x")
    write_post(tmp_path, "a.md", "x")
    write_post(tmp_path, "_template.md", "x")
    write_post(tmp_path, "notes.txt", "x")
    write_post(tmp_path, "sub/c.md", "x")

    names = [p.relative_to(tmp_path).as_posix() for p in discover_sources(tmp_path)]

    assert names == ["a.md", "b.md", "sub/c.md"]


def test_discover_sources_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        discover_sources(tmp_path / "nope")


def test_validate_sources_returns_result_per_file(tmp_path):
    good = write_post(tmp_path, "good.md", make_markdown())
    bad = write_post(tmp_path, "bad.md", make_markdown(author=None))

    results = validate_sources([good, bad], timezone="UTC")

    assert [r.ok for r in results] == [True, False]
    assert results[0].post.title == "Hello World"
    assert results[0].error is None
    assert isinstance(results[1].error, SchemaError)
    assert results[1].post is None


def test_missing_author_aborts_ingestion(tmp_path, caplog):
    write_post(tmp_path, "fine.md", make_markdown(title="Fine"))
    path = write_post(tmp_path, "no-author.md", make_markdown(author=None))

    with caplog.at_level(logging.ERROR):
        with pytest.raises(SchemaError) as exc:
            build_collection(make_settings(tmp_path))

    assert exc.value.field == "author"
    assert exc.value.path == str(path)
    assert str(path) in caplog.text


def test_first_failure_in_path_order_is_raised(tmp_path, caplog):
    write_post(tmp_path, "a.md", make_markdown(pubDatetime="soon"))
    write_post(tmp_path, "b.md", make_markdown(author=None))

    with caplog.at_level(logging.ERROR):
        with pytest.raises(MalformedFieldError) as exc:
            build_collection(make_settings(tmp_path))

    assert exc.value.field == "pubDatetime"
    assert "a.md" in caplog.text
    assert "b.md" in caplog.text


def test_duplicate_post_slug_aborts_with_both_paths(tmp_path):
    first = write_post(tmp_path, "one.md", make_markdown(title="One", postSlug="hello"))
    second = write_post(tmp_path, "two.md", make_markdown(title="Two", postSlug="hello"))

    with pytest.raises(SlugCollisionError) as exc:
        build_collection(make_settings(tmp_path))

    assert exc.value.slug == "hello"
    assert set(exc.value.paths) == {str(first), str(second)}


def test_empty_directory_builds_empty_collection(tmp_path):
    collection = build_collection(make_settings(tmp_path))

    assert len(collection) == 0


def test_byte_order_mark_is_ignored(tmp_path):
    path = tmp_path / "bom.md"
    path.write_bytes(b"\xef\xbb\xbf" + make_markdown(title="Bom Post").encode("utf-8"))

    collection = build_collection(make_settings(tmp_path))

    assert collection.by_slug("bom-post").author == "Steven"


def test_undecodable_file_is_reported_with_its_path(tmp_path, caplog):
    write_post(tmp_path, "a-good.md", make_markdown(title="Good"))
    bad = tmp_path / "b-bad.md"
    bad.write_bytes(make_markdown(title="Bad").encode("utf-8") + b"\xff\xfe")

    with caplog.at_level(logging.ERROR):
        with pytest.raises(ContentError) as exc:
            build_collection(make_settings(tmp_path))

    assert isinstance(exc.value, MalformedFieldError)
    assert exc.value.field == "encoding"
    assert exc.value.path == str(bad)
    assert str(bad) in caplog.text


def test_validate_sources_wraps_unreadable_files(tmp_path):
    missing = tmp_path / "gone.md"

    results = validate_sources([missing], timezone="UTC")

    assert results[0].ok is False
    assert results[0].error.field == "encoding"
    assert results[0].error.path == str(missing)
