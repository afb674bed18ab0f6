"""Tests for DocumentLoader."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from folio.core.config import FolioConfig, PathsSettings, SiteSettings
from folio.core.exceptions import ParseError
from folio.core.loader import DocumentLoader


def test_date_falls_back_to_filename(config, write_post):
    write_post(
        "2015-02-13-a.md",
        """
        ---
        title: Ruby blocks
        categories: [ruby]
        ---
        Body
        """,
    )

    [doc] = DocumentLoader(config).load().documents

    assert doc.path == "2015-02-13-a.md"
    assert doc.slug == "a"
    assert doc.title == "Ruby blocks"
    assert doc.date == datetime(2015, 2, 13, tzinfo=UTC)
    assert doc.categories == frozenset({"ruby"})
    assert doc.layout == "post"
    assert doc.body.strip() == "Body"


def test_front_matter_date_wins_over_filename(config, write_post):
    write_post("2015-02-13-a.md", "---\ndate: 2016-03-04 10:00:00 +0200\n---\n")

    [doc] = DocumentLoader(config).load().documents

    assert doc.date == datetime(2016, 3, 4, 10, tzinfo=timezone(timedelta(hours=2)))


def test_undated_file_with_front_matter_date(config, write_post):
    write_post("about.md", "---\ntitle: About me\ndate: 2014-01-01\nlayout: page\n---\nHi\n")

    [doc] = DocumentLoader(config).load().documents

    assert doc.slug == "about"
    assert doc.layout == "page"
    assert doc.url == "/2014/01/01/about/"


def test_title_defaults_to_titleized_slug(config, write_post):
    write_post("2020-01-01-hello-go-world.md", "---\ncategories: []\n---\n")

    [doc] = DocumentLoader(config).load().documents

    assert doc.title == "Hello Go World"
    assert doc.categories == frozenset()


def test_unknown_keys_kept_as_metadata(config, write_post):
    write_post("2020-01-01-x.md", "---\ncomments: true\nauthor: Jane\n---\n")

    [doc] = DocumentLoader(config).load().documents

    assert doc.metadata == {"comments": True, "author": "Jane"}


def test_configured_default_layout_and_timezone(site_root, write_post):
    config = FolioConfig(
        site=SiteSettings(default_layout="article", timezone="America/Sao_Paulo"),
        paths=PathsSettings(site_root=site_root),
    )
    write_post("2020-06-01-x.md", "---\n---\n")

    [doc] = DocumentLoader(config).load().documents

    assert doc.layout == "article"
    assert doc.date.utcoffset() == timedelta(hours=-3)


class TestErrors:
    def test_missing_closing_marker_is_reported_not_skipped_silently(self, config, write_post, caplog):
        write_post("2015-02-13-good.md", "---\ntitle: Good\n---\n")
        write_post("2015-02-14-broken.md", "---\ntitle: Broken\nno closing marker\n")

        result = DocumentLoader(config).load()

        assert [d.path for d in result.documents] == ["2015-02-13-good.md"]
        assert [e.path for e in result.errors] == ["2015-02-14-broken.md"]
        assert not result.ok
        assert "2015-02-14-broken.md" in caplog.text

    def test_undeterminable_date(self, config, write_post):
        write_post("about.md", "---\ntitle: About\n---\n")

        [error] = DocumentLoader(config).load().errors

        assert error.path == "about.md"
        assert "no date" in error.reason

    def test_unparseable_front_matter_date(self, config, write_post):
        write_post("2015-02-13-a.md", "---\ndate: sometime soon\n---\n")

        [error] = DocumentLoader(config).load().errors

        assert "date" in error.reason

    def test_iter_documents_raises_without_error_sink(self, config, write_post):
        write_post("2015-02-14-broken.md", "---\ntitle: Broken\n")

        with pytest.raises(ParseError) as exc_info:
            list(DocumentLoader(config).iter_documents())

        assert exc_info.value.path == "2015-02-14-broken.md"


class TestDiscovery:
    def test_sorted_recursive_and_filtered(self, config, write_post, site_root):
        write_post("2015-02-13-b.markdown", "---\n---\n")
        write_post("ruby/2015-01-01-a.md", "---\n---\n")
        write_post("_drafts/2015-01-01-draft.md", "---\n---\n")
        write_post(".hidden.md", "---\n---\n")
        write_post("notes.txt", "not markdown")

        docs = DocumentLoader(config).load().documents

        assert [d.path for d in docs] == ["2015-02-13-b.markdown", "ruby/2015-01-01-a.md"]

    def test_missing_posts_dir_yields_nothing(self, tmp_path):
        config = FolioConfig(paths=PathsSettings(site_root=tmp_path / "nowhere"))

        assert DocumentLoader(config).load().documents == []

    def test_iteration_is_lazy(self, config, write_post, mocker):
        write_post("2015-02-13-a.md", "---\n---\n")
        write_post("2015-02-14-b.md", "---\n---\n")
        loader = DocumentLoader(config)
        parse_spy = mocker.spy(loader, "parse_file")

        iterator = loader.iter_documents()
        next(iterator)

        assert parse_spy.call_count == 1

    def test_reloading_is_deterministic(self, config, write_post):
        write_post("2015-02-13-a.md", "---\ncategories: [b, a]\n---\nText")
        write_post("2016-02-13-b.md", "---\ntitle: B\n---\n")
        loader = DocumentLoader(config)

        assert loader.load() == loader.load()


def test_parse_text_uses_given_path(config):
    doc = DocumentLoader(config).parse_text("---\ntitle: Inline\n---\nx", "2021-07-04-inline.md")

    assert doc.path == "2021-07-04-inline.md"
    assert doc.date == datetime(2021, 7, 4, tzinfo=UTC)
