"""End-to-end tests for build_site."""

from pathlib import Path

import pytest

from folio.core.pipeline import build_site


@pytest.fixture
def blog(write_post):
    write_post(
        "2015-02-13-a.md",
        """
        ---
        title: Ruby blocks
        categories: [ruby]
        ---
        Blocks are closures.

        ```ruby
        [1, 2].each { |x| puts x }
        ```
        """,
    )
    write_post(
        "2024-05-01-b.md",
        """
        ---
        title: Go channels
        categories: [golang]
        ---
        Channels connect goroutines.
        """,
    )


def snapshot(root: Path) -> dict[str, bytes]:
    return {p.relative_to(root).as_posix(): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}


def test_two_post_example(config, blog):
    report = build_site(config)
    out = config.paths.abs_output_dir

    assert report.ok
    index = (out / "index.html").read_text(encoding="utf-8")
    assert index.index("Go channels") < index.index("Ruby blocks")

    ruby = (out / "category/ruby/index.html").read_text(encoding="utf-8")
    golang = (out / "category/golang/index.html").read_text(encoding="utf-8")
    assert "Ruby blocks" in ruby and "Go channels" not in ruby
    assert "Go channels" in golang and "Ruby blocks" not in golang

    post = (out / "2015/02/13/a/index.html").read_text(encoding="utf-8")
    assert '<code class="language-ruby">' in post
    assert (out / "feed.xml").exists()


def test_build_is_byte_identical_across_runs(config, blog):
    build_site(config)
    first = snapshot(config.paths.abs_output_dir)

    build_site(config)

    assert snapshot(config.paths.abs_output_dir) == first


def test_malformed_post_is_reported_and_left_out(config, blog, write_post):
    write_post("2023-01-01-broken.md", "---\ntitle: Broken post\ncategories: [ruby]\n")

    report = build_site(config)
    out = config.paths.abs_output_dir

    [error] = report.parse_errors
    assert error.path == "2023-01-01-broken.md"
    assert not report.ok
    for listing in ("index.html", "category/ruby/index.html", "feed.xml"):
        assert "Broken post" not in (out / listing).read_text(encoding="utf-8")
    assert not (out / "2023/01/01/broken").exists()


def test_unknown_layout_fails_only_that_post(config, blog, write_post):
    write_post("2020-01-01-c.md", "---\ntitle: Odd layout\nlayout: gallery\n---\n")

    report = build_site(config)
    out = config.paths.abs_output_dir

    [error] = report.render_errors
    assert error.path == "2020-01-01-c.md"
    assert not report.parse_errors
    assert (out / "2015/02/13/a/index.html").exists()
    assert (out / "2024/05/01/b/index.html").exists()
    assert not (out / "2020/01/01/c/index.html").exists()


def test_site_layouts_are_used(config, blog, write_layout):
    write_layout("post.html", "<main>{{ page.title }}|{{ content }}</main>")

    build_site(config)

    post = (config.paths.abs_output_dir / "2024/05/01/b/index.html").read_text(encoding="utf-8")
    assert post == "<main>Go channels|<p>Channels connect goroutines.</p></main>"


def test_dry_run_writes_nothing(config, blog):
    report = build_site(config, dry_run=True)

    assert report.pages
    assert report.written == []
    assert not config.paths.abs_output_dir.exists()


def test_report_summarizes_categories(config, blog):
    assert build_site(config).categories == {"ruby", "golang"}
