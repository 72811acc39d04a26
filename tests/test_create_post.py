from datetime import date

import pytest

import create_post
from create_post import (
    create_post as scaffold, format_display_date, generate_frontmatter, generate_html,
    generate_slug,
)

DAY = date(2026, 10, 19)


@pytest.mark.parametrize("title, slug", [
    ("Hello World", "hello-world"),
    ("Hello, World!", "hello-world"),
    ("  --Python 3.12: What's New?--", "python-3-12-what-s-new"),
    ("Ünïcode Títle", "n-code-t-tle"),
])
def test_generate_slug(title, slug):
    assert generate_slug(title) == slug


def test_frontmatter_has_metadata_and_starter_body():
    text = generate_frontmatter("My Post", DAY, author="Jane Doe")

    assert text.startswith("---\ntitle: My Post\ndate: 2026-10-19\nauthor: Jane Doe\ntags: []\n")
    assert "# My Post" in text
    assert "## Introduction" in text
    assert "## Conclusion" in text


def test_html_escapes_title_and_formats_dates():
    page = generate_html("<Tags> & More", DAY, "<p>body</p>")

    assert "<title>&lt;Tags&gt; &amp; More - Alex Castillo</title>" in page
    assert '<time datetime="2026-10-19">October 19, 2026</time>' in page
    assert "<p>body</p>" in page
    assert "<Tags>" not in page


def test_display_date_has_no_zero_padding():
    assert format_display_date(date(2024, 3, 5)) == "March 5, 2024"


def test_create_post_writes_markdown_and_html(tmp_path):
    blog_dir = tmp_path / "blog"

    markdown_path, html_path = scaffold("First Post!", blog_dir, day=DAY)

    assert markdown_path == blog_dir / "first-post.md"
    assert html_path == blog_dir / "first-post.html"
    assert "title: First Post!" in markdown_path.read_text(encoding="utf-8")
    assert "replace this placeholder" in html_path.read_text(encoding="utf-8")


def test_existing_post_is_not_overwritten_without_force(tmp_path):
    markdown_path, _ = scaffold("Post", tmp_path, day=DAY)
    markdown_path.write_text("edited", encoding="utf-8")

    with pytest.raises(FileExistsError):
        scaffold("Post", tmp_path, day=DAY)
    assert markdown_path.read_text(encoding="utf-8") == "edited"

    scaffold("Post", tmp_path, day=DAY, force=True)
    assert markdown_path.read_text(encoding="utf-8").startswith("---")


def test_title_without_usable_characters_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        scaffold("!!!", tmp_path)


def test_cli_creates_files_and_reports_failure(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert create_post.main(["CLI Post", "--blog-dir", "posts"]) == 0
    assert (tmp_path / "posts" / "cli-post.md").exists()
    assert (tmp_path / "posts" / "cli-post.html").exists()

    assert create_post.main(["CLI Post", "--blog-dir", "posts"]) == 1


def test_cli_requires_a_title():
    with pytest.raises(SystemExit):
        create_post.main([])


def test_cli_logs_to_the_requested_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert create_post.main(["Logged Post", "--log-file", "out/scaffold.log", "--verbose"]) == 0

    log_text = (tmp_path / "out" / "scaffold.log").read_text(encoding="utf-8")
    assert "Created markdown file" in log_text
    assert not (tmp_path / "logs").exists()
