#!/usr/bin/env python3
"""
Blog Post Scaffold
==================

Creates a new blog post as a Markdown file with front matter plus a
matching standalone HTML page, both named after the slug of the title.

Usage:
    python create_post.py "Post Title"
    python create_post.py "Post Title" --blog-dir blog --author "Jane Doe"
    python create_post.py "Post Title" --log-file logs/posts.log --verbose
    python create_post.py -h (for help)
"""

import argparse
import html
import logging
import re
import sys
from datetime import date as Date
from pathlib import Path
from typing import Optional, Tuple

from utils import setup_logging

DEFAULT_AUTHOR = "Alex Castillo"
DEFAULT_BLOG_DIR = "blog"
LOG_FILE = "logs/create_post.log"
DEFAULT_DESCRIPTION = "A brief description of this post"
PROFILE_URL = "https://github.com/AlexITC"
READING_TIME = "5 min read"
PLACEHOLDER_CONTENT = (
    '<p class="text-lg text-gray-600 dark:text-gray-300 mb-8">'
    "Please edit this HTML file and replace this placeholder with your actual "
    "blog post content.</p>"
)

MARKDOWN_TEMPLATE = """---
title: {title}
date: {date}
author: {author}
tags: []
description: {description}
---

# {title}

Your post content goes here...

## Introduction

Start writing your blog post content here.

## Conclusion

Wrap up your thoughts here.

---

*Have thoughts on this topic? Feel free to reach out to me through [GitHub]({profile_url}) or LinkedIn.*
"""

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title} - {author}</title>
    <meta name="description" content="{description}">
    <script src="https://cdn.tailwindcss.com"></script>
    <script>
        tailwind.config = {{
            darkMode: 'class',
            theme: {{
                extend: {{
                    colors: {{
                        primary: {{
                            50: '#eff6ff',
                            500: '#3b82f6',
                            600: '#2563eb',
                            700: '#1d4ed8',
                            900: '#1e3a8a'
                        }}
                    }}
                }}
            }}
        }}
    </script>
    <link rel="stylesheet" href="../style.css">
</head>
<body class="bg-gray-50 dark:bg-gray-900 text-gray-900 dark:text-gray-100 transition-colors duration-300">
    <header class="fixed top-0 left-0 right-0 bg-white/80 dark:bg-gray-900/80 backdrop-blur-md z-50 border-b border-gray-200 dark:border-gray-800">
        <nav class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8">
            <div class="flex justify-between items-center py-4">
                <div class="text-xl font-bold text-primary-600 dark:text-primary-400">
                    <a href="../index.html">{author}</a>
                </div>
                <div class="hidden md:flex space-x-8">
                    <a href="../index.html#home" class="hover:text-primary-600 dark:hover:text-primary-400 transition-colors">Home</a>
                    <a href="/blog/" class="text-primary-600 dark:text-primary-400 font-semibold">Blog</a>
                    <a href="../index.html#projects" class="hover:text-primary-600 dark:hover:text-primary-400 transition-colors">Projects</a>
                    <a href="../index.html#talks" class="hover:text-primary-600 dark:hover:text-primary-400 transition-colors">Talks</a>
                    <a href="../index.html#testimonials" class="hover:text-primary-600 dark:hover:text-primary-400 transition-colors">Testimonials</a>
                </div>
                <button id="theme-toggle" class="p-2 rounded-lg bg-gray-200 dark:bg-gray-800 hover:bg-gray-300 dark:hover:bg-gray-700 transition-colors">
                    <svg id="theme-toggle-dark-icon" class="hidden w-5 h-5" fill="currentColor" viewBox="0 0 20 20" xmlns="http://www.w3.org/2000/svg">
                        <path d="M17.293 13.293A8 8 0 016.707 2.707a8.001 8.001 0 1010.586 10.586z"></path>
                    </svg>
                    <svg id="theme-toggle-light-icon" class="hidden w-5 h-5" fill="currentColor" viewBox="0 0 20 20" xmlns="http://www.w3.org/2000/svg">
                        <circle cx="10" cy="10" r="4"></circle>
                    </svg>
                </button>
            </div>
        </nav>
    </header>

    <main class="pt-24 pb-16">
        <div class="max-w-4xl mx-auto px-4 sm:px-6 lg:px-8">
            <div class="mb-8">
                <a href="/blog/" class="text-primary-600 dark:text-primary-400 hover:underline flex items-center">Back to Blog</a>
            </div>

            <article>
                <div class="mb-8 pb-8 border-b border-gray-200 dark:border-gray-800">
                    <h1 class="text-3xl md:text-4xl font-bold mb-4">{title}</h1>
                    <div class="flex items-center text-gray-600 dark:text-gray-300">
                        <img src="{profile_url}.png" alt="{author}" class="w-10 h-10 rounded-full mr-3">
                        <div>
                            <p class="font-semibold">{author}</p>
                            <div class="flex items-center text-sm">
                                <time datetime="{date}">{display_date}</time>
                                <span class="mx-2">&bull;</span>
                                <span>{reading_time}</span>
                            </div>
                        </div>
                    </div>
                </div>

                <div class="prose prose-lg max-w-none dark:prose-invert">
                    {content}
                </div>
            </article>
        </div>
    </main>

    <footer class="bg-gray-900 dark:bg-gray-950 text-white py-12">
        <div class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8 text-center">
            <h2 class="text-2xl font-bold mb-4">Get In Touch</h2>
            <p class="text-gray-300 mb-8">Open to interesting conversations and collaboration opportunities</p>
            <p class="text-gray-400 text-sm">&copy; {year} {author}.</p>
        </div>
    </footer>

    <script src="../script.js"></script>
</body>
</html>
"""


def generate_slug(title: str) -> str:
    """Lowercase the title and collapse every run of other characters into '-'."""
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def format_date(day: Date) -> str:
    return day.isoformat()


def format_display_date(day: Date) -> str:
    """Long US form, e.g. 'October 19, 2026'."""
    return f"{day:%B} {day.day}, {day.year}"


def generate_frontmatter(title: str, day: Date, author: str = DEFAULT_AUTHOR) -> str:
    return MARKDOWN_TEMPLATE.format(
        title=title,
        date=format_date(day),
        author=author,
        description=DEFAULT_DESCRIPTION,
        profile_url=PROFILE_URL,
    )


def generate_html(title: str, day: Date, content: str, author: str = DEFAULT_AUTHOR) -> str:
    """
    Render the standalone post page. `content` is inserted as-is; the title
    and author are escaped.
    """
    return HTML_TEMPLATE.format(
        title=html.escape(title),
        author=html.escape(author),
        description=html.escape(DEFAULT_DESCRIPTION),
        date=format_date(day),
        display_date=format_display_date(day),
        reading_time=READING_TIME,
        profile_url=PROFILE_URL,
        content=content,
        year=day.year,
    )


def create_post(
    title: str,
    blog_dir,
    day: Optional[Date] = None,
    author: str = DEFAULT_AUTHOR,
    force: bool = False,
) -> Tuple[Path, Path]:
    """
    Write `<slug>.md` and `<slug>.html` into `blog_dir`.

    Returns the two paths. Raises ValueError when the title has no usable
    characters and FileExistsError when a post with that slug exists and
    `force` is not set.
    """
    slug = generate_slug(title)
    if not slug:
        raise ValueError(f"Cannot derive a file name from title {title!r}.")

    day = day or Date.today()
    blog_dir = Path(blog_dir)
    blog_dir.mkdir(parents=True, exist_ok=True)

    markdown_path = blog_dir / f"{slug}.md"
    html_path = blog_dir / f"{slug}.html"

    if not force:
        for path in (markdown_path, html_path):
            if path.exists():
                raise FileExistsError(f"{path} already exists (use --force to overwrite).")

    markdown_path.write_text(generate_frontmatter(title, day, author), encoding="utf-8")
    logging.info(f"Created markdown file: {markdown_path}")

    html_path.write_text(generate_html(title, day, PLACEHOLDER_CONTENT, author), encoding="utf-8")
    logging.info(f"Created HTML file: {html_path}")

    return markdown_path, html_path


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Create a new blog post (Markdown + HTML) from a title."
    )
    parser.add_argument("title", help="Title of the new post")
    parser.add_argument(
        "--blog-dir", default=DEFAULT_BLOG_DIR, help="Directory the post files are written to"
    )
    parser.add_argument("--author", default=DEFAULT_AUTHOR, help="Author shown on the post")
    parser.add_argument(
        "--force", action="store_true", help="Overwrite an existing post with the same slug"
    )
    parser.add_argument("--log-file", default=LOG_FILE, help="Where the run log is written")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    args = parser.parse_args(argv)

    setup_logging(log_file=args.log_file, level="DEBUG" if args.verbose else None)

    try:
        markdown_path, html_path = create_post(
            args.title, args.blog_dir, author=args.author, force=args.force
        )
    except (OSError, ValueError) as e:
        logging.error(f"Error creating blog post files: {e}")
        return 1

    slug = markdown_path.stem
    logging.info("Next steps:")
    logging.info(f"1. Edit {slug}.md with your blog post content")
    logging.info(f"2. Convert the markdown to HTML and update {slug}.html")
    logging.info(f"3. Update {Path(args.blog_dir) / 'index.html'} to include your new post")
    logging.info("4. Update the main index.html featured posts if needed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
